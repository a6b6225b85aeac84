"""Scene normalizer - turns raw batch items into canonical scenes."""

import json
from typing import Any

from .schemas import RawCharacter, RawScene, Scene
from .utils.text import clean_attribute, clean_for_json

DEFAULT_TIME_START = 0
DEFAULT_TIME_END = 5
PART_SEPARATOR = " | "


def _time_window(item: RawScene) -> tuple[int | float, int | float]:
    time = item.time
    start = time.start if time and time.start is not None else DEFAULT_TIME_START
    end = time.end if time and time.end is not None else DEFAULT_TIME_END
    return start, end


def _ambient_sounds(item: RawScene) -> list[str]:
    sounds = item.environment.ambient_sound if item.environment else None
    if sounds is None:
        return []
    if isinstance(sounds, str):
        return [sounds]
    return sounds


def _describe_character(character: RawCharacter) -> str:
    name = clean_attribute(character.name)
    appearance = clean_attribute(character.appearance)
    outfit = clean_attribute(character.outfit)
    emotion = clean_attribute(character.emotion)
    action = clean_attribute(character.actions.body_movement if character.actions else None)

    desc = name
    if appearance or outfit:
        desc += f" [{', '.join(part for part in (appearance, outfit) if part)}]"
    if emotion:
        desc += f" (Emotion: {emotion})"
    if action:
        desc += f" -> Action: {action}"
    return desc.strip()


def describe_scene(item: RawScene, scene_number: int) -> str:
    """Build the one-line human readable description of a scene."""
    start, end = _time_window(item)

    continuity = clean_attribute(item.continuity_reference)

    env = item.environment
    sounds = ", ".join(filter(None, map(clean_attribute, _ambient_sounds(item))))
    env_parts = []
    if env and clean_attribute(env.location):
        env_parts.append(f"Location: {clean_attribute(env.location)}")
    if env and clean_attribute(env.weather):
        env_parts.append(f"Weather: {clean_attribute(env.weather)}")
    if sounds:
        env_parts.append(f"Sound: {sounds}")

    characters = "; ".join(filter(None, map(_describe_character, item.characters)))

    camera = PART_SEPARATOR.join(
        filter(
            None,
            [
                clean_attribute(item.camera.shot_type) if item.camera else "",
                clean_attribute(item.camera.movement) if item.camera else "",
            ],
        )
    )

    style = clean_attribute(item.visual_style.style) if item.visual_style else ""
    lighting = clean_attribute(item.visual_style.lighting) if item.visual_style else ""
    style_parts = []
    if style:
        style_parts.append(f"Visual: {style}")
    if lighting:
        style_parts.append(f"Light: {lighting}")

    line = clean_attribute(item.dialogue.line) if item.dialogue else ""
    language = clean_attribute(item.dialogue.language) if item.dialogue else ""
    if line:
        dialogue = f'Dialogue ({language}): "{line}"' if language else f'Dialogue: "{line}"'
    else:
        dialogue = "Dialogue: none"

    parts = [
        f"Scene {scene_number} (Duration: {start}s - {end}s)",
        f"Continuity: {continuity}" if continuity else "",
        PART_SEPARATOR.join(env_parts),
        f"Characters: {characters}" if characters else "",
        f"Camera: {camera}" if camera else "",
        PART_SEPARATOR.join(style_parts),
        dialogue,
    ]
    return PART_SEPARATOR.join(part for part in parts if part)


def build_structured_prompt(item: RawScene, scene_number: int) -> dict[str, Any]:
    """Build the canonical JSON payload; every key is always present."""
    start, end = _time_window(item)
    env = item.environment
    camera = item.camera
    style = item.visual_style
    dialogue = item.dialogue

    return {
        "scene": scene_number,
        "time": {"start": start, "end": end},
        "continuity_reference": clean_for_json(item.continuity_reference),
        "environment": {
            "location": clean_for_json(env.location if env else None),
            "weather": clean_for_json(env.weather if env else None),
            "ambient_sound": [clean_for_json(sound) for sound in _ambient_sounds(item)],
        },
        "characters": [
            {
                "name": clean_for_json(character.name),
                "appearance": clean_for_json(character.appearance),
                "outfit": clean_for_json(character.outfit),
                "emotion": clean_for_json(character.emotion),
                "actions": {
                    "body_movement": clean_for_json(character.actions.body_movement if character.actions else None),
                },
            }
            for character in item.characters
        ],
        "camera": {
            "shot_type": clean_for_json(camera.shot_type if camera else None),
            "movement": clean_for_json(camera.movement if camera else None),
        },
        "visual_style": {
            "style": clean_for_json(style.style if style else None),
            "lighting": clean_for_json(style.lighting if style else None),
        },
        "dialogue": {
            "line": clean_for_json(dialogue.line if dialogue else None),
            "language": clean_for_json(dialogue.language if dialogue else None),
        },
    }


def normalize_scene(item: RawScene, scene_number: int) -> Scene:
    """Convert one raw item into a ``Scene`` with the given number."""
    payload = build_structured_prompt(item, scene_number)
    return Scene(
        scene_number=scene_number,
        script_description=describe_scene(item, scene_number),
        structured_prompt=json.dumps(payload, ensure_ascii=False),
        freeform_prompt=clean_for_json(item.wishk_prompt),
    )


def normalize_batch(items: list[RawScene], start_index: int) -> list[Scene]:
    """Normalize a batch, numbering scenes contiguously from ``start_index``.

    Any scene index supplied by the model is ignored.
    """
    return [normalize_scene(item, start_index + position) for position, item in enumerate(items)]
