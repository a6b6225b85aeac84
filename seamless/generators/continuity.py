"""Continuity fingerprint of the last accepted scene.

The fingerprint is plain text embedded verbatim into the next batch prompt.
It steers the model; nothing parses it back.
"""

from pydantic import ValidationError

from .exceptions import InvalidInputError
from .schemas import RawScene, Scene
from .utils.text import clean_attribute


def parse_structured_prompt(scene: Scene) -> RawScene:
    """Read a scene's structured prompt back into the raw scene model."""
    try:
        return RawScene.model_validate_json(scene.structured_prompt)
    except ValidationError as e:
        raise InvalidInputError(
            f"Scene {scene.scene_number} has no valid structured prompt: {e.errors()[0]['msg']}"
        ) from e


def build_fingerprint(scene: Scene, include_camera: bool = True) -> str:
    """Summarize how ``scene`` ends visually.

    Args:
        scene: Last accepted scene
        include_camera: Add the camera shot line (fresh generation runs only)

    Returns:
        Labeled multi-line fingerprint
    """
    payload = parse_structured_prompt(scene)
    lead = payload.characters[0] if payload.characters else None
    env = payload.environment

    lines = [
        f"LAST SCENE NUMBER: {scene.scene_number}",
        f"LAST LOCATION: {clean_attribute(env.location if env else None)}",
        f"LAST ACTION: {clean_attribute(lead.actions.body_movement if lead and lead.actions else None)}",
        f"LAST OUTFIT: {clean_attribute(lead.outfit if lead else None)}",
    ]
    if include_camera:
        lines.append(f"LAST CAMERA: {clean_attribute(payload.camera.shot_type if payload.camera else None)}")
    return "\n".join(lines)
