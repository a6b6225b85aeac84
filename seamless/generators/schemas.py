"""Pydantic models for scene generation.

Two layers live here:

* The raw layer (``Raw*`` and ``BatchEnvelope``) mirrors what Gemini sends
  back. Every field is optional and validation never rejects a scene for a
  wrong leaf type: scalars are coerced to text, wrongly shaped sub-objects
  become ``None`` and non-object list entries are dropped.
* The canonical layer (``GenerationOptions``, ``Scene``, ``Script``) is what
  callers hand in and get back.
"""

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .prompts import DEFAULT_ASPECT_RATIO, DEFAULT_VIDEO_STYLE, DialogueLanguage, PromptType


# === Lenient coercion helpers ===
def _coerce_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _coerce_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("s"))
        except ValueError:
            return None
        if value.is_integer():
            return int(value)
    if isinstance(value, float):
        # inf and nan have no JSON form
        return value if math.isfinite(value) else None
    return None


def _object_or_none(value: Any) -> Any:
    return value if isinstance(value, (dict, BaseModel)) else None


def _objects_only(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


def _coerce_sounds(value: Any) -> list[str] | str | None:
    if isinstance(value, list):
        return [text for text in map(_coerce_text, value) if text is not None]
    return _coerce_text(value)


def _count_or_none(value: Any) -> int | str | None:
    # Unusable counts become None; a fresh run then uses the default
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return None
    return value


Text = Annotated[str | None, BeforeValidator(_coerce_text)]
Number = Annotated[int | float | None, BeforeValidator(_coerce_number)]


# === Raw model output ===
class RawTime(BaseModel):
    """Time window of a scene in seconds."""

    start: Number = None
    end: Number = None


class RawEnvironment(BaseModel):
    """Where the scene happens."""

    location: Text = None
    weather: Text = None
    ambient_sound: Annotated[list[str] | str | None, BeforeValidator(_coerce_sounds)] = None


class RawCharacterActions(BaseModel):
    body_movement: Text = None


class RawCharacter(BaseModel):
    """Character as described by the model for one scene."""

    name: Text = None
    appearance: Text = None
    outfit: Text = None
    emotion: Text = None
    actions: Annotated[RawCharacterActions | None, BeforeValidator(_object_or_none)] = None


class RawCamera(BaseModel):
    shot_type: Text = None
    movement: Text = None


class RawVisualStyle(BaseModel):
    style: Text = None
    lighting: Text = None


class RawDialogue(BaseModel):
    line: Text = None
    language: Text = None


class RawScene(BaseModel):
    """One scene item exactly as the model returned it.

    ``scene`` is kept for logging only; numbering is always reassigned by the
    normalizer.
    """

    scene: Number = None
    time: Annotated[RawTime | None, BeforeValidator(_object_or_none)] = None
    continuity_reference: Text = None
    environment: Annotated[RawEnvironment | None, BeforeValidator(_object_or_none)] = None
    characters: Annotated[list[RawCharacter], BeforeValidator(_objects_only)] = Field(default_factory=list)
    camera: Annotated[RawCamera | None, BeforeValidator(_object_or_none)] = None
    visual_style: Annotated[RawVisualStyle | None, BeforeValidator(_object_or_none)] = None
    dialogue: Annotated[RawDialogue | None, BeforeValidator(_object_or_none)] = None
    wishk_prompt: Text = None


class BatchEnvelope(BaseModel):
    """Top-level JSON object returned for one batch."""

    story_summary: Text = None
    scenes: Annotated[list[RawScene], BeforeValidator(_objects_only)] = Field(default_factory=list)


class BatchResult(BaseModel):
    """Parsed batch handed from the requester to the orchestrator."""

    scenes: list[RawScene] = Field(default_factory=list)
    summary: str = ""


# === Canonical records ===
class GenerationOptions(BaseModel):
    """Input of one generation run, shared by all of its batches."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    idea: str = Field(min_length=1, description="Core idea of the video")
    prompt_count: Annotated[int | str | None, BeforeValidator(_count_or_none)] = Field(
        default=None, description="Number of scenes to generate"
    )
    video_style: str = Field(default=DEFAULT_VIDEO_STYLE, description="Visual style, e.g. 'Cinematic'")
    dialogue_language: DialogueLanguage = Field(default=DialogueLanguage.NONE)
    prompt_type: PromptType = Field(default=PromptType.DEFAULT)
    aspect_ratio: str = Field(default=DEFAULT_ASPECT_RATIO)


class Scene(BaseModel):
    """One numbered scene of a script."""

    model_config = ConfigDict(frozen=True)

    scene_number: int = Field(ge=1)
    script_description: str = Field(description="Human readable summary line")
    structured_prompt: str = Field(description="Canonical JSON prompt for the video model")
    freeform_prompt: str = Field(default="", description="Optional descriptive prompt")


class Script(BaseModel):
    """Story summary plus ordered scenes."""

    story_summary: str = ""
    scenes: list[Scene] = Field(default_factory=list)

    @property
    def last_scene(self) -> Scene | None:
        return self.scenes[-1] if self.scenes else None

    def structured_prompts_text(self) -> str:
        """All structured prompts separated by a blank line."""
        return "\n\n".join(scene.structured_prompt for scene in self.scenes)

    def freeform_prompts_text(self) -> str:
        """All non-empty freeform prompts separated by a blank line."""
        return "\n\n".join(scene.freeform_prompt for scene in self.scenes if scene.freeform_prompt)
