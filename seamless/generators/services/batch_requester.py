"""Batch requester - asks Gemini for the next few scenes of a script."""

import json
import re

from langchain_core.messages import BaseMessage
from pydantic import ValidationError

from ...constants import BATCH_SIZE, START_OF_VIDEO
from ..exceptions import EmptyResponseError, InvalidInputError, MalformedJsonError
from ..prompts import (
    BATCH_PROMPT,
    CAMERA_RULES,
    FIRST_BATCH_CONTEXT,
    NEXT_BATCH_CONTEXT,
    get_dialogue_rule,
)
from ..schemas import BatchEnvelope, BatchResult, GenerationOptions
from ..utils.logging import log, log_json, log_prompt
from .gemini_client import invoke_text

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*)```")


def build_batch_messages(
    options: GenerationOptions,
    start_scene_number: int,
    batch_size: int,
    continuity_state: str,
    story_summary: str,
    idea_context: str,
) -> list[BaseMessage]:
    """Compose the instruction message for one batch.

    Args:
        options: Options of the run
        start_scene_number: Number of the first scene to generate
        batch_size: Scenes to request (1-5)
        continuity_state: Fingerprint of the previous scene
        story_summary: Running story summary
        idea_context: Core idea; for extensions the merged original and extension idea

    Returns:
        A single human message ready for the model
    """
    if not 1 <= batch_size <= BATCH_SIZE:
        raise InvalidInputError(f"Batch size must be between 1 and {BATCH_SIZE}, got {batch_size}")
    if start_scene_number < 1:
        raise InvalidInputError(f"Start scene number must be at least 1, got {start_scene_number}")
    if start_scene_number > 1 and continuity_state == START_OF_VIDEO:
        raise InvalidInputError("The start-of-video fingerprint is only valid for Scene 1")

    if start_scene_number == 1:
        context = FIRST_BATCH_CONTEXT.format(idea=options.idea)
    else:
        context = NEXT_BATCH_CONTEXT.format(
            idea=idea_context,
            summary=story_summary,
            continuity=continuity_state,
            start=start_scene_number,
        )

    return BATCH_PROMPT.format_messages(
        start=start_scene_number,
        end=start_scene_number + batch_size - 1,
        count=batch_size,
        context=context,
        camera_rule=CAMERA_RULES[options.prompt_type],
        dialogue_rule=get_dialogue_rule(options.dialogue_language),
        aspect_ratio=options.aspect_ratio,
        video_style=options.video_style,
        dialogue_language=options.dialogue_language.value,
    )


def parse_batch_envelope(text: str) -> BatchEnvelope:
    """Parse the model reply into the batch envelope.

    Raises:
        EmptyResponseError: If the reply has no text
        MalformedJsonError: If the reply is not a JSON object
    """
    if not text or not text.strip():
        raise EmptyResponseError("API returned empty response")

    candidate = text.strip()
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        # Only a reply that is not JSON as a whole may be a fenced block
        fenced = _FENCED_JSON.search(candidate)
        if not fenced:
            raise MalformedJsonError(f"Response is not valid JSON: {e}") from e
        try:
            data = json.loads(fenced.group(1).strip())
        except json.JSONDecodeError as fenced_error:
            raise MalformedJsonError(f"Response is not valid JSON: {fenced_error}") from fenced_error

    if not isinstance(data, dict):
        raise MalformedJsonError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return BatchEnvelope.model_validate(data)
    except ValidationError as e:
        raise MalformedJsonError(f"Unexpected response structure: {e}") from e


def request_batch(
    llm,
    options: GenerationOptions,
    start_scene_number: int,
    batch_size: int,
    continuity_state: str,
    story_summary: str,
    idea_context: str,
) -> BatchResult:
    """Request ``batch_size`` scenes starting at ``start_scene_number``.

    Returns:
        Raw scenes plus the updated summary (falls back to ``story_summary``)
    """
    messages = build_batch_messages(
        options,
        start_scene_number,
        batch_size,
        continuity_state,
        story_summary,
        idea_context,
    )
    log(f"Requesting scenes {start_scene_number}-{start_scene_number + batch_size - 1}")
    log_prompt(messages[0].content, f"Batch prompt @ scene {start_scene_number}")

    text = invoke_text(llm, messages)
    envelope = parse_batch_envelope(text)
    log_json(envelope.model_dump(exclude_none=True), "Batch envelope")

    summary = envelope.story_summary or story_summary or ""
    log(f"Batch returned {len(envelope.scenes)} scene items")
    return BatchResult(scenes=envelope.scenes, summary=summary)
