"""Services for scene script generation using the generators package.

These are the only entry points callers need: ``generate_script`` for a fresh
script, ``extend_script`` to continue an existing one, and ``check_api_key``
to confirm a credential before either. The credential is always passed in;
nothing here reads stored keys.
"""

from typing import Any, Callable

from pydantic import ValidationError

from .constants import DEFAULT_PROMPT_COUNT, EXTENSION_SUMMARY, START_OF_VIDEO
from .generators.continuity import build_fingerprint
from .generators.exceptions import GenerationExhaustedError, InvalidInputError
from .generators.graph import graph, recursion_limit_for
from .generators.schemas import GenerationOptions, Scene, Script
from .generators.services.gemini_client import get_generation_llm, validate_api_key
from .generators.state import RunState
from .generators.utils.logging import log, log_separator

ProgressCallback = Callable[[str], None]


def _coerce_options(options: GenerationOptions | dict[str, Any]) -> GenerationOptions:
    if isinstance(options, GenerationOptions):
        return options
    try:
        return GenerationOptions.model_validate(options)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid generation options: {e}") from e


def _parse_count(value: Any) -> int | None:
    """Return ``value`` as a positive integer, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        count = value
    elif isinstance(value, str):
        try:
            count = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return count if count > 0 else None


def resolve_target_count(value: Any) -> int:
    """Target for a fresh run; absent or invalid counts fall back to the default."""
    count = _parse_count(value)
    if count is None:
        log(f"Invalid prompt count {value!r}, using {DEFAULT_PROMPT_COUNT}", "WARNING")
        return DEFAULT_PROMPT_COUNT
    return count


def _build_initial_state(options: GenerationOptions) -> RunState:
    """Build initial state for a fresh script."""
    return {
        "options": options,
        "mode": "generate",
        "idea_context": options.idea,
        "target_count": resolve_target_count(options.prompt_count),
        "start_scene_number": 1,
        "scenes": [],
        "continuity_state": START_OF_VIDEO,
        "story_summary": "",
        "raw_batch": None,
        "batch_summary": "",
        "batch_error": None,
        "consecutive_failures": 0,
        "error": None,
        "status": "pending",
    }


def _build_extension_state(
    last_scene: Scene,
    extension_idea: str,
    count: int,
    options: GenerationOptions,
) -> RunState:
    """Build initial state for extending a script after ``last_scene``."""
    return {
        "options": options,
        "mode": "extend",
        "idea_context": f"{options.idea}. EXTENSION IDEA: {extension_idea}",
        "target_count": count,
        "start_scene_number": last_scene.scene_number + 1,
        "scenes": [],
        "continuity_state": build_fingerprint(last_scene, include_camera=False),
        # Extensions never learn a summary; the placeholder is sent every batch
        "story_summary": EXTENSION_SUMMARY,
        "raw_batch": None,
        "batch_summary": "",
        "batch_error": None,
        "consecutive_failures": 0,
        "error": None,
        "status": "pending",
    }


def _run(state: RunState, api_key: str, on_progress: ProgressCallback | None) -> RunState:
    """Run the batch loop and raise if the circuit breaker tripped."""
    config = {
        "configurable": {
            "llm": get_generation_llm(api_key),
            "on_progress": on_progress,
        },
        "recursion_limit": recursion_limit_for(state["target_count"]),
    }

    final_state = graph.invoke(state, config)

    if final_state.get("error"):
        raise GenerationExhaustedError(final_state["error"])
    return final_state


def generate_script(
    options: GenerationOptions | dict[str, Any],
    api_key: str,
    on_progress: ProgressCallback | None = None,
) -> Script:
    """Generate a continuity-locked script from a single idea.

    Args:
        options: Generation options (or a dict of them)
        api_key: Google AI Studio API key
        on_progress: Optional callback receiving human readable progress

    Returns:
        Script with exactly the requested number of scenes, numbered from 1

    Raises:
        InvalidInputError: If the options or key are unusable
        GenerationExhaustedError: After too many consecutive failed batches
    """
    options = _coerce_options(options)
    log_separator("Script Generation Started")

    state = _build_initial_state(options)
    log(f"Idea: {options.idea}")
    log(f"Target: {state['target_count']} scenes | Style: {options.video_style} | Camera: {options.prompt_type.value}")

    final_state = _run(state, api_key, on_progress)

    script = Script(story_summary=final_state["story_summary"], scenes=final_state["scenes"])
    log(f"Script generated: {len(script.scenes)} scenes", "SUCCESS")
    return script


def extend_script(
    last_scene: Scene,
    extension_idea: str,
    count: int,
    options: GenerationOptions | dict[str, Any],
    api_key: str,
    on_progress: ProgressCallback | None = None,
) -> list[Scene]:
    """Generate ``count`` scenes continuing seamlessly after ``last_scene``.

    Returns:
        New scenes numbered ``last_scene.scene_number + 1`` onwards

    Raises:
        InvalidInputError: If the count, idea, options or anchor scene are unusable
        GenerationExhaustedError: After too many consecutive failed batches
    """
    options = _coerce_options(options)

    target = _parse_count(count)
    if target is None:
        raise InvalidInputError(f"Extension needs a positive scene count, got {count!r}")
    if not extension_idea or not extension_idea.strip():
        raise InvalidInputError("Extension idea must not be empty")

    log_separator("Script Extension Started")
    state = _build_extension_state(last_scene, extension_idea.strip(), target, options)
    log(f"Anchor: scene {last_scene.scene_number} | Adding {target} scenes")
    log(f"Extension idea: {extension_idea.strip()}")

    final_state = _run(state, api_key, on_progress)

    log(f"Script extended by {len(final_state['scenes'])} scenes", "SUCCESS")
    return final_state["scenes"]


def check_api_key(api_key: str) -> bool:
    """Probe a Google AI Studio key; used before activation and before each run."""
    return validate_api_key(api_key)
