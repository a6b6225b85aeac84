"""State definition for the LangGraph batch generation loop."""

import operator
from typing import Annotated, Literal, TypedDict

from .schemas import GenerationOptions, RawScene, Scene

RunMode = Literal["generate", "extend"]


class RunState(TypedDict):
    """State of one generate or extend run.

    Lives only for the duration of a single graph invocation.
    """

    # User input
    options: GenerationOptions
    mode: RunMode
    idea_context: str  # original idea, merged with the extension idea when extending

    # Target accounting
    target_count: int
    start_scene_number: int  # 1 for fresh scripts, anchor + 1 for extensions

    # Accepted scenes (uses reducer for accumulation)
    scenes: Annotated[list[Scene], operator.add]

    # Continuity threaded into the next batch prompt
    continuity_state: str
    story_summary: str  # fixed once non-empty

    # Latest batch (from request_batch node)
    raw_batch: list[RawScene] | None
    batch_summary: str
    batch_error: str | None

    # Circuit breaker
    consecutive_failures: int

    # Error handling
    error: str | None

    # Status tracking
    status: str
