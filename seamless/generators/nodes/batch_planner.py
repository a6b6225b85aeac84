"""Batch planner node - requests the next batch of scenes from Gemini."""

from langchain_core.runnables import RunnableConfig

from ...constants import BATCH_SIZE, MSG_BATCH_STARTED
from ..exceptions import BatchExhaustedError
from ..services.retry import request_batch_with_retry
from ..state import RunState
from ..utils.logging import log, log_separator
from ..utils.progress import report_progress


def request_scene_batch(state: RunState, config: RunnableConfig) -> dict:
    """Request up to ``BATCH_SIZE`` scenes continuing the accepted ones.

    The Gemini model and the progress callback are read from
    ``config["configurable"]``. A batch that fails every retry is recorded as
    ``batch_error`` for the failure node instead of aborting the run.
    """
    done = len(state["scenes"])
    target = state["target_count"]
    remaining = target - done
    batch_size = min(BATCH_SIZE, remaining)
    start = state["start_scene_number"] + done

    log_separator(f"Batch: scenes {start}-{start + batch_size - 1}")
    report_progress(config, MSG_BATCH_STARTED.format(batch_size=batch_size, done=done, target=target))

    configurable = config.get("configurable", {})

    try:
        result = request_batch_with_retry(
            configurable["llm"],
            state["options"],
            start,
            batch_size,
            state["continuity_state"],
            state["story_summary"],
            state["idea_context"],
            on_progress=configurable.get("on_progress"),
        )
    except BatchExhaustedError as e:
        log(f"Batch exhausted: {e}", "ERROR")
        return {
            "raw_batch": None,
            "batch_error": str(e),
            "status": "batch_failed",
        }

    return {
        "raw_batch": result.scenes,
        "batch_summary": result.summary,
        "batch_error": None,
        "status": "batch_received",
    }
