"""Batch acceptor nodes - fold a batch outcome into the run state."""

import time

from langchain_core.runnables import RunnableConfig

from ...constants import BATCH_PACING_SEC, FAILED_BATCH_PAUSE_SEC, MAX_CONSECUTIVE_FAILURES, MSG_BATCH_FAILED
from ..continuity import build_fingerprint
from ..normalizer import normalize_batch
from ..state import RunState
from ..utils.logging import log
from ..utils.progress import report_progress


def accept_batch(state: RunState) -> dict:
    """Normalize the received batch and append it to the accepted scenes.

    Scenes are numbered from the running index, truncated to what is still
    missing, and the tail scene becomes the new continuity fingerprint. A
    batch without usable scenes counts as a failure for the circuit breaker.
    """
    done = len(state["scenes"])
    remaining = state["target_count"] - done
    start = state["start_scene_number"] + done

    processed = normalize_batch(state.get("raw_batch") or [], start)
    to_add = processed[:remaining]
    if len(processed) > remaining:
        log(f"Model returned {len(processed)} scenes, keeping the first {remaining}", "WARNING")

    updates: dict = {"raw_batch": None}

    if not state["story_summary"] and state.get("batch_summary"):
        updates["story_summary"] = state["batch_summary"]
        log(f"Story summary: {state['batch_summary'][:100]}")

    if to_add:
        updates["scenes"] = to_add
        updates["continuity_state"] = build_fingerprint(to_add[-1], include_camera=state["mode"] == "generate")
        updates["consecutive_failures"] = 0
        updates["status"] = "batch_accepted"
        log(f"Accepted scenes {to_add[0].scene_number}-{to_add[-1].scene_number}", "SUCCESS")
    else:
        updates["consecutive_failures"] = state["consecutive_failures"] + 1
        updates["status"] = "batch_empty"
        log("Batch returned 0 usable scenes", "WARNING")

    if remaining - len(to_add) > 0:
        time.sleep(BATCH_PACING_SEC)
    else:
        updates["status"] = "completed"

    return updates


def record_failure(state: RunState, config: RunnableConfig) -> dict:
    """Count a failed batch and report it; the run continues unless the breaker trips."""
    failures = state["consecutive_failures"] + 1
    report_progress(config, MSG_BATCH_FAILED.format(error=state.get("batch_error")), "WARNING")
    log(f"Consecutive failed batches: {failures}/{MAX_CONSECUTIVE_FAILURES}")

    if failures < MAX_CONSECUTIVE_FAILURES:
        time.sleep(FAILED_BATCH_PAUSE_SEC)

    return {
        "consecutive_failures": failures,
        "batch_error": None,
        "status": "batch_failed",
    }
