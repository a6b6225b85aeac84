"""Error handler node - aborts a run whose circuit breaker tripped."""

from ...constants import MSG_EXTENSION_EXHAUSTED, MSG_GENERATION_EXHAUSTED
from ..state import RunState
from ..utils.logging import log, log_separator


def handle_error(state: RunState) -> dict:
    """Record why the run is aborted. Accepted scenes are not returned."""
    log_separator("Error Handling")

    template = MSG_GENERATION_EXHAUSTED if state["mode"] == "generate" else MSG_EXTENSION_EXHAUSTED
    error = template.format(target=state["target_count"], failures=state["consecutive_failures"])
    log(f"Error occurred: {error}", "ERROR")

    return {
        "error": error,
        "status": "error",
    }
