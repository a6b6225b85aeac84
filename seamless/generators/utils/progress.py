"""Progress reporting for graph nodes."""

from langchain_core.runnables import RunnableConfig

from .logging import log


def report_progress(config: RunnableConfig | None, message: str, level: str = "INFO") -> None:
    """Log ``message`` and forward it to the caller's ``on_progress`` callback.

    The callback travels in ``config["configurable"]["on_progress"]``; it is
    fire-and-forget and may be absent.
    """
    log(message, level)
    callback = (config or {}).get("configurable", {}).get("on_progress")
    if callback is not None:
        callback(message)
