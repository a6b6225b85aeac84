"""Retry wrapper around a single batch request."""

import time
from typing import Callable

from ...constants import MAX_BATCH_ATTEMPTS, MSG_SERVER_BUSY, RATE_LIMIT_BACKOFF_SEC, RETRY_BACKOFF_SEC
from ..exceptions import BatchExhaustedError, RateLimitError, RemoteCallError
from ..schemas import BatchResult
from ..utils.logging import log
from .batch_requester import request_batch


def request_batch_with_retry(
    llm,
    options,
    start_scene_number: int,
    batch_size: int,
    continuity_state: str,
    story_summary: str,
    idea_context: str,
    on_progress: Callable[[str], None] | None = None,
) -> BatchResult:
    """Request one batch, retrying up to ``MAX_BATCH_ATTEMPTS`` times.

    Rate limited attempts wait longer and are reported through
    ``on_progress``; other failures wait briefly and are only logged.

    Raises:
        BatchExhaustedError: After the last attempt failed
    """
    for attempt in range(1, MAX_BATCH_ATTEMPTS + 1):
        try:
            return request_batch(
                llm,
                options,
                start_scene_number,
                batch_size,
                continuity_state,
                story_summary,
                idea_context,
            )
        except RemoteCallError as e:
            log(f"Batch @ scene {start_scene_number} failed (attempt {attempt}/{MAX_BATCH_ATTEMPTS}): {e}", "WARNING")

            if attempt == MAX_BATCH_ATTEMPTS:
                raise BatchExhaustedError(
                    f"Batch starting at scene {start_scene_number} failed after {MAX_BATCH_ATTEMPTS} attempts: {e}"
                ) from e

            if isinstance(e, RateLimitError):
                if on_progress:
                    on_progress(
                        MSG_SERVER_BUSY.format(
                            seconds=RATE_LIMIT_BACKOFF_SEC,
                            attempt=attempt,
                            max_attempts=MAX_BATCH_ATTEMPTS,
                        )
                    )
                time.sleep(RATE_LIMIT_BACKOFF_SEC)
            else:
                time.sleep(RETRY_BACKOFF_SEC)
