"""LangGraph nodes for batch scene generation."""

from .batch_acceptor import accept_batch, record_failure
from .batch_planner import request_scene_batch
from .error_handler import handle_error

__all__ = [
    "request_scene_batch",
    "accept_batch",
    "record_failure",
    "handle_error",
]
