"""API services for scene generation."""

from .batch_requester import build_batch_messages, parse_batch_envelope, request_batch
from .gemini_client import get_generation_llm, is_rate_limited, validate_api_key
from .retry import request_batch_with_retry

__all__ = [
    "build_batch_messages",
    "parse_batch_envelope",
    "request_batch",
    "request_batch_with_retry",
    "get_generation_llm",
    "is_rate_limited",
    "validate_api_key",
]
