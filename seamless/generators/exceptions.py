"""Custom exceptions for scene script generation."""


class GenerationError(Exception):
    """Base class for all scene generation errors."""

    pass


class InvalidInputError(GenerationError):
    """Bad generation options, anchor scene or count - never retried."""

    pass


class RemoteCallError(GenerationError):
    """Gemini call failed for a reason other than rate limiting."""

    pass


class RateLimitError(RemoteCallError):
    """Gemini rejected the call because of quota or server overload."""

    pass


class EmptyResponseError(RemoteCallError):
    """Gemini returned no text."""

    pass


class MalformedJsonError(RemoteCallError):
    """Gemini text did not parse as the expected JSON envelope."""

    pass


class BatchExhaustedError(GenerationError):
    """A single batch failed on every retry attempt."""

    pass


class GenerationExhaustedError(GenerationError):
    """Too many consecutive batches failed - the whole run is aborted."""

    pass
