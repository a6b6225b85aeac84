"""Constants for scene script generation.

Centralizes magic numbers and configuration values.
"""

# =============================================================================
# Batch Configuration
# =============================================================================

BATCH_SIZE = 5  # maximum scenes requested per model call
DEFAULT_PROMPT_COUNT = 5  # used when a fresh run gets no valid count

# =============================================================================
# Retry Configuration
# =============================================================================

MAX_BATCH_ATTEMPTS = 4  # attempts per batch before giving up on it
MAX_CONSECUTIVE_FAILURES = 5  # failed batches in a row before the run aborts

# =============================================================================
# Pacing (seconds)
# =============================================================================

RATE_LIMIT_BACKOFF_SEC = 5.0
RETRY_BACKOFF_SEC = 2.0
FAILED_BATCH_PAUSE_SEC = 2.0
BATCH_PACING_SEC = 1.5

# =============================================================================
# Rate Limit Detection
# =============================================================================

# HTTP status codes that mean "slow down" rather than "broken request"
RATE_LIMIT_STATUS_CODES = (429, 503)

# Keywords that indicate quota exhaustion or server overload
RATE_LIMIT_KEYWORDS = [
    "429",
    "quota",
    "overloaded",
    "too many requests",
    "resource_exhausted",
    "resource exhausted",
    "rate limit",
]

# =============================================================================
# Text Cleaning
# =============================================================================

# Model placeholder values that mean "nothing here" (compared lowercased)
EMPTY_ATTRIBUTE_VALUES = frozenset(
    {
        "",
        "none",
        "n/a",
        "null",
        "unknown",
        "không có",
    }
)

# =============================================================================
# Continuity
# =============================================================================

START_OF_VIDEO = "Beginning of the video."
EXTENSION_SUMMARY = "Continuing seamlessly..."

# =============================================================================
# Credentials
# =============================================================================

GOOGLE_API_KEY_PREFIX = "AIza"
PROBE_MESSAGE = "ping"

# =============================================================================
# Progress Message Templates
# =============================================================================

MSG_BATCH_STARTED = "Generating the next {batch_size} scenes seamlessly ({done}/{target} done)..."
MSG_SERVER_BUSY = "Server is busy, retrying in {seconds:g}s (attempt {attempt}/{max_attempts})..."
MSG_BATCH_FAILED = "Connection error: {error}. Retrying..."
MSG_GENERATION_EXHAUSTED = "Could not generate {target} scenes after {failures} consecutive failed batches."
MSG_EXTENSION_EXHAUSTED = "Could not extend the script by {target} scenes after {failures} consecutive failed batches."
