"""Gemini access through LangChain: generation model, key probe, error classification."""

from langchain_core.messages import BaseMessage, HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from ...constants import GOOGLE_API_KEY_PREFIX, PROBE_MESSAGE, RATE_LIMIT_KEYWORDS, RATE_LIMIT_STATUS_CODES
from ..config import (
    GENERATION_TEMPERATURE,
    PLANNER_MODEL,
    PROBE_TIMEOUT_SEC,
    RESPONSE_MIME_TYPE,
    SAFETY_SETTINGS,
)
from ..exceptions import InvalidInputError, RateLimitError, RemoteCallError
from ..utils.logging import log, log_separator


def get_generation_llm(api_key: str) -> ChatGoogleGenerativeAI:
    """Create the Gemini chat model used for batch generation.

    LangChain's own retries are disabled (single attempt) so that the batch
    retry policy is the only one in effect.
    """
    if not api_key or not api_key.strip():
        raise InvalidInputError("A Google AI Studio API key is required.")

    return ChatGoogleGenerativeAI(
        model=PLANNER_MODEL,
        google_api_key=api_key.strip(),
        temperature=GENERATION_TEMPERATURE,
        response_mime_type=RESPONSE_MIME_TYPE,
        safety_settings=SAFETY_SETTINGS,
        max_retries=1,
    )


def _get_probe_llm(api_key: str, timeout: float) -> ChatGoogleGenerativeAI:
    return ChatGoogleGenerativeAI(
        model=PLANNER_MODEL,
        google_api_key=api_key,
        timeout=timeout,
        max_retries=1,
    )


def extract_text(content) -> str:
    """Flatten an AIMessage content into plain text.

    langchain_google_genai may return a string, a list of dict blocks
    (``{"type": "text", "text": ...}``) or content block objects.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content

    text_parts = []
    try:
        for item in content:
            if isinstance(item, dict):
                if item.get("type", "text") == "text":
                    text_parts.append(item.get("text", ""))
            elif hasattr(item, "text"):
                text_parts.append(str(item.text))
            elif isinstance(item, str):
                text_parts.append(item)
    except TypeError:
        return str(content)
    return "".join(text_parts)


def _status_codes(exception: BaseException) -> set[int]:
    """Collect HTTP-like status codes along the exception chain."""
    codes = set()
    seen = set()
    current: BaseException | None = exception
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        for attr in ("code", "status_code"):
            value = getattr(current, attr, None)
            if isinstance(value, int) and not isinstance(value, bool):
                codes.add(value)
        response = getattr(current, "response", None)
        status = getattr(response, "status_code", None)
        if isinstance(status, int):
            codes.add(status)
        current = current.__cause__ or current.__context__
    return codes


def is_rate_limited(exception: BaseException) -> bool:
    """Tell whether a Gemini failure means quota exhaustion or overload."""
    if _status_codes(exception) & set(RATE_LIMIT_STATUS_CODES):
        return True
    error_msg = str(exception).lower()
    return any(keyword in error_msg for keyword in RATE_LIMIT_KEYWORDS)


def _check_rate_limit_error(exception: Exception) -> None:
    """Re-raise a Gemini failure as a classified error.

    Raises:
        RateLimitError: If the failure indicates quota or overload
        RemoteCallError: For every other failure
    """
    if is_rate_limited(exception):
        raise RateLimitError(str(exception)) from exception
    raise RemoteCallError(str(exception) or type(exception).__name__) from exception


def invoke_text(llm, messages: list[BaseMessage]) -> str:
    """Call the model and return its reply as text.

    Raises:
        RateLimitError: On quota or overload
        RemoteCallError: On any other transport or API failure
    """
    try:
        response = llm.invoke(messages)
    except Exception as e:
        _check_rate_limit_error(e)
    return extract_text(response.content)


def validate_api_key(api_key: str, timeout: float = PROBE_TIMEOUT_SEC) -> bool:
    """Check that a key looks like a Google key and answers a probe call.

    Args:
        api_key: Google AI Studio API key
        timeout: Upper bound for the probe request in seconds

    Returns:
        True when the probe returned non-empty text
    """
    log_separator("API Key Check")

    key = api_key.strip() if api_key else ""
    if not key.startswith(GOOGLE_API_KEY_PREFIX):
        log(f"Key rejected: missing '{GOOGLE_API_KEY_PREFIX}' prefix", "WARNING")
        return False

    try:
        llm = _get_probe_llm(key, timeout)
        response = llm.invoke([HumanMessage(content=PROBE_MESSAGE)])
    except Exception as e:
        log(f"Key probe failed: {e}", "WARNING")
        return False

    usable = bool(extract_text(response.content).strip())
    log("Key is usable" if usable else "Key probe returned empty text", "SUCCESS" if usable else "WARNING")
    return usable
