"""Text cleaning rules for model output.

Two rules exist on purpose. ``clean_attribute`` feeds human readable
descriptions and continuity fingerprints, so placeholder words such as
"N/A" are blanked. ``clean_for_json`` feeds the structured prompt, which
must stay a faithful rendering of what the model wrote.
"""

import re

from ...constants import EMPTY_ATTRIBUTE_VALUES

_NEWLINES = re.compile(r"\r\n|\r|\n")
_WHITESPACE = re.compile(r"\s+")
_EDGE_PUNCTUATION = re.compile(r"^[,.;\s]+|[,.;\s]+$")


def _is_placeholder(text: str) -> bool:
    return text.lower() in EMPTY_ATTRIBUTE_VALUES


def clean_attribute(text: str | None) -> str:
    """Clean a value for descriptions: placeholders become empty strings."""
    if not text:
        return ""

    cleaned = _NEWLINES.sub(" ", text.strip())
    if _is_placeholder(cleaned):
        return ""

    cleaned = _EDGE_PUNCTUATION.sub("", cleaned)
    if _is_placeholder(cleaned):
        return ""
    return cleaned


def clean_for_json(text: str | None) -> str:
    """Collapse whitespace runs (newlines included) and trim."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()
