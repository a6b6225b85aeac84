"""Utility functions for scene generation."""

from .logging import log, log_json, log_prompt, log_separator
from .progress import report_progress
from .text import clean_attribute, clean_for_json

__all__ = [
    "log",
    "log_separator",
    "log_json",
    "log_prompt",
    "report_progress",
    "clean_attribute",
    "clean_for_json",
]
