"""Console logging for batch runs.

Everything goes through the ``seamless.generators`` logger; callers (the CLI,
or an embedding application) decide handlers and level. On a terminal the
level name picks an ANSI color.
"""

import json
import logging
import sys

logger = logging.getLogger("seamless.generators")

RESET = "\033[0m"
BOLD = "\033[1m"

# level name -> (logging level, ANSI color)
LEVELS = {
    "INFO": (logging.INFO, "\033[36m"),
    "SUCCESS": (logging.INFO, "\033[92m"),
    "WARNING": (logging.WARNING, "\033[93m"),
    "ERROR": (logging.ERROR, "\033[91m"),
    "DEBUG": (logging.DEBUG, "\033[2m"),
}
BANNER_COLOR = "\033[95m"
TITLE_COLOR = "\033[94m"

RULE_WIDTH = 60


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{RESET}" if _is_tty() else text


def log(message: str, level: str = "INFO") -> None:
    """Log ``message`` at a named level.

    Args:
        message: The message to log
        level: INFO, SUCCESS, WARNING, ERROR or DEBUG; unknown names log as INFO
    """
    log_level, color = LEVELS.get(level, LEVELS["INFO"])
    logger.log(log_level, _paint(message, color))


def log_separator(title: str) -> None:
    """Log a banner marking the start of a run or batch."""
    rule = _paint("=" * RULE_WIDTH, BANNER_COLOR)
    logger.info(f"\n{rule}\n  {_paint(title, BOLD)}\n{rule}")


def _log_block(title: str, body: str) -> None:
    logger.debug(f"{_paint(f'[{title}]', TITLE_COLOR)}\n{body}")


def log_json(data, title: str) -> None:
    """Dump a parsed model reply at DEBUG."""
    _log_block(title, json.dumps(data, indent=2, ensure_ascii=False, default=str))


def log_prompt(prompt: str, title: str) -> None:
    """Dump an outgoing instruction block at DEBUG."""
    rule = "-" * (RULE_WIDTH // 2)
    _log_block(title, f"{rule}\n{prompt}\n{rule}")
