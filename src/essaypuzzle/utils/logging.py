"""Structured logging setup for Essay Puzzle.

Logs are JSON lines, one event per line, written to a file so they never
interfere with the terminal UI.
"""

import structlog
from pathlib import Path
from typing import Any, Optional
import os


DEFAULT_LOG_FILE = Path.home() / ".cache" / "essaypuzzle" / "logs" / "essaypuzzle.log"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def resolve_log_file(log_file: Optional[Path] = None) -> Path:
    """Pick the log file: explicit path, then ESSAYPUZZLE_LOG_FILE, then the default."""
    if log_file is not None:
        return Path(log_file).expanduser()
    if env_file := os.environ.get("ESSAYPUZZLE_LOG_FILE"):
        return Path(env_file).expanduser()
    return DEFAULT_LOG_FILE


def configure_logging(log_file: Optional[Path] = None) -> Path:
    """
    Configure structlog for JSON logging.

    The level comes from ESSAYPUZZLE_LOG_LEVEL (DEBUG, INFO, WARNING or
    ERROR; anything else means INFO). At DEBUG the full LLM payloads and
    replies are logged, which includes essay text.

    Args:
        log_file: Where to write; see resolve_log_file() for the fallbacks

    Returns:
        The log file in use

    Example:
        ESSAYPUZZLE_LOG_LEVEL=DEBUG essaypuzzle run
        tail -f ~/.cache/essaypuzzle/logs/essaypuzzle.log | jq 'select(.event | startswith("analysis"))'
    """
    path = resolve_log_file(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    log_level = os.environ.get("ESSAYPUZZLE_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(path, "a", encoding="utf-8")),
        cache_logger_on_first_use=True,
    )
    return path


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("block_added", block_type="CLAIM", position=5)
    """
    return structlog.get_logger(name)
