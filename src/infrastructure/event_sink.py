"""
Logging setup and the logging-backed event sink.

Usage:
    logger = setup_logging("podcast_search", "logs/app.log", verbose=True)
    events = LoggingEventSink(logger)
    events.emit("sync.completed", ingested=2)
"""

import logging
from pathlib import Path
from typing import Any

from src.domain.interfaces import EventSinkPort


# Per-record events are noisy: only visible when verbose
DEBUG_EVENTS = frozenset({"sync.record_ingested"})


def setup_logging(
    logger_name: str,
    log_file: str = "logs/app.log",
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up logging with a file handler and an optional console handler.

    Args:
        logger_name: Name for the logger (e.g., "podcast_search")
        log_file: Path to log file (default: "logs/app.log")
        verbose: If True, also log to the console at DEBUG level
        level: Base logging level (default: logging.INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Avoid adding multiple handlers if already configured
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else level)

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter("DEBUG: %(message)s"))
        logger.addHandler(console_handler)

    return logger


class LoggingEventSink(EventSinkPort):
    """Writes each event as one log line: "[event] key=value ..."."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def emit(self, event: str, **fields: Any) -> None:
        level = logging.DEBUG if event in DEBUG_EVENTS else logging.INFO
        details = " ".join(f"{key}={value!r}" for key, value in fields.items())
        self._logger.log(level, f"[{event}] {details}".rstrip())
