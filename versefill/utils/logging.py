"""Logging configuration for versefill."""
import logging
import sys
from typing import Optional, TextIO


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure logging for versefill.

    Args:
        level: Logging level (e.g., logging.INFO, logging.DEBUG)
        format_string: Custom format string for log messages
        log_file: Optional file path to write logs to
        stream: Stream for the console handler (default: sys.stdout)
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Configure root logger
    handlers = [logging.StreamHandler(stream or sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=handlers,
        force=True,
    )

