"""
Structured logging configuration.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import IO, Optional, Union


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Setup matcher logging.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        stream: Output stream, stdout by default

    Returns:
        Configured root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if stream is None:
        stream = sys.stdout
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)

    # Plain text on a terminal, JSON lines when piped into a collector
    if stream.isatty():
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        formatter = JSONFormatter()

    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
