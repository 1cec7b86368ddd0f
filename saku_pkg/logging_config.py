"""Logging for the calculator engine and keypad.

Every module logs under the ``saku`` namespace (``saku.parser``,
``saku.evaluator``, ...). Nothing is emitted until the CLI, or an embedding
application, calls ``setup_logging``.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER = "saku"


class StructuredFormatter(logging.Formatter):
    """One line per record: ISO timestamp, level, logger name, message.

    A traceback, when attached, follows on the next lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Route ``saku.*`` records to stderr and, optionally, a file.

    Calling it again replaces the previous handlers. An unknown level name
    falls back to WARNING.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one module, e.g. ``get_logger("parser")`` -> ``saku.parser``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
