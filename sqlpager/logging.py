"""
Logging for the pagination engine.

Records emitted while a statement is being paginated carry the statement id
and dialect of that request. Console output is a short text line; when
LOG_FILE_PATH is set, errors are additionally written to it as JSON lines.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any

from sqlpager.settings import app_settings

LOGGER_NAME = "sqlpager"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Fields of the request currently being paginated
log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# LogRecord attributes that are not copied into JSON output as extras
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "statement_id"}


def set_log_context(**kwargs: Any) -> None:
    """
    Attach fields to every record logged in the current context.

    The stored dict is replaced, never mutated, so asyncio tasks that
    inherited it keep their own copy.

    Args:
        **kwargs: Fields such as statement_id or dialect.

    Example:
        >>> set_log_context(statement_id="UserMapper.select_active")
        >>> logger.debug("Counting rows")  # record carries statement_id
    """
    log_context.set({**log_context.get(), **kwargs})


def get_log_context() -> dict[str, Any]:
    return log_context.get()


def clear_log_context() -> None:
    log_context.set({})


class StructuredJSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Keys: timestamp, level, logger, message, module, function, line, the
    current log context, environment, exception (if any) and any extra
    attributes passed through `extra=`.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **get_log_context(),
            "environment": app_settings.ENVIRONMENT,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        )
        return json.dumps(payload, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Console formatter prefixing each line with the statement being paginated.

    Warnings and errors also show where they were logged from.
    """

    SHORT_FMT = "%(asctime)s - [%(statement_id)s] %(levelname)s: %(message)s"
    LONG_FMT = (
        "%(asctime)s - [%(statement_id)s] %(levelname)s: "
        "%(module)s.%(funcName)s:%(lineno)d - %(message)s"
    )

    def __init__(self) -> None:
        super().__init__(self.SHORT_FMT, datefmt=DATE_FORMAT)
        self._long = logging.Formatter(self.LONG_FMT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        record.statement_id = get_log_context().get("statement_id", "-")
        if record.levelno == logging.INFO:
            return super().format(record)
        return self._long.format(record)


def setup_logging() -> logging.Logger:
    """
    Configure the "sqlpager" logger from settings.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(app_settings.LOG_LEVEL.upper())
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(HumanReadableFormatter())
    logger.addHandler(console)

    if app_settings.LOG_FILE_PATH:
        try:
            error_file = logging.FileHandler(app_settings.LOG_FILE_PATH)
        except OSError as ex:
            logger.warning(f"Cannot open log file: {ex}")
        else:
            error_file.setLevel(logging.ERROR)
            error_file.setFormatter(StructuredJSONFormatter())
            logger.addHandler(error_file)

    # Quiet under pytest
    if sys.argv[0].split("/")[-1] == "pytest":
        logging.disable(logging.ERROR)

    return logger


logger = setup_logging()
