"""Log entries as seen by the Telegram hook."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

PANIC = 60
logging.addLevelName(PANIC, "PANIC")

# Attributes every logging.LogRecord carries; anything else came from extra=.
STANDARD_RECORD_KEYS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message", "asctime",
})


class Level(Enum):
    """Log severities, most critical first."""

    PANIC = "panic"
    FATAL = "fatal"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"


@dataclass
class LogEntry:
    """A single log event: severity, message and structured fields."""

    level: Level
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


def level_from_levelno(levelno: int) -> Level:
    """Map a numeric stdlib logging level onto a Level."""
    if levelno >= PANIC:
        return Level.PANIC
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARNING
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE


def entry_from_record(record: logging.LogRecord) -> LogEntry:
    """Build a LogEntry from a stdlib log record.

    Fields passed through ``extra=`` become the entry data. If the record
    carries exception info, the exception text is stored under ``error``
    unless the caller already set that field.

    Args:
        record: Record produced by a stdlib logger

    Returns:
        The equivalent LogEntry
    """
    data = {
        k: v for k, v in record.__dict__.items()
        if k not in STANDARD_RECORD_KEYS and not k.startswith("_")
    }

    if record.exc_info and record.exc_info[1] is not None:
        data.setdefault("error", str(record.exc_info[1]))

    return LogEntry(
        level=level_from_levelno(record.levelno),
        message=record.getMessage(),
        data=data,
    )
