"""Centralized logging configuration."""

import logging
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

REDACTED = "[REDACTED]"


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(Enum):
    """Log format types."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    COMPACT = "compact"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: LogLevel = LogLevel.INFO
    format_type: LogFormat = LogFormat.DETAILED
    log_to_console: bool = True
    sensitive_fields: List[str] = field(
        default_factory=lambda: ["password", "secret", "token", "credential"]
    )

    @classmethod
    def from_settings(cls, settings) -> "LoggingConfig":
        """Create config from TelegramHookSettings."""
        return cls(level=LogLevel(settings.log_level))


def redact_token(text: str, token: str) -> str:
    """Replace every occurrence of a secret token in text."""
    if not token:
        return text
    return text.replace(token, REDACTED)


class SensitiveDataFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def __init__(self, sensitive_fields: List[str] = None):
        super().__init__()
        self.sensitive_fields = sensitive_fields or [
            "password", "secret", "token", "credential"
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact sensitive data from log message."""
        if isinstance(record.msg, str):
            for name in self.sensitive_fields:
                if name.lower() in record.msg.lower():
                    record.msg = self._redact_field(record.msg, name)
        return True

    def _redact_field(self, msg: str, name: str) -> str:
        """Redact a specific field from message."""
        pattern = rf'({name}["\']?\s*[:=]\s*["\']?)([^"\'\s,}}\]]+)'
        return re.sub(pattern, rf"\1{REDACTED}", msg, flags=re.IGNORECASE)


class CompactFormatter(logging.Formatter):
    """Compact log format: time, level initial, logger, message."""

    def format(self, record: logging.LogRecord) -> str:
        """Format compactly."""
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%H:%M:%S")
        level = record.levelname[0]
        return f"{ts} {level} [{record.name}] {record.getMessage()}"


def create_formatter(format_type: LogFormat) -> logging.Formatter:
    """Create formatter for a format type."""
    if format_type == LogFormat.COMPACT:
        return CompactFormatter()

    if format_type == LogFormat.SIMPLE:
        fmt = "%(levelname)s: %(message)s"
    else:  # DETAILED
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
    return logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")


def configure_logging(config: LoggingConfig = None, hook=None) -> Optional[logging.Handler]:
    """Configure the root logger.

    Installs a console handler on stderr and, when a TelegramHook is given,
    a TelegramHandler for error-level records.

    Args:
        config: Logging configuration (defaults if omitted)
        hook: Optional TelegramHook to attach

    Returns:
        The installed TelegramHandler, or None
    """
    from tghook.notifications.handler import TelegramHandler

    config = config or LoggingConfig()
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.value))

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    sensitive_filter = SensitiveDataFilter(config.sensitive_fields)

    if config.log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(create_formatter(config.format_type))
        console_handler.addFilter(sensitive_filter)
        root_logger.addHandler(console_handler)

    telegram_handler = None
    if hook is not None:
        telegram_handler = TelegramHandler(hook)
        telegram_handler.addFilter(sensitive_filter)
        root_logger.addHandler(telegram_handler)

    # Quiet noisy loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    return telegram_handler


def configure_from_settings(settings=None) -> logging.Handler:
    """Configure logging and a Telegram hook from TelegramHookSettings.

    Args:
        settings: Hook settings (read from the environment if omitted)

    Returns:
        The installed TelegramHandler
    """
    from tghook.config.settings import get_settings
    from tghook.notifications.telegram import TelegramHook

    settings = settings or get_settings()
    return configure_logging(
        LoggingConfig.from_settings(settings),
        hook=TelegramHook.from_settings(settings),
    )
