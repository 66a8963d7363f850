"""Telegram notification hook for Python logging."""

from tghook.notifications import (
    DeliveryError,
    Level,
    LogEntry,
    TelegramAPIError,
    TelegramHandler,
    TelegramHook,
    TelegramHookError,
)

__version__ = "0.1.0"

__all__ = [
    "DeliveryError",
    "Level",
    "LogEntry",
    "TelegramAPIError",
    "TelegramHandler",
    "TelegramHook",
    "TelegramHookError",
]
