"""Notification module for delivering error logs to Telegram."""

from tghook.notifications.entry import Level, LogEntry, entry_from_record
from tghook.notifications.handler import TelegramHandler
from tghook.notifications.telegram import (
    DeliveryError,
    TelegramAPIError,
    TelegramHook,
    TelegramHookError,
)

__all__ = [
    "DeliveryError",
    "Level",
    "LogEntry",
    "TelegramAPIError",
    "TelegramHandler",
    "TelegramHook",
    "TelegramHookError",
    "entry_from_record",
]
