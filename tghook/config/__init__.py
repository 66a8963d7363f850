"""Configuration module for the Telegram hook."""

from tghook.config.settings import TelegramHookSettings, get_settings

__all__ = ["TelegramHookSettings", "get_settings"]
