"""Logging handler that forwards error records to a TelegramHook."""

import asyncio
import logging
import threading
from typing import Optional

from tghook.notifications.entry import PANIC, Level, entry_from_record
from tghook.notifications.telegram import TelegramHook

LEVEL_NUMBERS = {
    Level.PANIC: PANIC,
    Level.FATAL: logging.CRITICAL,
    Level.ERROR: logging.ERROR,
    Level.WARNING: logging.WARNING,
    Level.INFO: logging.INFO,
    Level.DEBUG: logging.DEBUG,
    Level.TRACE: logging.NOTSET,
}


class TelegramHandler(logging.Handler):
    """Fires a TelegramHook for every record at a supported level.

    ``emit`` blocks the logging thread until the request completes. The
    hook runs on a private event loop thread so its HTTP session can be
    reused across calls from any thread.
    """

    def __init__(self, hook: TelegramHook, level: Optional[int] = None):
        self.hook = hook
        self.supported_levels = frozenset(hook.levels())
        if level is None:
            level = min(LEVEL_NUMBERS[lvl] for lvl in self.supported_levels)
        super().__init__(level)

        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="telegram-hook",
            daemon=True,
        )
        self._thread.start()
        self._closed = False

    def _run_loop(self) -> None:
        """Run the hook's event loop until stopped."""
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def emit(self, record: logging.LogRecord) -> None:
        """Send the record to Telegram."""
        entry = entry_from_record(record)
        if entry.level not in self.supported_levels:
            return
        if self._closed:
            return
        # Records from the hook loop itself (aiohttp, asyncio) would wait on
        # a loop that can only run once this call returns.
        if threading.current_thread() is self._thread:
            return

        try:
            future = asyncio.run_coroutine_threadsafe(
                self.hook.fire(entry), self._loop
            )
            future.result()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the hook session and stop the event loop."""
        if not self._closed:
            self._closed = True
            future = asyncio.run_coroutine_threadsafe(
                self.hook.close(), self._loop
            )
            try:
                future.result()
            finally:
                self._loop.call_soon_threadsafe(self._loop.stop)
                self._thread.join()
                self._loop.close()
        super().close()
