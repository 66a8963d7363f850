"""Telegram Bot API hook for error-level log entries."""

import asyncio
import html
import logging
import sys
from typing import List, Optional
from urllib.parse import quote

import aiohttp
from yarl import URL

from tghook.logging_config import redact_token
from tghook.notifications.entry import Level, LogEntry

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.telegram.org"

# Transport timeouts in seconds; long enough for slow TLS on small ARM boards.
DIAL_TIMEOUT = 60.0
# Idle lifetime of a pooled connection (TCPConnector keepalive_timeout).
# This is not a TCP keep-alive probe period: the OS default applies to that.
KEEP_ALIVE = 30.0
TLS_HANDSHAKE_TIMEOUT = 60.0

LEVEL_LABELS = {
    Level.PANIC: "PANIC",
    Level.FATAL: "FATAL",
    Level.ERROR: "ERROR",
}


class TelegramHookError(Exception):
    """Base exception for failed deliveries."""


class DeliveryError(TelegramHookError):
    """Exception raised when the request could not be completed."""

    def __init__(self, cause: BaseException, reason: Optional[str] = None):
        self.cause = cause
        super().__init__(f"Unable to send message: {reason or cause}")


class TelegramAPIError(TelegramHookError):
    """Exception raised when Telegram answers with an error status."""

    def __init__(self, status: int, description: str = ""):
        self.status = status
        self.description = description
        super().__init__(f"Telegram API error: HTTP {status}: {description}")


class TelegramHook:
    """Sends error-level log entries to a Telegram chat.

    Each entry becomes one HTML-formatted message delivered with a single
    GET to the Bot API ``sendMessage`` method. There is no queue and no
    retry: a failed delivery is reported once and raised to the caller.

    The HTTP session is created on first use and reused afterwards. An
    injected session must belong to the event loop ``fire`` runs on.
    """

    def __init__(
        self,
        app_name: str,
        username: str,
        token: str,
        chat_id: str,
        session: Optional[aiohttp.ClientSession] = None,
        api_base: str = DEFAULT_API_BASE,
        check_status: bool = True,
    ):
        """Initialize the hook.

        Args:
            app_name: Name shown after the level label
            username: Bot id (the part of the bot token before the colon)
            token: Bot secret (the part after the colon)
            chat_id: Target chat or channel id
            session: Optional aiohttp session to send requests with
            api_base: Bot API host
            check_status: Raise TelegramAPIError on HTTP error statuses
        """
        self.app_name = app_name
        self.check_status = check_status
        self._token = token
        self._session = session
        self._owns_session = session is None
        self.api_endpoint = (
            f"{api_base.rstrip('/')}/bot{username}:{token}"
            f"/sendMessage?chat_id={chat_id}&text="
        )

    @classmethod
    def from_settings(
        cls,
        settings,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "TelegramHook":
        """Create a hook from TelegramHookSettings."""
        return cls(
            app_name=settings.app_name,
            username=settings.username,
            token=settings.token.get_secret_value(),
            chat_id=settings.chat_id,
            session=session,
            api_base=settings.api_base,
            check_status=settings.check_status,
        )

    @staticmethod
    def levels() -> List[Level]:
        """Levels this hook should be fired for."""
        return [Level.ERROR, Level.FATAL, Level.PANIC]

    def create_message(self, entry: LogEntry) -> str:
        """Craft the HTML message for an entry.

        Fields are rendered one per line inside a ``<pre>`` block, in the
        order the entry holds them.
        """
        label = LEVEL_LABELS.get(entry.level, "")
        lines = [f"{label}@{self.app_name} - {entry.message}"]

        if entry.data:
            lines.append("<pre>")
            for key, value in entry.data.items():
                lines.append(html.escape(f"\t{key}: {value}"))
            lines.append("</pre>")

        return "\n".join(lines)

    def build_url(self, message: str) -> str:
        """Get the full request URL for a message."""
        return self.api_endpoint + quote(message, safe="")

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(keepalive_timeout=KEEP_ALIVE)
            timeout = aiohttp.ClientTimeout(
                total=None,
                connect=TLS_HANDSHAKE_TIMEOUT,
                sock_connect=DIAL_TIMEOUT,
            )
            self._session = aiohttp.ClientSession(
                connector=connector, timeout=timeout
            )
            self._owns_session = True
        return self._session

    async def fire(self, entry: LogEntry) -> None:
        """Send an entry to Telegram.

        Raises:
            DeliveryError: The request failed before a response arrived
            TelegramAPIError: Telegram answered with an error status
                (only when check_status is set)
        """
        url = self.build_url(self.create_message(entry))
        session = await self._get_session()

        try:
            async with session.get(URL(url, encoded=True)) as response:
                if self.check_status and response.status >= 400:
                    description = await self._read_description(response)
                    raise TelegramAPIError(response.status, description)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            # Not logged through logging: this hook may sit on the same logger.
            reason = redact_token(str(e), self._token)
            sys.stderr.write(f"Unable to send message, {reason}\n")
            raise DeliveryError(e, reason) from e

        logger.debug("Telegram message sent for %s entry", entry.level.value)

    @staticmethod
    async def _read_description(response: aiohttp.ClientResponse) -> str:
        """Extract the error description from a Bot API reply."""
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return await response.text()
        if isinstance(data, dict):
            return str(data.get("description", ""))
        return ""

    async def close(self) -> None:
        """Close the HTTP session if this hook created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
