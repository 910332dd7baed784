"""Discord webhook client using httpx."""

import logging
from typing import Any

import httpx

from hookcord.env import get_settings

logger = logging.getLogger(__name__)


class DiscordClient:
    """Posts messages to Discord channel webhooks.

    Must be used as an async context manager to properly initialize and
    cleanup the HTTP client.

    Example:
        async with DiscordClient() as client:
            await client.send_message(url, "<@123>", [embed])
    """

    def __init__(
        self,
        timeout: float | None = None,
        username: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the Discord client.

        Args:
            timeout: Request timeout in seconds. Defaults to the configured value.
            username: Display name override for posted messages.
            transport: Optional httpx transport (used by tests).
        """
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.discord.timeout
        self.username = username if username is not None else settings.discord.username
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "DiscordClient":
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self

    async def __aexit__(self, *args) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the underlying httpx client.

        Raises:
            RuntimeError: If accessed outside async context manager
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    def build_message(self, content: str | None, embeds: list[dict[str, Any]]) -> dict[str, Any]:
        """Build the JSON body for a webhook execution.

        The content key is left out when there is nothing to mention.
        """
        message: dict[str, Any] = {"embeds": embeds}
        if content:
            message["content"] = content
            # Only ping the users we resolved, never roles or @everyone
            message["allowed_mentions"] = {"parse": ["users"]}
        if self.username:
            message["username"] = self.username
        return message

    async def send_message(
        self,
        webhook_url: str,
        content: str | None,
        embeds: list[dict[str, Any]],
    ) -> None:
        """Execute a Discord webhook.

        Args:
            webhook_url: Discord channel webhook URL
            content: Plain message text (mentions), or None
            embeds: Rich embeds to attach

        Raises:
            httpx.HTTPStatusError: If Discord rejects the request
            httpx.TransportError: If the request cannot be sent
        """
        resp = await self.client.post(webhook_url, json=self.build_message(content, embeds))
        resp.raise_for_status()
        logger.debug(f"Discord accepted message ({resp.status_code})")
