"""Discord webhook client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import BaseModel

from stream_notifier.domain.notifications import MessageRef, Notification


class DiscordMessage(BaseModel):
    """Message payload returned by webhook execution."""

    id: str
    channel_id: str | None = None


class DiscordWebhookClient(Protocol):
    """Interface for creating and editing a webhook message."""

    async def send(self, notification: Notification) -> MessageRef:
        """Post a new message and return its reference."""

    async def edit(self, message_id: str, notification: Notification) -> None:
        """Replace the content of a previously posted message."""


@dataclass
class HttpxDiscordWebhookClient(DiscordWebhookClient):
    """Discord webhook client implemented with httpx."""

    webhook_url: str
    http_client: httpx.AsyncClient
    guild_id: str | None = None
    timeout: float = 10.0

    @classmethod
    def create(
        cls, webhook_url: str, guild_id: str | None = None, timeout: float = 10.0
    ) -> "HttpxDiscordWebhookClient":
        """Create a webhook client with a managed httpx session."""
        return cls(
            webhook_url=webhook_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            guild_id=guild_id,
            timeout=timeout,
        )

    async def send(self, notification: Notification) -> MessageRef:
        """Execute the webhook and wait for the created message."""
        response = await self.http_client.post(
            self.webhook_url,
            params={"wait": "true"},
            json=_message_payload(notification),
            timeout=self.timeout,
        )
        response.raise_for_status()
        message = DiscordMessage.model_validate(response.json())
        return MessageRef(message_id=message.id, link=self._message_link(message))

    async def edit(self, message_id: str, notification: Notification) -> None:
        """Edit a message previously sent by this webhook."""
        response = await self.http_client.patch(
            f"{self.webhook_url}/messages/{message_id}",
            json=_message_payload(notification),
            timeout=self.timeout,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    def _message_link(self, message: DiscordMessage) -> str | None:
        if not self.guild_id or not message.channel_id:
            return None
        return (
            f"https://discord.com/channels/{self.guild_id}/"
            f"{message.channel_id}/{message.id}"
        )


def _message_payload(notification: Notification) -> dict[str, object]:
    """Build a webhook message body with a single embed."""
    embed: dict[str, object] = {
        "title": notification.title,
        "description": notification.description,
        "color": notification.color,
        "timestamp": notification.timestamp.isoformat(),
    }
    if notification.url:
        embed["url"] = notification.url
    if notification.image_url:
        embed["image"] = {"url": notification.image_url}
    if notification.fields:
        embed["fields"] = [
            {"name": item.name, "value": item.value, "inline": item.inline}
            for item in notification.fields
        ]
    return {
        "content": notification.mention or "",
        "embeds": [embed],
        "allowed_mentions": {"parse": ["roles"]},
    }
