"""Channel identity resolution."""

import logging
from dataclasses import dataclass
from typing import Protocol

from stream_notifier.adapters.twitch_client import TwitchClient
from stream_notifier.domain.channels import ChannelRecord

_logger = logging.getLogger(__name__)


class ChannelRepository(Protocol):
    """Persistence interface for monitored channels."""

    def get_by_name(self, name: str) -> ChannelRecord | None:
        """Return the channel with this name, if present."""

    def create_channel(self, name: str, channel_id: str) -> ChannelRecord:
        """Create and return a channel record."""


@dataclass
class ChannelService:
    """Maps configured channel names to stable Twitch ids."""

    repository: ChannelRepository
    twitch_client: TwitchClient

    async def resolve(self, name: str) -> ChannelRecord | None:
        """Return the stored channel, looking it up on Twitch the first time."""
        existing = self.repository.get_by_name(name)
        if existing is not None:
            return existing

        channel_id = await self.twitch_client.resolve_channel_id(name)
        if channel_id is None:
            _logger.warning("Channel not found on Twitch: name=%s", name)
            return None
        _logger.info("Registered channel: name=%s channel_id=%s", name, channel_id)
        return self.repository.create_channel(name, channel_id)
