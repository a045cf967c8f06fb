"""Domain models for monitored channels."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelRecord:
    """Represents a channel resolved to its stable Twitch user id."""

    name: str
    channel_id: str
