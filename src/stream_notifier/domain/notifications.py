"""Domain models for outbound notifications."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NotificationField:
    """A labelled value shown alongside the notification body."""

    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class Notification:
    """Structured content for a single notification message."""

    title: str
    description: str
    color: int
    timestamp: datetime
    url: str | None = None
    image_url: str | None = None
    fields: tuple[NotificationField, ...] = field(default_factory=tuple)
    mention: str | None = None


@dataclass(frozen=True)
class MessageRef:
    """Reference to a message created by the notification sink."""

    message_id: str
    link: str | None = None
