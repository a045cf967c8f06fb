"""Domain models for stream sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class StreamSession:
    """Represents one continuous live interval for a channel."""

    id: UUID
    channel_id: str
    start_time: datetime
    end_time: datetime | None
    message_id: str | None
    message_link: str | None
    thumbnail_base: str | None
    last_thumbnail_refresh: datetime | None

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class HistoryRecord:
    """Immutable summary of a closed session."""

    channel_id: str
    duration: str
    start_time: datetime
    end_time: datetime
    message_id: str | None
    message_link: str | None
    replay_link: str | None


@dataclass(frozen=True)
class ErrorRecord:
    """A failure captured while polling."""

    timestamp: datetime
    category: str
    description: str
    location: str | None = None
    trace: str | None = None
