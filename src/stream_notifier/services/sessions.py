"""Persistence interface for stream sessions and their history."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from stream_notifier.domain.sessions import HistoryRecord, StreamSession


class SessionRepository(Protocol):
    """Persistence interface for stream sessions."""

    def get_open_session(self, channel_id: str) -> StreamSession | None:
        """Return the channel's session without an end time, if any."""

    def create_session(  # noqa: PLR0913
        self,
        channel_id: str,
        start_time: datetime,
        message_id: str | None,
        message_link: str | None,
        thumbnail_base: str | None,
        last_thumbnail_refresh: datetime | None,
    ) -> StreamSession:
        """Create an open session and return it."""

    def update_thumbnail(
        self, session_id: UUID, thumbnail_base: str, refreshed_at: datetime
    ) -> None:
        """Update the thumbnail fields of an open session."""

    def close_session(self, session_id: UUID, end_time: datetime) -> None:
        """Set the end time of a session that is still open."""

    def create_history_record(self, record: HistoryRecord) -> None:
        """Append a history record for a closed session."""
