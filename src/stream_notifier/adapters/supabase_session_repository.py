"""Supabase-backed stream session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from stream_notifier.domain.sessions import HistoryRecord, StreamSession
from stream_notifier.services.sessions import SessionRepository

_SESSION_COLUMNS = (
    "id, channel_id, start_time, end_time, message_id, message_link, "
    "thumbnail_base, last_thumbnail_refresh"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for stream sessions and history."""

    client: Client

    def get_open_session(self, channel_id: str) -> StreamSession | None:
        """Return the channel's open session, if any."""
        response = (
            self.client.table("stream_sessions")
            .select(_SESSION_COLUMNS)
            .eq("channel_id", channel_id)
            .is_("end_time", "null")
            .order("start_time", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _session_from_row(response.data[0])

    def create_session(  # noqa: PLR0913
        self,
        channel_id: str,
        start_time: datetime,
        message_id: str | None,
        message_link: str | None,
        thumbnail_base: str | None,
        last_thumbnail_refresh: datetime | None,
    ) -> StreamSession:
        """Create an open session row and return it."""
        response = (
            self.client.table("stream_sessions")
            .insert(
                {
                    "channel_id": channel_id,
                    "start_time": start_time.isoformat(),
                    "end_time": None,
                    "message_id": message_id,
                    "message_link": message_link,
                    "thumbnail_base": thumbnail_base,
                    "last_thumbnail_refresh": _isoformat(last_thumbnail_refresh),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create stream session")
        return _session_from_row(response.data[0])

    def update_thumbnail(
        self, session_id: UUID, thumbnail_base: str, refreshed_at: datetime
    ) -> None:
        """Update the thumbnail fields of an open session."""
        self.client.table("stream_sessions").update(
            {
                "thumbnail_base": thumbnail_base,
                "last_thumbnail_refresh": refreshed_at.isoformat(),
            }
        ).eq("id", str(session_id)).is_("end_time", "null").execute()

    def close_session(self, session_id: UUID, end_time: datetime) -> None:
        """Set the end time, leaving already closed sessions untouched."""
        self.client.table("stream_sessions").update(
            {"end_time": end_time.isoformat()}
        ).eq("id", str(session_id)).is_("end_time", "null").execute()

    def create_history_record(self, record: HistoryRecord) -> None:
        """Append a row to the stream history."""
        self.client.table("stream_history").insert(
            {
                "channel_id": record.channel_id,
                "duration": record.duration,
                "start_time": record.start_time.isoformat(),
                "end_time": record.end_time.isoformat(),
                "message_id": record.message_id,
                "message_link": record.message_link,
                "replay_link": record.replay_link,
            }
        ).execute()


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value))


def _session_from_row(row: dict[str, object]) -> StreamSession:
    start_time = _parse_datetime(row["start_time"])
    if start_time is None:
        raise RuntimeError("Stream session row is missing start_time")
    return StreamSession(
        id=UUID(str(row["id"])),
        channel_id=str(row["channel_id"]),
        start_time=start_time,
        end_time=_parse_datetime(row.get("end_time")),
        message_id=row.get("message_id"),
        message_link=row.get("message_link"),
        thumbnail_base=row.get("thumbnail_base"),
        last_thumbnail_refresh=_parse_datetime(row.get("last_thumbnail_refresh")),
    )
