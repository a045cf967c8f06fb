"""Supabase repository for error records."""

from dataclasses import dataclass

from supabase import Client

from stream_notifier.domain.sessions import ErrorRecord
from stream_notifier.services.errors import ErrorRepository


@dataclass
class SupabaseErrorRepository(ErrorRepository):
    """Supabase-backed error log."""

    client: Client

    def create_error(self, record: ErrorRecord) -> None:
        """Create an error log row."""
        self.client.table("error_log").insert(
            {
                "timestamp": record.timestamp.isoformat(),
                "category": record.category,
                "description": record.description,
                "location": record.location,
                "trace": record.trace,
            }
        ).execute()
