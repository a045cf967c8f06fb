"""Supabase-backed channel repository."""

from dataclasses import dataclass

from supabase import Client

from stream_notifier.domain.channels import ChannelRecord
from stream_notifier.services.channels import ChannelRepository


@dataclass
class SupabaseChannelRepository(ChannelRepository):
    """Supabase implementation for monitored channels."""

    client: Client

    def get_by_name(self, name: str) -> ChannelRecord | None:
        """Return the channel with this name, if present."""
        response = (
            self.client.table("channels")
            .select("name, channel_id")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return ChannelRecord(name=row["name"], channel_id=row["channel_id"])

    def create_channel(self, name: str, channel_id: str) -> ChannelRecord:
        """Create a channel row and return it."""
        response = (
            self.client.table("channels")
            .insert({"name": name, "channel_id": channel_id})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create channel in Supabase")
        row = response.data[0]
        return ChannelRecord(name=row["name"], channel_id=row["channel_id"])
