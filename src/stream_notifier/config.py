"""Application configuration."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    twitch_client_id: str
    twitch_client_secret: str
    discord_webhook_url: str
    discord_role_id: str | None = None
    discord_guild_id: str | None = None
    supabase_url: str
    supabase_service_key: str
    channels: str | None = None
    channels_file: str = "config.json"
    poll_interval_seconds: float = 60.0
    http_timeout_seconds: float = 10.0
    close_on_unknown: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


class ChannelsFile(BaseModel):
    """Shape of the channel list file."""

    channels: list[str] = Field(default_factory=list)


def parse_channels(raw: str | None) -> list[str]:
    """Parse a comma-separated channel list, keeping order."""
    if raw is None:
        return []
    return _normalize(raw.split(","))


def load_channels(settings: Settings) -> list[str]:
    """Return the ordered channel list from env or the channel list file."""
    channels = parse_channels(settings.channels)
    if not channels:
        path = Path(settings.channels_file)
        if path.exists():
            payload = ChannelsFile.model_validate(json.loads(path.read_text("utf-8")))
            channels = _normalize(payload.channels)
    if not channels:
        raise ValueError(
            "No channels configured: set CHANNELS or list them in "
            f"{settings.channels_file}"
        )
    return channels


def _normalize(names: list[str]) -> list[str]:
    seen: list[str] = []
    for name in names:
        value = name.strip().lower()
        if value and value not in seen:
            seen.append(value)
    return seen
