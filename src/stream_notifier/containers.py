"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from stream_notifier.adapters.discord_webhook_client import (
    DiscordWebhookClient,
    HttpxDiscordWebhookClient,
)
from stream_notifier.adapters.supabase_channel_repository import (
    SupabaseChannelRepository,
)
from stream_notifier.adapters.supabase_error_repository import SupabaseErrorRepository
from stream_notifier.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from stream_notifier.adapters.twitch_client import HttpxTwitchClient, TwitchClient
from stream_notifier.config import Settings, load_channels
from stream_notifier.services.channels import ChannelService
from stream_notifier.services.clock import SystemClock
from stream_notifier.services.errors import ErrorRecorder
from stream_notifier.services.lifecycle import SessionLifecycleService
from stream_notifier.services.notifications import role_mention
from stream_notifier.services.scheduler import PollScheduler


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    twitch_client: TwitchClient
    webhook_client: DiscordWebhookClient
    error_recorder: ErrorRecorder
    lifecycle_service: SessionLifecycleService
    scheduler: PollScheduler
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, channels: list[str] | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_channels = channels or load_channels(resolved_settings)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock()
    channel_repository = SupabaseChannelRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    error_recorder = ErrorRecorder(SupabaseErrorRepository(supabase_client), clock)
    twitch_client = HttpxTwitchClient.create(
        client_id=resolved_settings.twitch_client_id,
        client_secret=resolved_settings.twitch_client_secret,
        timeout=resolved_settings.http_timeout_seconds,
    )
    webhook_client = HttpxDiscordWebhookClient.create(
        resolved_settings.discord_webhook_url,
        guild_id=resolved_settings.discord_guild_id,
        timeout=resolved_settings.http_timeout_seconds,
    )
    lifecycle_service = SessionLifecycleService(
        channel_service=ChannelService(channel_repository, twitch_client),
        session_repository=session_repository,
        twitch_client=twitch_client,
        webhook_client=webhook_client,
        error_recorder=error_recorder,
        clock=clock,
        mention=role_mention(resolved_settings.discord_role_id),
        close_on_unknown=resolved_settings.close_on_unknown,
    )
    scheduler = PollScheduler(
        lifecycle_service=lifecycle_service,
        channels=resolved_channels,
        error_recorder=error_recorder,
        interval_seconds=resolved_settings.poll_interval_seconds,
    )

    async def close_resources() -> None:
        await twitch_client.close()
        await webhook_client.close()

    return AppContainer(
        settings=resolved_settings,
        twitch_client=twitch_client,
        webhook_client=webhook_client,
        error_recorder=error_recorder,
        lifecycle_service=lifecycle_service,
        scheduler=scheduler,
        close_resources=close_resources,
    )
