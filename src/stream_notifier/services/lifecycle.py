"""Stream session lifecycle: start, refresh and stop per polling tick."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from stream_notifier.adapters.discord_webhook_client import DiscordWebhookClient
from stream_notifier.adapters.twitch_client import TwitchClient
from stream_notifier.domain.channels import ChannelRecord
from stream_notifier.domain.sessions import HistoryRecord, StreamSession
from stream_notifier.domain.streams import Live, LiveStatus, Offline, StreamMetadata
from stream_notifier.services.channels import ChannelService
from stream_notifier.services.clock import Clock
from stream_notifier.services.errors import ErrorRecorder
from stream_notifier.services.notifications import (
    build_ended_notification,
    build_live_notification,
    cache_busted,
    format_duration,
    replay_link,
    resolve_thumbnail,
)
from stream_notifier.services.sessions import SessionRepository

_logger = logging.getLogger(__name__)

THUMBNAIL_REFRESH_INTERVAL = timedelta(minutes=10)


class ReconcileOutcome(StrEnum):
    """What a single reconcile call did for a channel."""

    STARTED = "started"
    REFRESHED = "refreshed"
    UNCHANGED = "unchanged"
    STOPPED = "stopped"
    HELD = "held"
    IDLE = "idle"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SessionLifecycleService:
    """Reconciles upstream live status with the stored open session.

    Holds no state between calls: every call re-reads the session repository,
    so a restart mid-session resumes from whatever was persisted.
    """

    channel_service: ChannelService
    session_repository: SessionRepository
    twitch_client: TwitchClient
    webhook_client: DiscordWebhookClient
    error_recorder: ErrorRecorder
    clock: Clock
    mention: str | None = None
    refresh_interval: timedelta = THUMBNAIL_REFRESH_INTERVAL
    close_on_unknown: bool = False

    async def reconcile(self, channel_name: str) -> ReconcileOutcome:
        """Run one tick of the lifecycle for a channel."""
        try:
            channel = await self.channel_service.resolve(channel_name)
        except Exception as exc:
            self.error_recorder.record(exc, "ChannelResolve")
            return ReconcileOutcome.FAILED
        if channel is None:
            return ReconcileOutcome.SKIPPED

        try:
            status = await self.twitch_client.get_live_status(channel.channel_id)
        except Exception as exc:
            self.error_recorder.record(exc, "LiveStatus")
            return ReconcileOutcome.FAILED

        try:
            return await self._apply(channel, status)
        except Exception as exc:
            self.error_recorder.record(exc, "CheckChannel")
            return ReconcileOutcome.FAILED

    async def _apply(
        self, channel: ChannelRecord, status: LiveStatus
    ) -> ReconcileOutcome:
        session = self.session_repository.get_open_session(channel.channel_id)

        if isinstance(status, Live):
            if session is None:
                return await self._start(channel, status.metadata)
            return await self._continue(channel, session, status.metadata)

        if session is None:
            return ReconcileOutcome.IDLE

        if not isinstance(status, Offline) and not self.close_on_unknown:
            _logger.warning(
                "[%s] Live status unknown (%s); keeping session open",
                channel.name,
                status.reason,
            )
            return ReconcileOutcome.HELD
        return await self._stop(channel, session)

    async def _start(
        self, channel: ChannelRecord, metadata: StreamMetadata
    ) -> ReconcileOutcome:
        now = self.clock.now()
        thumbnail_base = resolve_thumbnail(metadata.thumbnail_template)
        notification = build_live_notification(
            metadata,
            image_url=cache_busted(thumbnail_base, now),
            timestamp=now,
            mention=self.mention,
        )
        message = await self.webhook_client.send(notification)
        self.session_repository.create_session(
            channel_id=channel.channel_id,
            start_time=now,
            message_id=message.message_id,
            message_link=message.link,
            thumbnail_base=thumbnail_base,
            last_thumbnail_refresh=now,
        )
        _logger.info("[%s] Went LIVE! message_id=%s", channel.name, message.message_id)
        return ReconcileOutcome.STARTED

    async def _continue(
        self,
        channel: ChannelRecord,
        session: StreamSession,
        metadata: StreamMetadata,
    ) -> ReconcileOutcome:
        now = self.clock.now()
        if not _refresh_due(session.last_thumbnail_refresh, now, self.refresh_interval):
            return ReconcileOutcome.UNCHANGED

        _logger.info("[%s] Refreshing thumbnail", channel.name)
        thumbnail_base = session.thumbnail_base or resolve_thumbnail(
            metadata.thumbnail_template
        )
        self.session_repository.update_thumbnail(session.id, thumbnail_base, now)

        if not session.message_id:
            _logger.warning("[%s] Open session has no message to edit", channel.name)
            return ReconcileOutcome.REFRESHED
        notification = build_live_notification(
            metadata,
            image_url=cache_busted(thumbnail_base, now),
            timestamp=now,
            mention=self.mention,
        )
        try:
            await self.webhook_client.edit(session.message_id, notification)
        except Exception as exc:
            self.error_recorder.record(exc, "ThumbnailRefresh")
        return ReconcileOutcome.REFRESHED

    async def _stop(
        self, channel: ChannelRecord, session: StreamSession
    ) -> ReconcileOutcome:
        end_time = max(self.clock.now(), session.start_time)
        duration = format_duration(end_time - session.start_time)
        replay_url = replay_link(channel.name)
        self.session_repository.create_history_record(
            HistoryRecord(
                channel_id=channel.channel_id,
                duration=duration,
                start_time=session.start_time,
                end_time=end_time,
                message_id=session.message_id,
                message_link=session.message_link,
                replay_link=replay_url,
            )
        )
        # Close only once the history row is stored.
        self.session_repository.close_session(session.id, end_time)

        if not session.message_id:
            _logger.warning("[%s] Stream ended; no message to edit", channel.name)
            return ReconcileOutcome.STOPPED
        notification = build_ended_notification(
            channel.name,
            duration=duration,
            replay_url=replay_url,
            ended_at=end_time,
            mention=self.mention,
        )
        try:
            await self.webhook_client.edit(session.message_id, notification)
        except Exception as exc:
            self.error_recorder.record(exc, "StreamEndUpdate")
        else:
            _logger.info(
                "[%s] Stream ended after %s; message updated", channel.name, duration
            )
        return ReconcileOutcome.STOPPED


def _refresh_due(
    last_refresh: datetime | None, now: datetime, interval: timedelta
) -> bool:
    if last_refresh is None:
        return True
    return now - last_refresh >= interval
