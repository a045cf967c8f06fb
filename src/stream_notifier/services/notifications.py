"""Notification content for stream lifecycle events."""

from datetime import datetime, timedelta

from stream_notifier.domain.notifications import Notification, NotificationField
from stream_notifier.domain.streams import StreamMetadata

THUMBNAIL_WIDTH = 1280
THUMBNAIL_HEIGHT = 720
LIVE_COLOR = 0x9146FF
ENDED_COLOR = 0xFF0000


def resolve_thumbnail(template: str) -> str:
    """Substitute the size placeholders of a templated thumbnail URL."""
    return template.replace("{width}", str(THUMBNAIL_WIDTH)).replace(
        "{height}", str(THUMBNAIL_HEIGHT)
    )


def cache_busted(thumbnail_base: str, now: datetime) -> str:
    """Append a time-derived query so clients fetch a fresh image."""
    return f"{thumbnail_base}?t={int(now.timestamp() * 1000)}"


def format_duration(elapsed: timedelta) -> str:
    """Format an elapsed time as hours and minutes, omitting zero hours."""
    total_minutes = max(int(elapsed.total_seconds()) // 60, 0)
    hours, minutes = divmod(total_minutes, 60)
    if hours <= 0:
        return f"{minutes}m"
    return f"{hours}h {minutes}m"


def replay_link(channel_name: str) -> str:
    """Return the link to the channel's on-demand videos."""
    return f"https://www.twitch.tv/{channel_name}/videos"


def role_mention(role_id: str | None) -> str | None:
    if not role_id:
        return None
    return f"<@&{role_id}>"


def build_live_notification(
    metadata: StreamMetadata,
    image_url: str,
    timestamp: datetime,
    mention: str | None = None,
) -> Notification:
    """Build the content announcing that a channel is live."""
    title = metadata.title.strip()
    return Notification(
        title=f"{metadata.display_name} is LIVE",
        description=f"## {title}" if title else "No stream title",
        color=LIVE_COLOR,
        timestamp=timestamp,
        url=f"https://twitch.tv/{metadata.login}",
        image_url=image_url,
        fields=(
            NotificationField(
                name="Game", value=metadata.game_name or "Unknown", inline=True
            ),
        ),
        mention=mention,
    )


def build_ended_notification(
    channel_name: str,
    duration: str,
    replay_url: str,
    ended_at: datetime,
    mention: str | None = None,
) -> Notification:
    """Build the content summarizing a finished stream."""
    return Notification(
        title=f"{channel_name} just finished streaming!",
        description=(
            f"Streamed for **{duration}**.\nVOD link: [Click Here]({replay_url})"
        ),
        color=ENDED_COLOR,
        timestamp=ended_at,
        mention=mention,
    )
