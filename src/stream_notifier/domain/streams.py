"""Domain models for upstream live status."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StreamMetadata:
    """Metadata describing a stream that is currently live."""

    display_name: str
    login: str
    title: str
    game_name: str | None
    thumbnail_template: str


@dataclass(frozen=True)
class Live:
    """The channel is broadcasting."""

    metadata: StreamMetadata


@dataclass(frozen=True)
class Offline:
    """The channel is confirmed offline."""


@dataclass(frozen=True)
class Unknown:
    """The status could not be determined this tick."""

    reason: str


LiveStatus = Live | Offline | Unknown
