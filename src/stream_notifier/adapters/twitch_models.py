"""Pydantic models for Twitch Helix payloads."""

from pydantic import BaseModel, Field


class TwitchTokenResponse(BaseModel):
    """OAuth client-credentials token payload."""

    access_token: str
    expires_in: int
    token_type: str | None = None


class TwitchUser(BaseModel):
    """Helix user payload."""

    id: str
    login: str


class TwitchUsersResponse(BaseModel):
    """Helix /users response."""

    data: list[TwitchUser] = Field(default_factory=list)


class TwitchStream(BaseModel):
    """Helix stream payload."""

    user_login: str
    user_name: str
    title: str = ""
    game_name: str | None = None
    thumbnail_url: str


class TwitchStreamsResponse(BaseModel):
    """Helix /streams response."""

    data: list[TwitchStream] = Field(default_factory=list)
