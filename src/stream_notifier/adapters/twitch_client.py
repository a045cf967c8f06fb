"""Twitch Helix API client adapter."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from stream_notifier.adapters.twitch_models import (
    TwitchStreamsResponse,
    TwitchTokenResponse,
    TwitchUsersResponse,
)
from stream_notifier.domain.streams import (
    Live,
    LiveStatus,
    Offline,
    StreamMetadata,
    Unknown,
)
from stream_notifier.services.cache import Cache, InMemoryCache

_logger = logging.getLogger(__name__)

HELIX_BASE = "https://api.twitch.tv/helix"
OAUTH_BASE = "https://id.twitch.tv/oauth2"
_TOKEN_CACHE_KEY = "twitch_app_token"
_TOKEN_EXPIRY_BUFFER_SECONDS = 60


class TwitchClient(Protocol):
    """Interface for Twitch liveness lookups."""

    async def resolve_channel_id(self, login: str) -> str | None:
        """Return the Twitch user id for a login name, if it exists."""

    async def get_live_status(self, channel_id: str) -> LiveStatus:
        """Return whether the channel is live right now."""


@dataclass
class HttpxTwitchClient(TwitchClient):
    """Twitch client implemented with httpx and an app access token."""

    client_id: str
    client_secret: str
    http_client: httpx.AsyncClient
    token_cache: Cache = field(default_factory=InMemoryCache)
    timeout: float = 10.0
    api_base: str = HELIX_BASE
    oauth_base: str = OAUTH_BASE

    @classmethod
    def create(
        cls, client_id: str, client_secret: str, timeout: float = 10.0
    ) -> "HttpxTwitchClient":
        """Create a Twitch client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def resolve_channel_id(self, login: str) -> str | None:
        """Look up a user id through Helix /users."""
        response = await self._helix_get("/users", {"login": login})
        if not response.is_success:
            _logger.error(
                "Twitch user lookup failed: login=%s status=%s",
                login,
                response.status_code,
            )
            return None
        payload = TwitchUsersResponse.model_validate(response.json())
        if not payload.data:
            return None
        return payload.data[0].id

    async def get_live_status(self, channel_id: str) -> LiveStatus:
        """Check Helix /streams for a live broadcast."""
        response = await self._helix_get("/streams", {"user_id": channel_id})
        if not response.is_success:
            _logger.warning(
                "Twitch stream lookup failed: channel_id=%s status=%s",
                channel_id,
                response.status_code,
            )
            return Unknown(reason=f"HTTP {response.status_code}")
        payload = TwitchStreamsResponse.model_validate(response.json())
        if not payload.data:
            return Offline()
        stream = payload.data[0]
        return Live(
            metadata=StreamMetadata(
                display_name=stream.user_name,
                login=stream.user_login,
                title=stream.title,
                game_name=stream.game_name or None,
                thumbnail_template=stream.thumbnail_url,
            )
        )

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _helix_get(self, path: str, params: dict[str, str]) -> httpx.Response:
        token = await self._app_token()
        response = await self.http_client.get(
            f"{self.api_base}{path}",
            params=params,
            headers={"Client-Id": self.client_id, "Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self.token_cache.delete(_TOKEN_CACHE_KEY)
        return response

    async def _app_token(self) -> str:
        cached = self.token_cache.get(_TOKEN_CACHE_KEY)
        if isinstance(cached, str):
            return cached

        _logger.info("Fetching new Twitch app access token")
        response = await self.http_client.post(
            f"{self.oauth_base}/token",
            params={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "grant_type": "client_credentials",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        token = TwitchTokenResponse.model_validate(response.json())
        self.token_cache.set(
            _TOKEN_CACHE_KEY,
            token.access_token,
            ttl_seconds=max(token.expires_in - _TOKEN_EXPIRY_BUFFER_SECONDS, 0),
        )
        return token.access_token
