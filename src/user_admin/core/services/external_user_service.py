"""Read-only client for the external user source."""

import asyncio

import httpx
from cachetools import TTLCache
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from src.user_admin.entities.core.external_user import ExternalUser
from src.user_admin.runtime.config.config_data import ExternalSourceConfig
from src.user_admin.runtime.context import get_config

_USERS_ADAPTER = TypeAdapter(list[ExternalUser])


class ExternalSourceError(Exception):
    """The external user source could not be read."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class ExternalUserService:
    """Fetches the external user collection with retries and a TTL cache.

    Configuration is read from the current context on every call unless an
    explicit ``config`` is given.
    """

    def __init__(
        self,
        config: ExternalSourceConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._cache: TTLCache[str, list[ExternalUser]] | None = None

    @property
    def config(self) -> ExternalSourceConfig:
        return self._config or get_config().external_source

    def clear_cache(self) -> None:
        """Drop any cached snapshot so the next read goes to the source."""
        if self._cache is not None:
            self._cache.clear()

    async def fetch_users(self) -> list[ExternalUser]:
        """Return the external users, from cache when still fresh.

        Raises:
            ExternalSourceError: every attempt failed or the payload was invalid
        """
        cfg = self.config
        if not cfg.enabled:
            return []

        cache = self._cache_for(cfg)
        if cache is not None and cfg.url in cache:
            return list(cache[cfg.url])

        users = await self._fetch_with_retries(cfg)
        if cache is not None:
            cache[cfg.url] = users
        return list(users)

    def _cache_for(self, cfg: ExternalSourceConfig) -> TTLCache | None:
        # rebuilt when the active ttl changes; 0 disables caching
        ttl = cfg.cache_ttl_seconds
        if ttl <= 0:
            return None
        if self._cache is None or self._cache.ttl != ttl:
            self._cache = TTLCache(maxsize=4, ttl=ttl)
        return self._cache

    async def get_user(self, user_id: int) -> ExternalUser | None:
        """Return the external user with ``user_id``, or None."""
        for user in await self.fetch_users():
            if user.id == user_id:
                return user
        return None

    async def _fetch_with_retries(self, cfg: ExternalSourceConfig) -> list[ExternalUser]:
        last_error: Exception | None = None
        for attempt in range(1, cfg.retry_attempts + 1):
            try:
                payload = await self._get(cfg)
                users = _USERS_ADAPTER.validate_python(payload)
                logger.bind(url=cfg.url, count=len(users), attempt=attempt).info(
                    "external_users.fetched"
                )
                return users
            except ValidationError as exc:
                # a malformed payload will not improve on retry
                raise ExternalSourceError(
                    f"External source returned an invalid payload: {exc.error_count()} errors",
                    attempts=attempt,
                ) from exc
            except httpx.HTTPError as exc:
                last_error = exc
                logger.bind(url=cfg.url, attempt=attempt, error=str(exc)).warning(
                    "external_users.fetch_failed"
                )
                if attempt < cfg.retry_attempts:
                    await asyncio.sleep(cfg.retry_delay_seconds)

        raise ExternalSourceError(
            f"Failed to fetch external users after {cfg.retry_attempts} attempts: {last_error}",
            attempts=cfg.retry_attempts,
        ) from last_error

    async def _get(self, cfg: ExternalSourceConfig) -> object:
        async with httpx.AsyncClient(
            timeout=cfg.timeout_seconds, transport=self._transport
        ) as client:
            resp = await client.get(cfg.url)
            resp.raise_for_status()
            try:
                return resp.json()
            except ValueError as exc:
                raise httpx.DecodingError(f"Response is not JSON: {exc}") from exc
