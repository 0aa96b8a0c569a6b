"""Unit tests for the external user source client."""

import pytest

from src.user_admin.core.services import ExternalSourceError, ExternalUserService
from src.user_admin.runtime.config.config_data import ConfigData, ExternalSourceConfig
from src.user_admin.runtime.context import get_config, with_context


class TestFetchUsers:
    """Fetching, retries and caching."""

    @pytest.mark.asyncio
    async def test_parses_external_shape(self, external_service, external_transport):
        users = await external_service.fetch_users()

        assert [u.username for u in users] == ["Bret", "Antonette"]
        leanne = users[0]
        assert leanne.address.city == "Gwenborough"
        assert leanne.address.zipcode == "92998-3874"
        assert leanne.website == "hildegard.org"
        assert leanne.company is not None and leanne.company.name == "Romaguera-Crona"
        assert leanne.is_local is False
        assert len(external_transport.calls) == 1
        assert str(external_transport.calls[0].url) == external_service.config.url

    @pytest.mark.asyncio
    async def test_retries_until_success(self, external_config, transport_factory):
        transport = transport_factory(failures=2)
        service = ExternalUserService(config=external_config, transport=transport)

        users = await service.fetch_users()

        assert len(users) == 2
        assert len(transport.calls) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_configured_attempts(self, external_config, transport_factory):
        transport = transport_factory(failures=10)
        service = ExternalUserService(config=external_config, transport=transport)

        with pytest.raises(ExternalSourceError) as exc_info:
            await service.fetch_users()

        assert exc_info.value.attempts == 3
        assert len(transport.calls) == 3

    @pytest.mark.asyncio
    async def test_http_error_status_is_retried(self, external_config, transport_factory):
        transport = transport_factory(status_code=503)
        service = ExternalUserService(config=external_config, transport=transport)

        with pytest.raises(ExternalSourceError):
            await service.fetch_users()

        assert len(transport.calls) == 3

    @pytest.mark.asyncio
    async def test_invalid_payload_is_not_retried(self, external_config, transport_factory):
        transport = transport_factory(payload={"users": "nope"})
        service = ExternalUserService(config=external_config, transport=transport)

        with pytest.raises(ExternalSourceError, match="invalid payload"):
            await service.fetch_users()

        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_snapshot_is_cached(self, external_service, external_transport):
        await external_service.fetch_users()
        await external_service.fetch_users()

        assert len(external_transport.calls) == 1

    @pytest.mark.asyncio
    async def test_clear_cache_forces_refetch(self, external_service, external_transport):
        await external_service.fetch_users()
        external_service.clear_cache()
        await external_service.fetch_users()

        assert len(external_transport.calls) == 2

    @pytest.mark.asyncio
    async def test_zero_ttl_disables_cache(self, transport_factory):
        transport = transport_factory()
        service = ExternalUserService(
            config=ExternalSourceConfig(
                url="https://external.test/users", retry_delay_ms=0, cache_ttl_seconds=0
            ),
            transport=transport,
        )

        await service.fetch_users()
        await service.fetch_users()

        assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_disabled_source_returns_nothing(self, transport_factory):
        transport = transport_factory()
        service = ExternalUserService(
            config=ExternalSourceConfig(enabled=False), transport=transport
        )

        assert await service.fetch_users() == []
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_reads_config_from_context(self, transport_factory):
        transport = transport_factory(failures=10)
        service = ExternalUserService(transport=transport)
        override = ConfigData(
            external_source=ExternalSourceConfig(
                url="https://context.test/users",
                retry_attempts=1,
                retry_delay_ms=0,
                cache_ttl_seconds=0,
            )
        )

        with with_context(override):
            with pytest.raises(ExternalSourceError):
                await service.fetch_users()

        assert len(transport.calls) == 1
        assert transport.calls[0].url.host == "context.test"

    @pytest.mark.asyncio
    async def test_context_ttl_applies_to_cache(self, transport_factory):
        transport = transport_factory()
        service = ExternalUserService(transport=transport)
        url = get_config().external_source.url
        no_cache = ConfigData(
            external_source=ExternalSourceConfig(url=url, cache_ttl_seconds=0)
        )
        cached = ConfigData(
            external_source=ExternalSourceConfig(url=url, cache_ttl_seconds=60)
        )

        with with_context(no_cache):
            await service.fetch_users()
            await service.fetch_users()
        assert len(transport.calls) == 2

        with with_context(cached):
            await service.fetch_users()
            await service.fetch_users()
        assert len(transport.calls) == 3


class TestGetUser:
    @pytest.mark.asyncio
    async def test_finds_by_id(self, external_service):
        user = await external_service.get_user(2)

        assert user is not None
        assert user.name == "Ervin Howell"

    @pytest.mark.asyncio
    async def test_missing_id_returns_none(self, external_service):
        assert await external_service.get_user(99) is None
