"""Unit tests for the context-scoped configuration."""

import pytest

from src.user_admin.runtime.config.config_data import ConfigData, ExternalSourceConfig
from src.user_admin.runtime.context import (
    AppContext,
    get_config,
    get_context,
    merge_configs,
    with_context,
)


class TestContextManager:
    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert isinstance(get_config(), ConfigData)
        assert context.config is get_config()

    def test_with_context_override_single_level(self):
        original_config = get_config()
        original_host = original_config.app.host

        test_config = ConfigData()
        test_config.app.host = "custom_host"

        with with_context(test_config):
            assert get_config().app.host == "custom_host"
            assert get_config() is not original_config

        assert get_config().app.host == original_host
        assert get_config() is original_config

    def test_unset_fields_are_inherited(self):
        original_url = get_config().external_source.url

        override = ConfigData(external_source=ExternalSourceConfig(retry_attempts=1))

        with with_context(override):
            assert get_config().external_source.retry_attempts == 1
            assert get_config().external_source.url == original_url

    def test_nested_overrides(self):
        level1 = ConfigData()
        level1.app.port = 8001
        level2 = ConfigData()
        level2.app.host = "inner"

        with with_context(level1):
            with with_context(level2):
                assert get_config().app.port == 8001
                assert get_config().app.host == "inner"
            assert get_config().app.port == 8001

    def test_none_override_is_a_no_op(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_rejects_non_config_override(self):
        with pytest.raises(ValueError, match="config_override must be ConfigData"):
            with with_context({"app": {"host": "x"}}):
                pass


def test_merge_configs_overlays_explicit_fields_only():
    base = ConfigData()
    base.external_source.url = "https://base.test/users"
    override = ConfigData()
    override.external_source.cache_ttl_seconds = 0

    merged = merge_configs(base, override)

    assert merged.external_source.url == "https://base.test/users"
    assert merged.external_source.cache_ttl_seconds == 0
