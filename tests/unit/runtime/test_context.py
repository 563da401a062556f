"""Unit tests for the application context."""

import pytest

from src.inventory.runtime.config.config_data import ConfigData
from src.inventory.runtime.context import AppContext, get_config, get_context, with_context


class TestContextManager:
    def test_default_context_available(self):
        """Should have a default context available."""
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_partial_override_inherits_the_rest(self):
        original = get_config()

        override = ConfigData()
        override.pagination.max_page_size = 7
        override.pagination.default_page_size = 3

        with with_context(override):
            config = get_config()
            assert config.pagination.max_page_size == 7
            assert config.pagination.default_page_size == 3
            assert config.database.url == original.database.url
            assert config.app.port == original.app.port

        assert get_config() is original

    def test_nested_overrides(self):
        original = get_config()

        level1 = ConfigData()
        level1.app.environment = "test"

        with with_context(level1):
            level2 = ConfigData()
            level2.logging.level = "DEBUG"

            with with_context(level2):
                assert get_config().app.environment == "test"
                assert get_config().logging.level == "DEBUG"

            assert get_config().app.environment == "test"
            assert get_config().logging.level == original.logging.level

        assert get_config() is original

    def test_none_override_is_a_no_op(self):
        original = get_config()
        with with_context(None):
            assert get_config() is original

    def test_rejects_other_types(self):
        with pytest.raises(ValueError, match="must be ConfigData"):
            with with_context({"app": {"port": 1}}):
                pass

    def test_set_config_replaces_config_in_copied_context(self):
        import contextvars

        from src.inventory.runtime.context import set_config

        replacement = ConfigData()
        replacement.app.port = 9999

        def run():
            set_config(replacement)
            return get_config()

        assert contextvars.copy_context().run(run) is replacement
        assert get_config() is not replacement
