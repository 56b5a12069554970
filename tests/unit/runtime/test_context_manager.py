"""Unit tests for the application context."""

from src.user_service.runtime.config.config_data import ConfigData, LoggingConfig
from src.user_service.runtime.context import (
    AppContext,
    get_config,
    get_context,
    load_config,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_level(self):
        original_config = get_config()
        original_url = original_config.database.url

        test_config = ConfigData()
        test_config.database.url = "sqlite:///:memory:"

        with with_context(test_config):
            override_config = get_config()
            assert override_config.database.url == "sqlite:///:memory:"
            assert override_config is not original_config

        after_config = get_config()
        assert after_config.database.url == original_url
        assert after_config is original_config

    def test_with_context_partial_override_inherits_siblings(self):
        base_host = get_config().app.host
        outer = ConfigData()
        outer.app.port = 8101
        outer.logging.level = "DEBUG"

        with with_context(outer):
            inner = ConfigData()
            inner.app.host = "inner-host"

            with with_context(inner):
                config = get_config()
                assert config.app.host == "inner-host"
                assert config.app.port == 8101
                assert config.logging.level == "DEBUG"

            assert get_config().app.host == base_host
            assert get_config().app.port == 8101

    def test_with_context_replaces_whole_section(self):
        outer = ConfigData()
        outer.logging.level = "DEBUG"

        with with_context(outer):
            with with_context(ConfigData(logging=LoggingConfig())):
                assert get_config().logging.level == "INFO"

            assert get_config().logging.level == "DEBUG"

    def test_with_context_none_is_a_no_op(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_load_config_without_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")

        assert config.database.url == ConfigData().database.url
