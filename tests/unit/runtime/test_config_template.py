"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)


class TestConfigData:
    def test_app_section_carries_only_server_settings(self):
        app_config = ConfigData().app

        assert set(app_config.model_dump()) == {"environment", "name", "host", "port"}
        assert not hasattr(app_config, "base_url")

class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            text = "Server running at http://${HOST}:${PORT}/api"
            assert substitute_env_vars(text) == "Server running at http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_substitute_env_var_with_default_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual_value"}):
            assert substitute_env_vars("${PRESENT_VAR:-default_value}") == "actual_value"

    def test_substitute_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_required_env_var_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DB_URL: set the database"):
                substitute_env_vars("${DB_URL:?set the database}")


class TestLoadTemplatedYaml:
    """Test cases for load_templated_yaml function."""

    def _write(self, tmp_path: Path, content: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(content)
        return path

    def test_loads_sections(self, tmp_path):
        path = self._write(
            tmp_path,
            "config:\n"
            "  app:\n"
            "    environment: test\n"
            "    port: 9000\n"
            "  database:\n"
            "    url: sqlite:///./other.db\n",
        )

        config = load_templated_yaml(path, env_mode="test")

        assert isinstance(config, ConfigData)
        assert config.app.environment == "test"
        assert config.app.port == 9000
        assert config.database.url == "sqlite:///./other.db"
        # Untouched sections keep their defaults
        assert config.logging.level == "INFO"

    def test_environment_prefixed_variables_override(self, tmp_path):
        path = self._write(
            tmp_path,
            "config:\n"
            "  database:\n"
            "    url: ${DATABASE_URL:-sqlite:///./users.db}\n",
        )

        with patch.dict(os.environ, {"TEST_DATABASE_URL": "sqlite:///./from-env.db"}, clear=True):
            config = load_templated_yaml(path, env_mode="test")

        assert config.database.url == "sqlite:///./from-env.db"

    def test_invalid_values_raise_value_error(self, tmp_path):
        path = self._write(tmp_path, "config:\n  app:\n    port: not-a-port\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path, env_mode="test")

    def test_empty_file_raises_value_error(self, tmp_path):
        path = self._write(tmp_path, "")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path, env_mode="test")

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "nope.yaml", env_mode="test")
