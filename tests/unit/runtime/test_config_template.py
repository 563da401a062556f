"""Unit tests for templated YAML configuration loading."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.inventory.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    PaginationConfig,
)
from src.inventory.runtime.config.config_template import (
    apply_environment_overrides,
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)

PROJECT_CONFIG = Path(__file__).resolve().parents[3] / "config.yaml"

CONFIG_YAML = """
config:
  app:
    environment: "${APP_ENVIRONMENT:-development}"
    port: ${APP_PORT:-8000}
  database:
    url: "${DATABASE_URL:-sqlite:///./inventory.db}"
  pagination:
    default_page_size: ${DEFAULT_PAGE_SIZE:-10}
    max_page_size: 25
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return path


class TestSubstituteEnvVars:
    def test_default_value(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("port: ${PORT:-8000}") == "port: 8000"

    def test_value_from_environment(self):
        with patch.dict(os.environ, {"PORT": "9000"}, clear=True):
            assert substitute_env_vars("port: ${PORT:-8000}") == "port: 9000"

    def test_required_variable_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="PORT not set"):
                substitute_env_vars("port: ${PORT}")

    def test_required_variable_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="set the port"):
                substitute_env_vars("port: ${PORT:?set the port}")

    def test_comment_lines_are_not_substituted(self):
        text = "# use ${PORT} here\nport: ${PORT:-8000}\n"
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars(text) == "# use ${PORT} here\nport: 8000\n"


class TestLoadConfig:
    def test_load_templated_yaml(self, config_file):
        with patch.dict(os.environ, {"APP_PORT": "8123"}, clear=True):
            config = load_templated_yaml(config_file)

        assert config.app.port == 8123
        assert config.app.environment == "development"
        assert config.pagination == PaginationConfig(default_page_size=10, max_page_size=25)

    def test_environment_prefixed_overrides(self, config_file):
        env = {"APP_ENVIRONMENT": "production", "PRODUCTION_DATABASE_URL": "sqlite:///./prod.db"}
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.app.environment == "production"
        assert config.database.url == "sqlite:///./prod.db"

    def test_apply_environment_overrides(self):
        with patch.dict(os.environ, {"TEST_LOG_LEVEL": "DEBUG"}, clear=True):
            assert apply_environment_overrides("test") == ["LOG_LEVEL"]
            assert os.environ["LOG_LEVEL"] == "DEBUG"

    def test_invalid_config_is_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  pagination:\n    default_page_size: 50\n    max_page_size: 5\n")

        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="Invalid configuration"):
                load_templated_yaml(path)

    def test_project_config_loads_with_empty_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(PROJECT_CONFIG)

        assert config.app.environment == "development"
        assert config.database.url == "sqlite:///./inventory.db"
        assert config.pagination == PaginationConfig()

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == ConfigData()

    def test_config_file_from_environment(self, config_file):
        with patch.dict(os.environ, {"INVENTORY_CONFIG_FILE": str(config_file)}, clear=True):
            config = load_config()

        assert config.pagination.max_page_size == 25


class TestDatabaseConfig:
    def test_sqlite_connection_string(self):
        config = DatabaseConfig(url="sqlite:///./books.db")
        assert config.is_sqlite
        assert config.connection_string == "sqlite:///./books.db"

    def test_password_from_environment(self):
        config = DatabaseConfig(
            url="postgresql://inventory@db:5432/inventory",
            password_env_var="INVENTORY_DB_PASSWORD",
        )
        with patch.dict(os.environ, {"INVENTORY_DB_PASSWORD": "s3cret"}):
            assert config.password == "s3cret"
            assert config.connection_string == "postgresql://inventory:s3cret@db:5432/inventory"

    def test_password_from_file(self, tmp_path):
        secret = tmp_path / "db_password"
        secret.write_text("from-file\n")
        config = DatabaseConfig(
            url="postgresql://inventory@db:5432/inventory",
            password_file=str(secret),
        )
        assert config.password == "from-file"

    def test_missing_password_variable(self):
        config = DatabaseConfig(
            url="postgresql://inventory@db:5432/inventory",
            password_env_var="INVENTORY_DB_PASSWORD",
        )
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="INVENTORY_DB_PASSWORD not set"):
                _ = config.password
