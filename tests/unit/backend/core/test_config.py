"""
Unit Tests for configuration loading.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from endorseme.backend.core import config as config_module
from endorseme.backend.core.config import (
    AppConfig,
    Settings,
    find_project_root,
    get_app_config,
    get_database_url,
    get_settings,
    load_yaml_config,
)
from endorseme.backend.core.config_schema import FeaturesSchema


class TestAppConfig:
    """Tests for YAML-backed AppConfig."""

    def test_loads_all_files(self):
        config = AppConfig.load()
        assert config.application.name == "Endorse Me"
        assert config.application.session.cookie_name == "endorseme_session"
        assert config.security.jwt.algorithm == "HS256"
        assert config.database.port == 5432
        assert config.logging.handlers.file.path == "logs/system.jsonl"

    def test_feature_defaults(self):
        features = get_app_config().features
        assert features.webapp_identity_enabled is True
        assert features.notification_include_details is False

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            FeaturesSchema(
                webapp_identity_enabled=True,
                notification_include_details=False,
                unknown_flag=True,
            )

    def test_invalid_file_is_named(self):
        def fake_load(filename):
            if filename == "features.yaml":
                return {"webapp_identity_enabled": "sometimes"}
            return load_yaml_config(filename)

        with patch.object(config_module, "load_yaml_config", side_effect=fake_load):
            with pytest.raises(ValueError, match="features.yaml"):
                AppConfig.load()

    def test_missing_file(self, tmp_path):
        with patch.object(config_module, "settings_dir", return_value=tmp_path):
            with pytest.raises(FileNotFoundError):
                load_yaml_config("features.yaml")

    def test_cached(self):
        assert get_app_config() is get_app_config()


class TestSettings:
    def test_telegram_values_default_to_empty(self, monkeypatch):
        for key in ("TELEGRAM_BOT_TOKEN", "TELEGRAM_BOT_USERNAME", "TELEGRAM_WEBAPP_URL"):
            monkeypatch.delenv(key, raising=False)
        settings = Settings(_env_file=None)
        assert settings.telegram_bot_token == ""
        assert settings.telegram_bot_username == ""
        assert settings.telegram_webapp_url == ""

    def test_secrets_required(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


def test_database_url(app_env):
    url = get_database_url()
    assert url.startswith("postgresql+asyncpg://endorseme:")
    assert app_env["DB_PASSWORD"] in url


def test_project_root_has_marker():
    assert (find_project_root() / ".project_root").exists()


def test_get_settings_cached():
    assert get_settings() is get_settings()
