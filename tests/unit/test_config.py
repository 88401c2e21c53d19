"""Test environment-driven settings."""

import pytest

from md2slides.config import Settings
from md2slides.errors import ConfigurationError

ENV_VARS = [
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_ENV_CLIENT_SECRET",
    "GOOGLE_REDIRECT_URI",
    "PORT",
    "HOST",
    "SESSION_SECRET",
    "SLIDE_DELIMITER",
    "PRESENTATION_TITLE",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv first so monkeypatch restores (removes) values the .env file loads
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return env_file


def test_defaults(clean_env):
    settings = Settings.from_env(str(clean_env))

    assert settings.port == 3000
    assert settings.host == "127.0.0.1"
    assert settings.redirect_uri == "http://localhost:3000/auth/google/callback"
    assert settings.slide_delimiter == "---"
    assert settings.client_id is None
    assert settings.session_secret


def test_values_from_env_file(clean_env):
    clean_env.write_text(
        "GOOGLE_CLIENT_ID=cid\n"
        "GOOGLE_CLIENT_SECRET=secret\n"
        "PORT=8080\n"
        "SESSION_SECRET=fixed\n"
        "PRESENTATION_TITLE=Weekly update\n"
    )

    settings = Settings.from_env(str(clean_env))

    assert settings.client_id == "cid"
    assert settings.client_secret == "secret"
    assert settings.port == 8080
    assert settings.redirect_uri == "http://localhost:8080/auth/google/callback"
    assert settings.session_secret == "fixed"
    assert settings.presentation_title == "Weekly update"


def test_legacy_secret_variable(clean_env, monkeypatch):
    monkeypatch.setenv("GOOGLE_ENV_CLIENT_SECRET", "legacy")

    assert Settings.from_env(str(clean_env)).client_secret == "legacy"


def test_client_config_shape():
    settings = Settings(client_id="cid", client_secret="secret", redirect_uri="http://x/cb")

    web = settings.client_config()["web"]

    assert web["client_id"] == "cid"
    assert web["redirect_uris"] == ["http://x/cb"]
    assert web["token_uri"] == "https://oauth2.googleapis.com/token"


def test_client_config_reports_missing_values():
    with pytest.raises(ConfigurationError, match="GOOGLE_CLIENT_SECRET"):
        Settings(client_id="cid", redirect_uri="http://x/cb").client_config()
