"""Tests for the configuration store."""

import json
import stat

import pytest

from mercadopago_engine.core.models import ConfigError, Credentials
from mercadopago_engine.core.config_store import (
    get_base_dir,
    profile_config_path,
    save_json,
    load_json,
    save_credentials,
    load_credentials,
    load_settings,
)


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Set up a temporary home directory for config storage."""
    monkeypatch.setenv("MERCADOPAGO_ENGINE_HOME", str(tmp_path))
    for var in (
        "MERCADOPAGO_CLIENT_ID",
        "MERCADOPAGO_CLIENT_SECRET",
        "MERCADOPAGO_ACCESS_TOKEN",
        "MERCADOPAGO_API_BASE_URL",
        "MERCADOPAGO_AUTH_URL",
        "MERCADOPAGO_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def test_get_base_dir_with_env_var(temp_home):
    """Test get_base_dir uses MERCADOPAGO_ENGINE_HOME."""
    base_dir = get_base_dir()
    assert base_dir == temp_home
    assert base_dir.exists()


def test_get_base_dir_creates_directory(temp_home):
    """Test get_base_dir creates the directory if it doesn't exist."""
    temp_home.rmdir()
    assert not temp_home.exists()

    base_dir = get_base_dir()
    assert base_dir.exists()
    assert base_dir.is_dir()


def test_profile_config_path(temp_home):
    """Test profile_config_path generates correct paths."""
    assert profile_config_path("default") == temp_home / "default_credentials.json"
    assert profile_config_path("sandbox", "settings") == temp_home / "sandbox_settings.json"


def test_save_and_load_json(temp_home):
    """Test saving and loading JSON data."""
    data = {"client_id": "123", "nested": {"a": [1, 2]}}

    path = save_json("default", "credentials", data)
    assert path.exists()
    assert load_json("default", "credentials") == data


def test_save_json_restricts_permissions(temp_home):
    """Test that saved files are owner read/write only."""
    path = save_json("default", "credentials", {"client_secret": "s"})
    mode = path.stat().st_mode
    assert mode & stat.S_IRUSR
    assert mode & stat.S_IWUSR
    assert not (mode & stat.S_IRGRP)
    assert not (mode & stat.S_IROTH)


def test_save_json_unserializable_raises(temp_home):
    """Test save_json wraps serialization errors."""
    with pytest.raises(ConfigError):
        save_json("default", "credentials", {"bad": object()})


def test_load_json_missing_file(temp_home):
    """Test load_json raises ConfigError for a missing file."""
    with pytest.raises(ConfigError) as exc_info:
        load_json("nope", "credentials")
    assert "not found" in str(exc_info.value)


def test_load_json_invalid_json(temp_home):
    """Test load_json raises ConfigError for invalid JSON."""
    (temp_home / "broken_credentials.json").write_text("{not json")
    with pytest.raises(ConfigError) as exc_info:
        load_json("broken", "credentials")
    assert "Invalid JSON" in str(exc_info.value)


def test_load_json_requires_object(temp_home):
    """Test load_json rejects non-object JSON."""
    (temp_home / "list_credentials.json").write_text(json.dumps([1, 2]))
    with pytest.raises(ConfigError):
        load_json("list", "credentials")


def test_save_and_load_credentials(temp_home):
    """Test credentials round trip through disk."""
    credentials = Credentials(client_id="123", client_secret="secret", access_token="APP_USR-1")
    save_credentials(credentials)

    assert load_credentials() == credentials


def test_load_credentials_env_overrides_file(temp_home, monkeypatch):
    """Test environment variables take precedence over the file."""
    save_credentials(Credentials(client_id="file-id", client_secret="file-secret"))
    monkeypatch.setenv("MERCADOPAGO_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("MERCADOPAGO_ACCESS_TOKEN", "env-token")

    credentials = load_credentials()

    assert credentials.client_id == "file-id"
    assert credentials.client_secret == "env-secret"
    assert credentials.access_token == "env-token"


def test_load_credentials_from_env_only(temp_home, monkeypatch):
    """Test credentials resolved from the environment without a file."""
    monkeypatch.setenv("MERCADOPAGO_CLIENT_ID", "env-id")
    monkeypatch.setenv("MERCADOPAGO_CLIENT_SECRET", "env-secret")

    credentials = load_credentials("sandbox")

    assert credentials == Credentials(client_id="env-id", client_secret="env-secret")


def test_load_credentials_missing(temp_home):
    """Test missing credentials raise ConfigError naming the fields."""
    with pytest.raises(ConfigError) as exc_info:
        load_credentials()
    assert "client_id" in str(exc_info.value)
    assert "client_secret" in str(exc_info.value)


def test_load_settings_defaults(temp_home):
    """Test settings defaults."""
    settings = load_settings()
    assert settings.api_base_url == "https://api.mercadopago.com"
    assert settings.auth_url == "https://auth.mercadopago.com/authorization"
    assert settings.timeout_seconds == 30.0


def test_load_settings_from_env(temp_home, monkeypatch):
    """Test settings overrides from the environment."""
    monkeypatch.setenv("MERCADOPAGO_API_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("MERCADOPAGO_AUTH_URL", "http://localhost:8080/authorization")
    monkeypatch.setenv("MERCADOPAGO_TIMEOUT_SECONDS", "5.5")

    settings = load_settings()

    assert settings.api_base_url == "http://localhost:8080"
    assert settings.auth_url == "http://localhost:8080/authorization"
    assert settings.timeout_seconds == 5.5


def test_load_settings_invalid_timeout(temp_home, monkeypatch):
    """Test a non-numeric timeout raises ConfigError."""
    monkeypatch.setenv("MERCADOPAGO_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ConfigError):
        load_settings()
