"""Configuration and persistence for credentials and endpoint settings."""

import json
import logging
import os
from pathlib import Path

from .models import (
    DEFAULT_API_BASE_URL,
    DEFAULT_AUTH_URL,
    ConfigError,
    Credentials,
    Settings,
)

logger = logging.getLogger(__name__)

ENV_HOME = "MERCADOPAGO_ENGINE_HOME"
ENV_CLIENT_ID = "MERCADOPAGO_CLIENT_ID"
ENV_CLIENT_SECRET = "MERCADOPAGO_CLIENT_SECRET"
ENV_ACCESS_TOKEN = "MERCADOPAGO_ACCESS_TOKEN"
ENV_API_BASE_URL = "MERCADOPAGO_API_BASE_URL"
ENV_AUTH_URL = "MERCADOPAGO_AUTH_URL"
ENV_TIMEOUT = "MERCADOPAGO_TIMEOUT_SECONDS"


def get_base_dir() -> Path:
    """
    Get the base directory for storing configuration.

    The directory is determined by:
    1. Environment variable MERCADOPAGO_ENGINE_HOME if set
    2. Otherwise, ~/.mercadopago_engine

    The directory is created if it does not exist.

    Returns:
        Path to the base directory
    """
    env_home = os.environ.get(ENV_HOME)
    if env_home:
        base_dir = Path(env_home)
    else:
        base_dir = Path.home() / ".mercadopago_engine"

    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def profile_config_path(profile: str, suffix: str = "credentials") -> Path:
    """
    Get the path for a profile's configuration file.

    Args:
        profile: Profile name (e.g. "default", "sandbox")
        suffix: File suffix (default: "credentials")

    Returns:
        Path to the configuration file
    """
    return get_base_dir() / f"{profile}_{suffix}.json"


def save_json(profile: str, suffix: str, data: dict) -> Path:
    """
    Save a dictionary as JSON to a profile configuration file.

    The file is written with owner-only permissions since it may hold secrets.

    Args:
        profile: Profile name
        suffix: File suffix
        data: Dictionary to save

    Returns:
        Path to the saved file
    """
    path = profile_config_path(profile, suffix)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        os.chmod(path, 0o600)
        logger.debug(f"Saved JSON to {path}")
        return path
    except (OSError, TypeError, ValueError) as e:
        raise ConfigError(f"Failed to save JSON to {path}: {e}") from e


def load_json(profile: str, suffix: str) -> dict:
    """
    Load a dictionary from a profile configuration file.

    Args:
        profile: Profile name
        suffix: File suffix

    Returns:
        The loaded dictionary

    Raises:
        ConfigError: If the file does not exist or JSON is invalid
    """
    path = profile_config_path(profile, suffix)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
        logger.debug(f"Loaded JSON from {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load JSON from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}")
    return data


def save_credentials(credentials: Credentials, profile: str = "default") -> Path:
    """
    Save Credentials to disk.

    Args:
        credentials: Credentials to save
        profile: Profile name

    Returns:
        Path to the saved file
    """
    return save_json(profile, "credentials", credentials.to_dict())


def load_credentials(profile: str = "default") -> Credentials:
    """
    Load Credentials from the environment and the profile file.

    Environment variables take precedence over values stored on disk, so a
    missing file is fine as long as the environment supplies both the client
    ID and the client secret.

    Args:
        profile: Profile name

    Returns:
        The resolved Credentials

    Raises:
        ConfigError: If client ID or client secret cannot be resolved
    """
    data: dict = {}
    path = profile_config_path(profile, "credentials")
    if path.exists():
        data = load_json(profile, "credentials")

    env_values = {
        "client_id": os.environ.get(ENV_CLIENT_ID),
        "client_secret": os.environ.get(ENV_CLIENT_SECRET),
        "access_token": os.environ.get(ENV_ACCESS_TOKEN),
    }
    for key, value in env_values.items():
        if value:
            data[key] = value

    missing = [key for key in ("client_id", "client_secret") if not data.get(key)]
    if missing:
        raise ConfigError(
            f"Missing credentials for profile '{profile}': {', '.join(missing)}. "
            f"Run 'mercadopago-engine configure' or set {ENV_CLIENT_ID} and {ENV_CLIENT_SECRET}."
        )

    try:
        return Credentials.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ConfigError(f"Failed to parse credentials for '{profile}': {e}") from e


def load_settings() -> Settings:
    """
    Load endpoint settings from the environment.

    Returns:
        Settings with defaults for anything not set

    Raises:
        ConfigError: If the timeout is not a number
    """
    timeout_raw = os.environ.get(ENV_TIMEOUT, "30")
    try:
        timeout_seconds = float(timeout_raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_TIMEOUT} must be a number, got '{timeout_raw}'") from e

    return Settings(
        api_base_url=os.environ.get(ENV_API_BASE_URL, DEFAULT_API_BASE_URL).rstrip("/"),
        auth_url=os.environ.get(ENV_AUTH_URL, DEFAULT_AUTH_URL),
        timeout_seconds=timeout_seconds,
    )
