"""
Configuration loading for live events.

The process-wide configuration comes from an explicit JSON file, the
``LIVE_EVENTS_CONFIG_FILE`` environment variable, or individual
``LIVE_EVENTS_*`` environment variables. When none of them is set live
events are disabled and the loaders return ``None``.
"""

import os
from pathlib import Path

from ..errors import ConfigurationError
from .models import LiveEventsConfig

CONFIG_FILE_ENV = "LIVE_EVENTS_CONFIG_FILE"

ENV_VARS = {
    "LIVE_EVENTS_STREAM_NAME": "stream_name",
    "LIVE_EVENTS_AWS_ACCESS_KEY_ID": "aws_access_key_id",
    "LIVE_EVENTS_AWS_SECRET_ACCESS_KEY": "aws_secret_access_key",
    "LIVE_EVENTS_AWS_REGION": "aws_region",
    "LIVE_EVENTS_AWS_ENDPOINT": "aws_endpoint",
    "LIVE_EVENTS_MAX_QUEUE_SIZE": "max_queue_size",
}


def load_config(config_path: str | Path) -> LiveEventsConfig:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the config file, or a directory holding
            ``live_events.json``

    Returns:
        LiveEventsConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ConfigurationError: If configuration is invalid
    """
    config_path = Path(config_path)

    if config_path.is_dir():
        config_path = config_path / "live_events.json"

    return LiveEventsConfig.from_file(config_path)


def get_config_from_env() -> LiveEventsConfig | None:
    """
    Try to load configuration from environment variables.

    Returns:
        LiveEventsConfig if environment variables are set, None otherwise

    Raises:
        ConfigurationError: If the variables are set but invalid
    """
    config_file_env = os.getenv(CONFIG_FILE_ENV)
    if config_file_env:
        return load_config(config_file_env)

    env_values = {
        field: os.getenv(var) for var, field in ENV_VARS.items() if os.getenv(var)
    }
    if not env_values:
        return None

    if "max_queue_size" in env_values:
        try:
            env_values["max_queue_size"] = int(env_values["max_queue_size"])
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid environment variable configuration: {e}"
            ) from e

    return LiveEventsConfig.from_mapping(env_values)


def load_config_with_fallback(config_path: str | Path | None = None) -> LiveEventsConfig | None:
    """
    Load configuration from the first available source.

    Priority order:
    1. Explicit config file path
    2. Environment variable LIVE_EVENTS_CONFIG_FILE
    3. Individual LIVE_EVENTS_* environment variables

    Returns:
        LiveEventsConfig, or None when live events are not configured
    """
    if config_path:
        return load_config(config_path)

    return get_config_from_env()
