"""Configuration models and loaders for live events."""

from .models import (
    DEFAULT_MAX_QUEUE_SIZE,
    KINESIS_RECORD_SIZE_LIMIT,
    AwsConnectionConfig,
    LiveEventsConfig,
)
from .settings import get_config_from_env, load_config, load_config_with_fallback

__all__ = [
    "DEFAULT_MAX_QUEUE_SIZE",
    "KINESIS_RECORD_SIZE_LIMIT",
    "AwsConnectionConfig",
    "LiveEventsConfig",
    "get_config_from_env",
    "load_config",
    "load_config_with_fallback",
]
