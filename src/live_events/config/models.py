"""
Configuration models for live events.

These models define the structure and validation of the process-wide
configuration mapping and of the AWS connection descriptor derived from it.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from botocore.config import Config as BotoConfig
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from ..errors import ConfigurationError

DEFAULT_MAX_QUEUE_SIZE = 1000
KINESIS_RECORD_SIZE_LIMIT = 1_000_000


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class AwsConnectionConfig(BaseModel):
    """Connection descriptor for the default Kinesis stream backend."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str | None = Field(None, description="AWS access key id")
    secret_access_key: str | None = Field(None, description="AWS secret access key")
    region: str | None = Field(None, description="AWS region name")
    endpoint: str | None = Field(
        None, description="Endpoint override URL, kept exactly as configured"
    )
    connect_timeout: float = Field(5.0, gt=0, description="Connect timeout in seconds")
    read_timeout: float = Field(10.0, gt=0, description="Read timeout in seconds")
    max_attempts: int = Field(1, ge=1, description="botocore attempts per put_record call")

    @field_validator("access_key_id", "secret_access_key", "region", "endpoint", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        """Require scheme and host, but never rewrite the URL."""
        if v is None:
            return v
        parts = urlsplit(v)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"aws_endpoint must be an absolute URL, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_credentials_pair(self):
        """Credentials are given together or left to the default AWS chain."""
        if (self.access_key_id is None) != (self.secret_access_key is None):
            raise ValueError(
                "aws_access_key_id and aws_secret_access_key must be set together"
            )
        return self

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``boto3.client("kinesis", ...)``."""
        kwargs: dict[str, Any] = {
            "config": BotoConfig(
                connect_timeout=self.connect_timeout,
                read_timeout=self.read_timeout,
                retries={"max_attempts": self.max_attempts},
            )
        }
        if self.region:
            kwargs["region_name"] = self.region
        if self.access_key_id:
            kwargs["aws_access_key_id"] = self.access_key_id
            kwargs["aws_secret_access_key"] = self.secret_access_key
        if self.endpoint:
            kwargs["endpoint_url"] = self.endpoint
        return kwargs

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "AwsConnectionConfig":
        """
        Build a connection descriptor from a raw configuration mapping.

        Args:
            raw: Mapping using the configuration file keys (``aws_region``,
                ``aws_endpoint``, ...)

        Returns:
            AwsConnectionConfig

        Raises:
            ConfigurationError: If a value is invalid
        """
        secret = raw.get("aws_secret_access_key")
        if secret is None:
            secret = raw.get("aws_secret_access_key_dec")

        data = {
            "access_key_id": raw.get("aws_access_key_id"),
            "secret_access_key": secret,
            "region": raw.get("aws_region"),
            "endpoint": raw.get("aws_endpoint"),
        }
        for source, target in (
            ("aws_connect_timeout", "connect_timeout"),
            ("aws_read_timeout", "read_timeout"),
            ("aws_max_attempts", "max_attempts"),
        ):
            if raw.get(source) is not None:
                data[target] = raw[source]

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid AWS configuration: {e}") from e


class LiveEventsConfig(BaseModel):
    """Process-wide live events configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    stream_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("stream_name", "kinesis_stream_name"),
        description="Destination stream name",
    )
    aws_access_key_id: str | None = Field(None, description="AWS access key id")
    aws_secret_access_key: str | None = Field(
        None,
        validation_alias=AliasChoices("aws_secret_access_key", "aws_secret_access_key_dec"),
        description="AWS secret access key",
    )
    aws_region: str | None = Field(None, description="AWS region name")
    aws_endpoint: str | None = Field(None, description="Optional endpoint override URL")
    aws_connect_timeout: float = Field(5.0, gt=0)
    aws_read_timeout: float = Field(10.0, gt=0)
    aws_max_attempts: int = Field(1, ge=1)
    max_queue_size: int = Field(
        DEFAULT_MAX_QUEUE_SIZE, ge=0, description="Maximum number of queued deliveries"
    )
    max_record_bytes: int = Field(
        KINESIS_RECORD_SIZE_LIMIT, gt=0, description="Maximum encoded event size"
    )

    @field_validator("stream_name", mode="before")
    @classmethod
    def strip_stream_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator(
        "aws_access_key_id", "aws_secret_access_key", "aws_region", "aws_endpoint", mode="before"
    )
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @model_validator(mode="after")
    def validate_aws_settings(self):
        """Fail early on settings the stream backend would reject later."""
        AwsConnectionConfig.from_mapping(self.model_dump())
        return self

    @classmethod
    def from_mapping(cls, raw: "Mapping[str, Any] | LiveEventsConfig") -> "LiveEventsConfig":
        """
        Validate a raw configuration mapping.

        Raises:
            ConfigurationError: If a required field is missing or a value is invalid
        """
        if isinstance(raw, cls):
            return raw
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid live events configuration: {e}") from e

    @classmethod
    def from_file(cls, file_path: str | Path) -> "LiveEventsConfig":
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to the configuration JSON file

        Returns:
            LiveEventsConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the JSON is invalid or doesn't match the schema
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with path.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a JSON object: {file_path}"
            )

        return cls.from_mapping(data)
