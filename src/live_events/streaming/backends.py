"""
Stream backends for live events.

A stream backend is anything with a ``put_record`` method taking
``stream_name``, ``data`` and ``partition_key`` keyword arguments that
returns on success and raises on failure. ``KinesisStreamBackend`` is the
default implementation, backed by boto3.
"""

import logging
import threading
from typing import Any, Protocol, runtime_checkable

import boto3

from ..config.models import AwsConnectionConfig
from ..shared.credential_utils import sanitize_aws_config

logger = logging.getLogger(__name__)


@runtime_checkable
class StreamBackend(Protocol):
    """Capability required of any stream backend."""

    def put_record(self, *, stream_name: str, data: bytes, partition_key: str) -> None:
        ...


class KinesisStreamBackend:
    """
    Stream backend writing one record per call to AWS Kinesis.

    The boto3 client is created on first use so that constructing the
    backend never touches the network or the AWS credential chain.
    Timeouts and SDK-level retries come from the connection descriptor.
    """

    def __init__(self, connection: AwsConnectionConfig, client: Any | None = None):
        self.connection = connection
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self):
        """The underlying boto3 Kinesis client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = boto3.client("kinesis", **self.connection.client_kwargs())
                    logger.info(
                        "Kinesis client initialized "
                        f"(connection configured: {sanitize_aws_config(self.connection.model_dump())})"
                    )
        return self._client

    def put_record(self, *, stream_name: str, data: bytes, partition_key: str) -> None:
        """Write a single record; botocore errors propagate to the caller."""
        self.client.put_record(
            StreamName=stream_name,
            Data=data,
            PartitionKey=partition_key,
        )
