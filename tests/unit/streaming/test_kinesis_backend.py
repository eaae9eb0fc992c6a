"""
Tests for the Kinesis stream backend with a mocked boto3 client.

No AWS credentials or network access are needed: ``boto3.client`` is
patched to return a MagicMock.
"""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from live_events.config.models import AwsConnectionConfig
from live_events.streaming.backends import KinesisStreamBackend, StreamBackend


@pytest.fixture
def connection() -> AwsConnectionConfig:
    return AwsConnectionConfig.from_mapping(
        {
            "aws_access_key_id": "access_key",
            "aws_secret_access_key": "secret_key",
            "aws_region": "us-east-1",
            "aws_endpoint": "http://example.com:6543/",
        }
    )


class TestKinesisStreamBackend:
    """Test the default stream backend."""

    def test_client_created_lazily(self, connection, kinesis_client):
        """Test that the boto3 client is created on first use only."""
        backend = KinesisStreamBackend(connection)
        kinesis_client.factory.assert_not_called()

        backend.put_record(stream_name="stream", data=b"{}", partition_key="pk")
        backend.put_record(stream_name="stream", data=b"{}", partition_key="pk")

        kinesis_client.factory.assert_called_once()
        args, kwargs = kinesis_client.factory.call_args
        assert args == ("kinesis",)
        assert kwargs["endpoint_url"] == "http://example.com:6543/"
        assert kwargs["region_name"] == "us-east-1"
        assert kwargs["aws_access_key_id"] == "access_key"
        assert kwargs["aws_secret_access_key"] == "secret_key"

    def test_put_record_arguments(self, connection):
        """Test the arguments passed to Kinesis PutRecord."""
        kclient = MagicMock()
        backend = KinesisStreamBackend(connection, client=kclient)

        backend.put_record(stream_name="stream", data=b'{"a": 1}', partition_key="123")

        kclient.put_record.assert_called_once_with(
            StreamName="stream",
            Data=b'{"a": 1}',
            PartitionKey="123",
        )

    def test_errors_propagate(self, connection):
        """Test that botocore errors reach the worker unchanged."""
        kclient = MagicMock()
        kclient.put_record.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "Rate exceeded"}},
            "PutRecord",
        )
        backend = KinesisStreamBackend(connection, client=kclient)

        with pytest.raises(ClientError):
            backend.put_record(stream_name="stream", data=b"{}", partition_key="pk")

    def test_secret_not_logged(self, connection, kinesis_client, caplog):
        """Test that client initialization logs redacted credentials."""
        backend = KinesisStreamBackend(connection)

        with caplog.at_level("INFO", logger="live_events.streaming.backends"):
            _ = backend.client

        text = caplog.text
        assert "Kinesis client initialized" in text
        assert "secret_key" not in text
        assert "REDACTED" in text

    def test_satisfies_stream_backend_protocol(self, connection):
        """Test that the backend matches the StreamBackend protocol."""
        assert isinstance(KinesisStreamBackend(connection, client=MagicMock()), StreamBackend)

    def test_fake_backend_satisfies_protocol(self, fake_stream_client):
        """Test that any object with put_record qualifies."""
        assert isinstance(fake_stream_client, StreamBackend)

    def test_boto3_client_receives_timeouts(self, connection):
        """Test that botocore timeouts and retries come from the descriptor."""
        with patch("live_events.streaming.backends.boto3.client") as factory:
            KinesisStreamBackend(connection).client

        boto_config = factory.call_args.kwargs["config"]
        assert boto_config.connect_timeout == 5.0
        assert boto_config.read_timeout == 10.0
        assert boto_config.retries == {"max_attempts": 1}
