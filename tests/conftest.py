"""
Pytest configuration and fixtures for live events tests.

Provides fake stream backends, sample configuration and per-test isolation
of the process-wide live events state.
"""

import json
import sys
import threading
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Ensure src/ is on sys.path for local test runs without installation
_SRC = Path(__file__).resolve().parents[1] / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from live_events.config.settings import CONFIG_FILE_ENV, ENV_VARS  # noqa: E402
from live_events.runtime import default_runtime  # noqa: E402


class FakeStreamClient:
    """Stream backend recording every put_record call."""

    def __init__(self, fail_on: set[int] | None = None, error: Exception | None = None):
        self.calls: list[dict] = []
        self.data = None
        self._fail_on = fail_on or set()
        self._error = error or RuntimeError("stream unavailable")
        self._attempts = 0
        self._lock = threading.Lock()

    def put_record(self, *, stream_name, data, partition_key):
        with self._lock:
            attempt = self._attempts
            self._attempts += 1
            if attempt in self._fail_on:
                raise self._error
            self.data = json.loads(data)
            self.calls.append(
                {
                    "stream_name": stream_name,
                    "data": self.data,
                    "partition_key": partition_key,
                }
            )


@pytest.fixture(autouse=True)
def isolated_live_events(monkeypatch):
    """Reset process-wide state and hide LIVE_EVENTS_* variables for each test."""
    for var in [CONFIG_FILE_ENV, *ENV_VARS]:
        monkeypatch.delenv(var, raising=False)

    default_runtime.reset()
    yield default_runtime
    default_runtime.reset()


@pytest.fixture
def stream_config() -> dict:
    """Configuration mapping using the legacy key names."""
    return {
        "kinesis_stream_name": "stream",
        "aws_access_key_id": "access_key",
        "aws_secret_access_key_dec": "secret_key",
        "aws_region": "us-east-1",
    }


@pytest.fixture
def configured(stream_config):
    """Install ``stream_config`` as the process-wide configuration."""
    default_runtime.configure(stream_config)
    default_runtime.set_max_queue_size(lambda: 100)
    return stream_config


@pytest.fixture
def fake_stream_client() -> FakeStreamClient:
    return FakeStreamClient()


@pytest.fixture
def kinesis_client():
    """Mock boto3 Kinesis client returned by ``boto3.client``."""
    kclient = MagicMock(name="kinesis_client")
    with patch("live_events.streaming.backends.boto3.client", return_value=kclient) as factory:
        kclient.factory = factory
        yield kclient


@pytest.fixture
def fake_backend_cls():
    """The FakeStreamClient class, for tests needing custom failure setups."""
    return FakeStreamClient


@pytest.fixture
def logged_messages(caplog):
    """Return the ``message`` field of every structured live events log record."""

    def _messages() -> list[str]:
        return [
            json.loads(record.message)["message"]
            for record in caplog.records
            if record.name.startswith("live_events") and record.message.startswith("{")
        ]

    return _messages
