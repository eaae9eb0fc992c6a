"""
Logging setup for processes that post live events.

Live events messages are already JSON documents (see ``StructuredLogger``),
so the handler writes them verbatim. The AWS SDK loggers stay at WARNING:
at DEBUG botocore logs every PutRecord request, encoded event included.
"""
import logging
import sys
from typing import TextIO

AWS_SDK_LOGGERS = ("botocore", "boto3", "urllib3")


def configure_structured_logging(level: str | int = "INFO", stream: TextIO | None = None):
    """
    Write JSON log lines to ``stream`` (stdout by default).

    ``level`` applies to the root logger and to the ``live_events`` loggers,
    whatever level the host application gave them before.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logging.basicConfig(
        level=level,
        format="%(message)s",  # JSON already formatted
        stream=stream or sys.stdout,
    )
    logging.getLogger("live_events").setLevel(level)

    for name in AWS_SDK_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
