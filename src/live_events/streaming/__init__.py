"""
Delivery pipeline for live events.

This module provides the background worker that drains the delivery queue
and the stream backends it writes to.
"""

from .backends import KinesisStreamBackend, StreamBackend
from .worker import AsyncWorker

__all__ = [
    "AsyncWorker",
    "KinesisStreamBackend",
    "StreamBackend",
]
