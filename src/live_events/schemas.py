"""
Event record and wire payload schemas.

An event is serialized as a JSON object with two members: ``attributes``
(flat metadata, always carrying ``event_name`` and ``event_time``) and
``body`` (the event payload).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import SerializationError

Scalar = str | int | float | bool | None

RESERVED_ATTRIBUTES = ("event_name", "event_time")


def format_event_time(value: datetime) -> str:
    """
    Render a timestamp as ISO-8601 UTC with millisecond precision.

    Naive datetimes are taken to be in local time.

    Example:
        2015-06-01T12:00:00.123456+02:00 -> "2015-06-01T10:00:00.123Z"
    """
    utc = value.astimezone(UTC)
    return f"{utc.strftime('%Y-%m-%dT%H:%M:%S')}.{utc.microsecond // 1000:03d}Z"


class WirePayload(BaseModel):
    """The JSON document written to the stream."""

    model_config = ConfigDict(frozen=True)

    attributes: dict[str, Scalar] = Field(..., description="Event metadata")
    body: dict[str, Any] = Field(default_factory=dict, description="Event payload")

    def encode(self) -> bytes:
        """Serialize to UTF-8 JSON bytes."""
        try:
            return self.model_dump_json().encode("utf-8")
        except PydanticSerializationError as e:
            raise SerializationError(f"Event is not JSON serializable: {e}") from e


class EventRecord(BaseModel):
    """An immutable event ready for delivery."""

    model_config = ConfigDict(frozen=True)

    event_name: str = Field(..., min_length=1, description="Name of the event")
    event_time: datetime = Field(..., description="When the event happened")
    attributes: dict[str, Scalar] = Field(
        ..., description="Event name, formatted event time and merged context"
    )
    body: dict[str, Any] = Field(default_factory=dict, description="Event payload")

    def to_wire(self) -> WirePayload:
        return WirePayload(attributes=self.attributes, body=self.body)

    def encode(self) -> bytes:
        """Serialize the wire payload to UTF-8 JSON bytes."""
        return self.to_wire().encode()


def build_event(
    event_name: str,
    payload: Mapping[str, Any] | None,
    time: datetime,
    context: Mapping[str, Any] | None = None,
) -> EventRecord:
    """
    Build an event record from a name, payload, timestamp and merged context.

    ``event_name`` and ``event_time`` always win over context keys of the
    same name.

    Raises:
        SerializationError: If the payload is not a mapping or an attribute
            value is not a scalar
    """
    attributes: dict[str, Any] = {
        "event_name": event_name,
        "event_time": format_event_time(time),
    }
    for key, value in (context or {}).items():
        if key not in RESERVED_ATTRIBUTES:
            attributes[key] = value

    try:
        return EventRecord(
            event_name=event_name,
            event_time=time,
            attributes=attributes,
            body=payload if payload is not None else {},
        )
    except ValidationError as e:
        raise SerializationError(f"Invalid event {event_name!r}: {e}") from e


def decode_payload(data: bytes | str) -> WirePayload:
    """
    Parse an encoded wire payload.

    Raises:
        SerializationError: If the data is not a valid wire payload
    """
    try:
        return WirePayload.model_validate_json(data)
    except ValidationError as e:
        raise SerializationError(f"Invalid wire payload: {e}") from e


@dataclass(frozen=True)
class DeliveryJob:
    """
    A unit of work on the delivery queue.

    ``backend`` is the stream backend the posting client resolved; the
    worker delivers the job through it.
    """

    stream_name: str
    partition_key: str
    data: bytes
    event_name: str = ""
    backend: Any = field(default=None, repr=False, compare=False)
