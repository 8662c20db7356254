# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for canaryctl."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, ClassVar, Union

from pydantic import BaseModel, ConfigDict, JsonValue, PlainSerializer
from pydantic.alias_generators import to_camel
from typing_extensions import TypeAlias

JSONPrimitive: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = JsonValue
JSONObject: TypeAlias = dict[str, JSONValue]


def format_instant(value: datetime) -> str:
    """Render an instant as UTC ISO-8601 with a ``Z`` suffix.

    Milliseconds are included only when non-zero, matching the timestamps the
    analysis service produces. Naive datetimes are taken as local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    value = value.astimezone(timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    millis = value.microsecond // 1000
    if millis:
        text += f".{millis:03d}"
    return f"{text}Z"


Instant: TypeAlias = Annotated[
    datetime,
    PlainSerializer(format_instant, return_type=str, when_used="json"),
]


class CanaryBaseModel(BaseModel):
    """Base model for canary wire schemas (camelCase on the wire)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, JSONValue]:
        """Dump the model as JSON-ready data using wire field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ExtraAllowModel(CanaryBaseModel):
    """Base model that preserves extra fields returned by the service."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )
