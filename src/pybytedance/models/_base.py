"""Base model for open platform responses.

Every response model inherits from :class:`ByteDanceBaseModel` which
ignores unknown keys (the platform adds fields without notice) and
stashes the original payload in ``raw``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_unix_timestamp(value: Any) -> datetime | None:
    """Convert an epoch timestamp (seconds **or** milliseconds) to a UTC datetime.

    Returns ``None`` for ``None``, ``0`` and empty strings. Non-numeric
    strings are passed through unchanged.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and not value.strip().isdigit():
        # ISO-8601 strings are left to pydantic's datetime parsing.
        return value
    ts = int(value)
    if ts == 0:
        return None
    if ts >= _MS_THRESHOLD:
        ts = ts // 1000
    return datetime.fromtimestamp(ts, tz=UTC)


UnixTimestamp = Annotated[datetime | None, BeforeValidator(parse_unix_timestamp)]
"""Annotated type that coerces epoch ints (seconds or ms) to UTC datetimes."""


class ByteDanceBaseModel(BaseModel):
    """Base for open platform response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "raw" in values:
            return values
        return {**values, "raw": dict(values)}


class ByteDanceRequestModel(BaseModel):
    """Base for request bodies sent as JSON."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )
