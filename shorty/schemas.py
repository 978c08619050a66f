"""Pydantic schemas for request/response handling in the shorty API.

Schema Hierarchy
=================
::
    ShortenRequest (Input)
    ├─ url: Any (validated by the registry, not here)
    └─ shortcode: Any | None

    ShortenResponse (Output)
    └─ shortcode: str

    StatsResponse (Output)
    ├─ redirectCount: int
    ├─ startDate: str (ISO 8601, UTC, "Z")
    └─ lastSeenDate: str (omitted until the first redirect)

    HealthResponse (Output)
    ├─ status: HealthStatus
    ├─ registry: HealthStatus
    └─ shortcodes: int

Key Behaviours
===============
- ShortenRequest accepts anything: the registry owns validation order, so
  Pydantic must not turn a bad url into a generic 422.
- Unknown request keys are ignored.
- StatsResponse serializes with camelCase aliases.

Classes:
    ShortenRequest:  Input schema for POST /shorten.
    ShortenResponse:  Output schema for a created shortcode.
    StatsResponse:  Output schema for GET /{shortcode}/stats.
    HealthResponse:  Output schema for health checks.
"""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from shorty.enums import HealthStatus
from shorty.models import LinkStats

__all__ = [
    "ShortenRequest",
    "ShortenResponse",
    "StatsResponse",
    "HealthResponse",
    "format_timestamp",
]


def format_timestamp(value: datetime.datetime) -> str:
    """Render an aware datetime as ``2026-10-18T12:00:00.000Z``."""
    utc = value.astimezone(datetime.timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ShortenRequest(BaseModel):
    url: Any = None
    shortcode: Any = None

    model_config = ConfigDict(extra="ignore")


class ShortenResponse(BaseModel):
    shortcode: str


class StatsResponse(BaseModel):
    redirect_count: int = Field(..., serialization_alias="redirectCount", ge=0)
    start_date: datetime.datetime = Field(..., serialization_alias="startDate")
    last_seen_date: datetime.datetime | None = Field(None, serialization_alias="lastSeenDate")

    @field_serializer("start_date", "last_seen_date")
    def serialize_timestamp(self, value: datetime.datetime | None) -> str | None:
        if value is None:
            return None
        return format_timestamp(value)

    @classmethod
    def from_stats(cls, stats: LinkStats) -> "StatsResponse":
        return cls(
            redirect_count=stats.redirect_count,
            start_date=stats.created_at,
            last_seen_date=stats.last_seen_at,
        )


class HealthResponse(BaseModel):
    status: HealthStatus
    registry: HealthStatus
    shortcodes: int
