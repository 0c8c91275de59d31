"""
Alert Models - Immutable Request Entities

Represents the alert window of one invocation and the alert object
posted to Alertmanager's v2 API.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Second precision, no offset: Alertmanager reads it as UTC
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class AlertWindow(BaseModel):
    """
    The [start, end) interval during which the test alert is active.

    ``start`` is captured once, in UTC, when the command runs.
    """

    start: datetime = Field(..., description="Instant the command ran (UTC)")
    end: datetime = Field(..., description="start + alert duration")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def starting_at(cls, start: datetime, duration: timedelta) -> "AlertWindow":
        return cls(start=start, end=start + duration)

    @classmethod
    def starting_now(cls, duration: timedelta, now: Optional[datetime] = None) -> "AlertWindow":
        """Build a window beginning at ``now`` (defaults to the current UTC time)."""
        start = now if now is not None else datetime.now(timezone.utc)
        return cls.starting_at(start, duration)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


class PostableAlert(BaseModel):
    """
    One alert as accepted by ``POST /api/v2/alerts``.

    Field names are snake_case in Python and camelCase on the wire.
    """

    labels: dict[str, str] = Field(default_factory=dict, description="Key-value pairs, passed verbatim")
    starts_at: str = Field(..., alias="startsAt", description="Formatted start timestamp")
    ends_at: str = Field(..., alias="endsAt", description="Formatted end timestamp")

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    @model_validator(mode="after")
    def check_label_names(self) -> "PostableAlert":
        if any(not name for name in self.labels):
            raise ValueError("label names must not be empty")
        return self

    def to_wire(self) -> dict:
        """Dict in the shape Alertmanager expects."""
        return self.model_dump(by_alias=True)
