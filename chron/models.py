"""
Day Model Module.

This module defines the tracking entities persisted by the time store:
a Day (one calendar day, opened by a check-in) and the Chunks appended
to it. The on-disk JSON schema is fixed here: ``date`` as ``YYYY-MM-DD``,
``checkInTime`` and ``endTime`` as ``HH:MM``.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

BREAK_PROJECT = "break"
CHECK_IN_LABEL = "check-in"

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


class ChronError(Exception):
    """Base class for every error the tracker reports to the user."""


def parse_time(value: Any) -> dt.time:
    """
    Coerce a value into a minute-precision time of day.

    Args:
        value: A ``datetime.time`` or an ``HH:MM`` string.

    Returns:
        The time with seconds and microseconds dropped.

    Raises:
        ValueError: If the value is neither a time nor an ``HH:MM`` string.
    """
    if isinstance(value, dt.datetime):
        value = value.time()
    if isinstance(value, dt.time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if isinstance(value, str):
        return dt.datetime.strptime(value.strip(), TIME_FORMAT).time()
    raise ValueError(f"expected a time in {TIME_FORMAT} format, got {value!r}")


def parse_date(value: Any) -> dt.date:
    """Coerce a ``datetime.date`` or ``YYYY-MM-DD`` string into a date."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        return dt.datetime.strptime(value.strip(), DATE_FORMAT).date()
    raise ValueError(f"expected a date in {DATE_FORMAT} format, got {value!r}")


class Chunk(BaseModel):
    """
    A completed span of work (or break) ending at ``end_time``.

    The start of the span is implicit: the end time of the chronologically
    previous chunk, or the day's check-in time for the first one.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    project: str
    description: str | None = None
    end_time: dt.time = Field(alias="endTime")

    @property
    def is_break(self) -> bool:
        return self.project == BREAK_PROJECT

    @field_validator("end_time", mode="before")
    @classmethod
    def _parse_end_time(cls, value: Any) -> dt.time:
        return parse_time(value)

    @field_serializer("end_time")
    def _serialize_end_time(self, value: dt.time) -> str:
        return value.strftime(TIME_FORMAT)


class Day(BaseModel):
    """
    One calendar day of tracked activity.

    A Day is created by a check-in and only grows afterwards: chunks are
    appended in insertion order, which is not necessarily chronological
    when time was retro-tracked.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    date: dt.date
    check_in_time: dt.time = Field(alias="checkInTime")
    chunks: list[Chunk] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> dt.date:
        return parse_date(value)

    @field_validator("check_in_time", mode="before")
    @classmethod
    def _parse_check_in_time(cls, value: Any) -> dt.time:
        return parse_time(value)

    @field_serializer("date")
    def _serialize_date(self, value: dt.date) -> str:
        return value.strftime(DATE_FORMAT)

    @field_serializer("check_in_time")
    def _serialize_check_in_time(self, value: dt.time) -> str:
        return value.strftime(TIME_FORMAT)

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-ready representation stored on disk."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: Any) -> Day:
        """Build a Day from its on-disk representation."""
        return cls.model_validate(record)
