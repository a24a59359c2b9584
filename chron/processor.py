"""
Duration Processing Module.

This module turns day records into per-project durations: chunks are
sorted by end time, each chunk is credited with the time since the
previous chunk ended (or since check-in), and totals are accumulated
across days. It also formats durations for display.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from chron.models import BREAK_PROJECT, Chunk, Day

HOUR_PLACES = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)


@dataclass
class Summary:
    """
    Aggregated durations ready for display.

    Attributes:
        total: Sum of all tracked time, breaks included.
        break_duration: Time tracked as ``"break"``.
        without_breaks: ``total`` minus ``break_duration``.
        projects: Non-break projects and their durations, sorted by name.
    """

    total: dt.timedelta
    break_duration: dt.timedelta
    without_breaks: dt.timedelta
    projects: list[tuple[str, dt.timedelta]]


def sort_chunks(chunks: Iterable[Chunk]) -> list[Chunk]:
    """Return the chunks in chronological order; equal end times keep insertion order."""
    return sorted(chunks, key=lambda chunk: chunk.end_time)


def _since_midnight(value: dt.time) -> dt.timedelta:
    return dt.timedelta(hours=value.hour, minutes=value.minute, seconds=value.second)


def aggregate(days: Iterable[Day]) -> dict[str, dt.timedelta]:
    """
    Sum the tracked time per project over a set of days.

    Within each day the chunks are walked in end-time order with a cursor
    starting at the check-in time; each chunk is credited with the span
    from the cursor to its end time.

    Args:
        days: The days to aggregate.

    Returns:
        A mapping of project name to total duration. ``"break"`` is a key
        like any other.
    """
    durations: dict[str, dt.timedelta] = defaultdict(dt.timedelta)

    for day in days:
        previous_end = _since_midnight(day.check_in_time)
        for chunk in sort_chunks(day.chunks):
            end = _since_midnight(chunk.end_time)
            durations[chunk.project] += end - previous_end
            previous_end = end

    return dict(durations)


def summarize(durations: dict[str, dt.timedelta]) -> Summary:
    """
    Split aggregated durations into totals and display rows.

    Args:
        durations: Output of :func:`aggregate`.

    Returns:
        The summary; the break duration is zero when no break was tracked.
    """
    total = sum(durations.values(), dt.timedelta())
    break_duration = durations.get(BREAK_PROJECT, dt.timedelta())
    projects = sorted(
        (name, duration)
        for name, duration in durations.items()
        if name != BREAK_PROJECT
    )
    return Summary(
        total=total,
        break_duration=break_duration,
        without_breaks=total - break_duration,
        projects=projects,
    )


def decimal_hours(duration: dt.timedelta) -> Decimal:
    """
    Convert a duration to hours rounded to two places.

    Ties round half up (0.005h becomes 0.01h). Durations in whole
    minutes never land on a tie.
    """
    seconds = Decimal(int(duration.total_seconds()))
    return (seconds / SECONDS_PER_HOUR).quantize(HOUR_PLACES, rounding=ROUND_HALF_UP)


def format_duration(duration: dt.timedelta) -> str:
    """
    Format a duration as decimal and whole hours.

    Args:
        duration: The duration to format.

    Returns:
        A string such as ``"1.25h (1h 15m)"``.
    """
    hours, minutes = divmod(int(duration.total_seconds()) // 60, 60)
    return f"{decimal_hours(duration)}h ({hours}h {minutes}m)"
