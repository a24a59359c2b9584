"""
Chunk Validation Module.

Rules a chunk must satisfy before it can be appended to a Day. Ordering
relative to the chunks already stored is not checked:
retro-tracked chunks may end before chunks tracked earlier.
"""

from __future__ import annotations

import datetime as dt
from typing import Container

from chron.models import TIME_FORMAT, ChronError, Chunk, Day


class InvalidChunkError(ChronError):
    """Raised when a chunk cannot be appended to a day."""


class BeforeCheckInError(InvalidChunkError):
    def __init__(self, end_time: dt.time, check_in_time: dt.time) -> None:
        super().__init__(
            f"{end_time.strftime(TIME_FORMAT)} is before the check-in at "
            f"{check_in_time.strftime(TIME_FORMAT)}"
        )
        self.end_time = end_time
        self.check_in_time = check_in_time


class AfterNowError(InvalidChunkError):
    def __init__(self, end_time: dt.time, now: dt.time) -> None:
        super().__init__(
            f"{end_time.strftime(TIME_FORMAT)} is after the current time "
            f"{now.strftime(TIME_FORMAT)}"
        )
        self.end_time = end_time
        self.now = now


class ProjectNotConfiguredError(InvalidChunkError):
    def __init__(self, project: str) -> None:
        super().__init__(f"project {project!r} is not configured")
        self.project = project


def validate_append(
    day: Day,
    chunk: Chunk,
    now: dt.time,
    projects: Container[str],
) -> None:
    """
    Check that a chunk may be appended to a day.

    Args:
        day: The day the chunk is for.
        chunk: The proposed chunk.
        now: The current time of day; no chunk may end after it.
        projects: The registered project names.

    Raises:
        BeforeCheckInError: If the chunk ends before the check-in.
        AfterNowError: If the chunk ends in the future.
        ProjectNotConfiguredError: If the project is neither registered
            nor the break sentinel.
    """
    if chunk.end_time < day.check_in_time:
        raise BeforeCheckInError(chunk.end_time, day.check_in_time)
    if chunk.end_time > now:
        raise AfterNowError(chunk.end_time, now)
    if not chunk.is_break and chunk.project not in projects:
        raise ProjectNotConfiguredError(chunk.project)
