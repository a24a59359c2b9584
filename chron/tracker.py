"""
Tracking Engine Module.

Implements the user-facing tracking actions (check-in, track, break,
retro-track, reset) as read-modify-write transactions against today's
day record. Validation happens before any write, so a rejected chunk
leaves the stored day untouched.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Callable

from chron.models import BREAK_PROJECT, TIME_FORMAT, ChronError, Chunk, Day, parse_time
from chron.registry import ProjectRegistry
from chron.store import TimeStore
from chron.validator import validate_append

logger = logging.getLogger(__name__)

Clock = Callable[[], dt.datetime]


class TrackingError(ChronError):
    """Raised when a tracking action does not fit the state of today's record."""


class AlreadyCheckedInError(TrackingError):
    """Raised when checking in on a day that already has a record."""


class NoActiveDayError(TrackingError):
    """Raised when tracking time before checking in."""


class Tracker:
    """
    Orchestrates tracking actions for the current day.

    Attributes:
        store: Persistence for day records.
        registry: Registered projects used to validate tracked chunks.
        clock: Returns the current local datetime.

    Example:
        >>> tracker = Tracker(TimeStore(data_dir), ProjectRegistry(projects_file))
        >>> tracker.check_in()
        >>> tracker.track("kyoshi", "answer messages")
    """

    def __init__(
        self,
        store: TimeStore,
        registry: ProjectRegistry,
        clock: Clock = dt.datetime.now,
    ) -> None:
        self.store = store
        self.registry = registry
        self.clock = clock

    def now(self) -> dt.datetime:
        """Return the current datetime truncated to the minute."""
        return self.clock().replace(second=0, microsecond=0)

    def check_in(self) -> Day:
        """
        Open today's record with the current time as check-in time.

        Returns:
            The newly created Day.

        Raises:
            AlreadyCheckedInError: If today already has a record.
        """
        now = self.now()
        if self.store.exists(now.date()):
            raise AlreadyCheckedInError(f"already checked in on {now.date().isoformat()}")

        day = Day(date=now.date(), check_in_time=now.time())
        self.store.save(day)
        logger.info("Checked in at %s", now.strftime(TIME_FORMAT))
        return day

    def track(
        self,
        project: str,
        description: str | None = None,
        end_time: dt.time | str | None = None,
    ) -> Chunk:
        """
        Append a chunk for a project to today's record.

        Args:
            project: The project name, or ``"break"``.
            description: Optional free-text note.
            end_time: When the chunk ends. Defaults to now; an earlier
                time retro-tracks the chunk.

        Returns:
            The appended Chunk.

        Raises:
            NoActiveDayError: If there is no check-in for today.
            InvalidChunkError: If the chunk fails validation.
        """
        now = self.now()
        day = self.store.load(now.date())
        if day is None:
            raise NoActiveDayError(f"no check-in for {now.date().isoformat()}")

        chunk = Chunk(
            project=project,
            description=description,
            end_time=now.time() if end_time is None else parse_time(end_time),
        )
        validate_append(day, chunk, now.time(), self.registry)

        day.chunks.append(chunk)
        self.store.save(day)
        logger.info(
            "Tracked %r until %s", chunk.project, chunk.end_time.strftime(TIME_FORMAT)
        )
        return chunk

    def retrotrack(
        self,
        end_time: dt.time | str,
        project: str,
        description: str | None = None,
    ) -> Chunk:
        """Append a chunk ending at a past time of today."""
        return self.track(project, description, end_time=end_time)

    def take_break(self, description: str | None = None) -> Chunk:
        return self.track(BREAK_PROJECT, description)

    def reset(self) -> None:
        """
        Delete today's record.

        Raises:
            StoreIOError: If there is no record for today.
        """
        today = self.now().date()
        self.store.delete(today)
        logger.info("Reset record for %s", today.isoformat())
