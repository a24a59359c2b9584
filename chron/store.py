"""
Time Store Module.

Persists one JSON record per calendar day under
``<data_dir>/<YYYY>/<MonthName>/<YYYY-MM-DD>.json``. The store has no
business logic: every save overwrites the whole file and nothing is
locked, so two processes writing the same day race and the last writer
wins.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from chron.models import DATE_FORMAT, ChronError, Day

logger = logging.getLogger(__name__)


class StoreError(ChronError):
    """Raised when a day record cannot be read or written."""


class StoreIOError(StoreError):
    """Raised when the underlying file operation fails."""


class MalformedRecordError(StoreError):
    """Raised when a stored file does not match the canonical day schema."""


class TimeStore:
    """
    File-backed storage for Day records.

    Attributes:
        data_dir: Root directory holding the per-year/per-month folders.

    Example:
        >>> store = TimeStore(Path("~/.local/share/chron-timetracking"))
        >>> day = store.load(date.today())
    """

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, day_date: dt.date) -> Path:
        """
        Return the file path holding the record for a date.

        Args:
            day_date: The calendar date.

        Returns:
            The path, which may not exist yet.
        """
        return (
            self.data_dir
            / day_date.strftime("%Y")
            / day_date.strftime("%B")
            / f"{day_date.strftime(DATE_FORMAT)}.json"
        )

    def exists(self, day_date: dt.date) -> bool:
        return self.path_for(day_date).is_file()

    def load(self, day_date: dt.date) -> Day | None:
        """
        Load the Day stored for a date.

        Args:
            day_date: The calendar date to load.

        Returns:
            The Day, or None when no file exists for the date.

        Raises:
            StoreIOError: If the file exists but cannot be read.
            MalformedRecordError: If the content is not a valid day record.
        """
        path = self.path_for(day_date)
        if not path.is_file():
            return None

        logger.debug("Loading day record from %s", path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreIOError(f"Failed to read {path}: {exc}") from exc

        try:
            day = Day.from_record(json.loads(raw))
        except json.JSONDecodeError as exc:
            raise MalformedRecordError(f"{path} is not valid JSON: {exc}") from exc
        except ValidationError as exc:
            raise MalformedRecordError(f"{path} is not a valid day record: {exc}") from exc

        if day.date != day_date:
            raise MalformedRecordError(
                f"{path} holds the record for {day.date.strftime(DATE_FORMAT)}"
            )
        return day

    def save(self, day: Day) -> Path:
        """
        Write a Day to its file, replacing any previous content.

        Parent directories are created as needed.

        Args:
            day: The Day to persist.

        Returns:
            The path that was written.

        Raises:
            StoreIOError: If the directory or file cannot be written.
        """
        path = self.path_for(day.date)
        content = json.dumps(day.to_record(), indent=2, ensure_ascii=False)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content + "\n", encoding="utf-8")
        except OSError as exc:
            raise StoreIOError(f"Failed to write {path}: {exc}") from exc

        logger.debug("Saved day record with %d chunks to %s", len(day.chunks), path)
        return path

    def delete(self, day_date: dt.date) -> None:
        """
        Remove the record for a date.

        Raises:
            StoreIOError: If there is no record or it cannot be removed.
        """
        path = self.path_for(day_date)
        try:
            path.unlink()
        except OSError as exc:
            raise StoreIOError(f"Failed to delete {path}: {exc}") from exc
        logger.debug("Deleted day record %s", path)
