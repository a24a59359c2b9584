"""
Day Collection Module.

This module resolves the calendar dates a report covers (a day, an ISO
week or a month) and loads whichever of those days have a record in the
time store.
"""

from __future__ import annotations

import calendar
import datetime as dt
import logging
from typing import Iterable

from chron.models import Day
from chron.processor import sort_chunks
from chron.store import TimeStore

logger = logging.getLogger(__name__)


def load_available_days(store: TimeStore, dates: Iterable[dt.date]) -> list[Day]:
    """
    Load the records that exist for the given dates.

    Missing dates are skipped silently. A malformed record is not skipped:
    it fails the whole lookup. Each returned Day has its chunks sorted by
    end time.

    Args:
        store: The time store to read from.
        dates: The dates to look up.

    Returns:
        The available days, in the order of ``dates``.

    Raises:
        StoreIOError: If an existing record cannot be read.
        MalformedRecordError: If an existing record is not a valid day.
    """
    days: list[Day] = []
    for day_date in dates:
        day = store.load(day_date)
        if day is None:
            continue
        days.append(day.model_copy(update={"chunks": sort_chunks(day.chunks)}))

    logger.debug("Loaded %d day records", len(days))
    return days


# =============================================================================
# Date Range Utilities
# =============================================================================


def get_week_dates(anchor: dt.date) -> list[dt.date]:
    """
    Get the dates of the ISO week containing a date.

    Args:
        anchor: Any date in the week.

    Returns:
        The seven dates from Monday to Sunday.
    """
    monday = anchor - dt.timedelta(days=anchor.weekday())
    return [monday + dt.timedelta(days=offset) for offset in range(7)]


def get_month_dates(anchor: dt.date) -> list[dt.date]:
    """
    Get every date of the month containing a date.

    Args:
        anchor: Any date in the month.

    Returns:
        The 28 to 31 dates of the month, in order.
    """
    _, days_in_month = calendar.monthrange(anchor.year, anchor.month)
    return [anchor.replace(day=day) for day in range(1, days_in_month + 1)]


def get_iso_week(anchor: dt.date) -> int:
    """Return the ISO week number of a date."""
    return anchor.isocalendar()[1]
