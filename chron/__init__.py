"""
chron - Personal time tracking from the command line.

This package provides modules for recording the working day as chunks of
time against projects and breaks, and for summarizing that time into
day, week and month reports.
"""

from chron.models import BREAK_PROJECT, ChronError, Chunk, Day
from chron.store import MalformedRecordError, StoreError, StoreIOError, TimeStore
from chron.registry import ProjectRegistry
from chron.validator import (
    AfterNowError,
    BeforeCheckInError,
    InvalidChunkError,
    ProjectNotConfiguredError,
    validate_append,
)
from chron.tracker import AlreadyCheckedInError, NoActiveDayError, Tracker, TrackingError
from chron.processor import Summary, aggregate, format_duration, summarize
from chron.collector import get_month_dates, get_week_dates, load_available_days
from chron.reporter import ConsolePrinter, ReportGenerator

__version__ = "0.4.0"

__all__ = [
    # Models
    "BREAK_PROJECT",
    "ChronError",
    "Chunk",
    "Day",
    # Store
    "TimeStore",
    "StoreError",
    "StoreIOError",
    "MalformedRecordError",
    # Registry
    "ProjectRegistry",
    # Validator
    "validate_append",
    "InvalidChunkError",
    "BeforeCheckInError",
    "AfterNowError",
    "ProjectNotConfiguredError",
    # Tracker
    "Tracker",
    "TrackingError",
    "AlreadyCheckedInError",
    "NoActiveDayError",
    # Processor
    "Summary",
    "aggregate",
    "summarize",
    "format_duration",
    # Collector
    "get_week_dates",
    "get_month_dates",
    "load_available_days",
    # Reporter
    "ReportGenerator",
    "ConsolePrinter",
]
