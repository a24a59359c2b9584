"""
Report Generation Module.

This module renders day, week and month reports as Markdown (a project
summary table and, for single days, a chronological detail table), and
handles console output for the command-line interface.
"""

from __future__ import annotations

import datetime as dt
from typing import Sequence

from chron.collector import get_iso_week, get_month_dates, get_week_dates, load_available_days
from chron.models import BREAK_PROJECT, CHECK_IN_LABEL, DATE_FORMAT, TIME_FORMAT, Day
from chron.processor import aggregate, format_duration, sort_chunks, summarize
from chron.store import TimeStore

DETAIL_TIME_WIDTH = 7


# =============================================================================
# Markdown Tables
# =============================================================================


def render_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    min_widths: Sequence[int] | None = None,
) -> str:
    """
    Render a fixed-column, pipe-delimited Markdown table.

    Each column is as wide as its header or its widest cell, whichever is
    larger, and never narrower than the matching entry of ``min_widths``.

    Args:
        headers: Column labels.
        rows: Table rows; each has one cell per header.
        min_widths: Optional lower bound per column.

    Returns:
        The table, one line per row, without a trailing newline.

    Example output:
        | project | time           |
        |---------|----------------|
        | kyoshi  | 1.25h (1h 15m) |
    """
    widths = [len(header) for header in headers]
    if min_widths is not None:
        widths = [max(width, minimum) for width, minimum in zip(widths, min_widths)]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def format_line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)) + " |"

    lines = [
        format_line(headers),
        "|" + "|".join("-" * (width + 2) for width in widths) + "|",
    ]
    lines.extend(format_line(row) for row in rows)
    return "\n".join(lines)


def project_summary(days: Sequence[Day]) -> str:
    """
    Render the summary section for a set of days.

    Non-break projects are listed by name; the break row always comes
    last, with a zero duration when no break was tracked.
    """
    summary = summarize(aggregate(days))

    rows = [[name, format_duration(duration)] for name, duration in summary.projects]
    rows.append([BREAK_PROJECT, format_duration(summary.break_duration)])

    return (
        "## summary\n"
        "\n"
        f"- total amount of work: {format_duration(summary.total)}\n"
        f"- without breaks: {format_duration(summary.without_breaks)}\n"
        "\n"
        f"{render_table(['project', 'time'], rows)}"
    )


def detail_table(day: Day) -> str:
    """Render the chronological chunk table of one day, check-in first."""
    rows = [[day.check_in_time.strftime(TIME_FORMAT), CHECK_IN_LABEL, ""]]
    for chunk in sort_chunks(day.chunks):
        rows.append(
            [
                chunk.end_time.strftime(f"- {TIME_FORMAT}"),
                chunk.project,
                chunk.description or "",
            ]
        )
    return render_table(
        ["time", "project", "description"],
        rows,
        min_widths=[DETAIL_TIME_WIDTH, 0, 0],
    )


def format_day(day: Day) -> str:
    """Render the full report of one day: summary then details."""
    return (
        f"# Log for: {day.date.strftime(DATE_FORMAT)}\n"
        "\n"
        f"{project_summary([day])}\n"
        "\n"
        "## details\n"
        "\n"
        f"{detail_table(day)}"
    )


def format_week(anchor: dt.date, days: Sequence[Day]) -> str:
    return f"# Log for week: {get_iso_week(anchor)}\n\n{project_summary(days)}"


def format_month(anchor: dt.date, days: Sequence[Day]) -> str:
    return f"# Log for month: {anchor.strftime('%Y-%m')}\n\n{project_summary(days)}"


class ReportGenerator:
    """
    Builds Markdown reports from the records in a time store.

    Attributes:
        store: The time store the reports read from.

    Example:
        >>> generator = ReportGenerator(TimeStore(data_dir))
        >>> print(generator.report_week(date.today()))
    """

    def __init__(self, store: TimeStore) -> None:
        self.store = store

    def report_day(self, day_date: dt.date) -> str | None:
        """
        Render the report for a single day.

        Returns:
            The report, or None when the day has no record.
        """
        day = self.store.load(day_date)
        if day is None:
            return None
        return format_day(day)

    def report_week(self, anchor: dt.date) -> str:
        """Render the summary of the ISO week containing ``anchor``."""
        days = load_available_days(self.store, get_week_dates(anchor))
        return format_week(anchor, days)

    def report_month(self, anchor: dt.date) -> str:
        """Render the summary of the month containing ``anchor``."""
        days = load_available_days(self.store, get_month_dates(anchor))
        return format_month(anchor, days)

    def log_day(self, day_date: dt.date) -> str | None:
        """Render only the detail table of a day, or None without a record."""
        day = self.store.load(day_date)
        if day is None:
            return None
        return detail_table(day)


class ConsolePrinter:
    """
    Utility class for console output of the command-line interface.

    All methods are static and print a single user-facing message.
    """

    @staticmethod
    def print_checked_in(day: Day) -> None:
        print(f"✅ Checked in at {day.check_in_time.strftime(TIME_FORMAT)}")

    @staticmethod
    def print_tracked(project: str, end_time: dt.time) -> None:
        """
        Print the tracking confirmation.

        Args:
            project: The project the chunk was tracked for.
            end_time: When the chunk ends.
        """
        if project == BREAK_PROJECT:
            print(f"☕ Break tracked until {end_time.strftime(TIME_FORMAT)}")
        else:
            print(f"⏱️  Tracked '{project}' until {end_time.strftime(TIME_FORMAT)}")

    @staticmethod
    def print_reset(day_date: dt.date) -> None:
        print(f"🗑️  Removed all tracked time for {day_date.strftime(DATE_FORMAT)}")

    @staticmethod
    def print_projects(projects: Sequence[str]) -> None:
        """
        Print the registered projects, one per line.

        Args:
            projects: Project names in registration order.
        """
        if not projects:
            print("No projects configured yet: chron projects add <name>")
            return
        for project in projects:
            print(f"- {project}")

    @staticmethod
    def print_project_added(project: str, added: bool) -> None:
        if project == BREAK_PROJECT:
            print(f"'{BREAK_PROJECT}' is reserved and can always be tracked, no need to add it")
        elif added:
            print(f"➕ Added project '{project}'")
        else:
            print(f"Project '{project}' is already configured")

    @staticmethod
    def print_project_deleted(project: str, deleted: bool) -> None:
        if deleted:
            print(f"➖ Deleted project '{project}'")
        else:
            print(f"Project '{project}' is not configured")

    @staticmethod
    def print_no_data(day_date: dt.date) -> None:
        print(f"No time tracked on {day_date.strftime(DATE_FORMAT)}")

    @staticmethod
    def print_version(version: str) -> None:
        print(f"chron {version}")

    @staticmethod
    def print_report(report: str) -> None:
        """
        Print a rendered report.

        Args:
            report: The Markdown report to display.
        """
        print(report)

    @staticmethod
    def print_error(message: str) -> None:
        """
        Print an error message.

        Args:
            message: The error message to display.
        """
        print(f"❌ {message}")
