#!/usr/bin/env python3
"""
chron - personal time tracking.

Check in when the working day starts, track chunks of time against
projects and breaks as the day goes on, and print day, week or month
reports. This module provides the CLI entry point for the application.
"""

from __future__ import annotations

import argparse
import datetime as dt
import sys
from typing import NoReturn, Sequence

from chron import __version__
from chron.config import (
    ConfigError,
    configure_logging,
    get_data_dir,
    get_projects_file,
    load_config,
)
from chron.models import DATE_FORMAT, TIME_FORMAT, ChronError
from chron.registry import ProjectRegistry
from chron.reporter import ConsolePrinter, ReportGenerator
from chron.store import MalformedRecordError, StoreIOError, TimeStore
from chron.tracker import AlreadyCheckedInError, Clock, NoActiveDayError, Tracker
from chron.validator import AfterNowError, BeforeCheckInError, ProjectNotConfiguredError


REPORT_PERIODS = ("day", "week", "month")


class InputError(ChronError):
    """Raised when a command argument cannot be interpreted."""


class CommandParser(argparse.ArgumentParser):
    """Argument parser reporting usage errors as InputError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise InputError(f"{message}\n{self.format_usage().rstrip()}")


def find_command(argv: Sequence[str]) -> str | None:
    """Return the first argument that is neither a global option nor its value."""
    remaining = list(argv)
    while remaining and remaining[0].startswith("-"):
        option = remaining.pop(0)
        if option == "--config" and remaining:
            remaining.pop(0)
    return remaining[0] if remaining else None


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns:
        Parsed arguments namespace. ``command`` is None when no command was given.

    Raises:
        InputError: If the command is unknown or its arguments do not fit.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = CommandParser(
        prog="chron",
        description="chron - track your working day against projects and breaks",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file path. Default: $CHRON_CONFIG or config/config.yaml",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    subparsers.add_parser("check-in", help="Start tracking today")

    track = subparsers.add_parser("track", help="Track time until now for a project")
    track.add_argument("project")
    track.add_argument("description", nargs="*", default=[])

    pause = subparsers.add_parser("break", help="Track time until now as a break")
    pause.add_argument("description", nargs="*", default=[])

    retrotrack = subparsers.add_parser(
        "retrotrack", help="Track time for a project until an earlier time (HH:MM)"
    )
    retrotrack.add_argument("time")
    retrotrack.add_argument("project")
    retrotrack.add_argument("description", nargs="*", default=[])

    projects = subparsers.add_parser("projects", help="Manage configured projects")
    projects.add_argument("action", choices=["add", "delete", "list"])
    projects.add_argument("name", nargs="*", default=[])

    report = subparsers.add_parser("report", aliases=["rep"], help="Print a report")
    report.add_argument(
        "period",
        nargs="?",
        default="day",
        help="day, week or month; a bare date (YYYY-MM-DD) reports that day",
    )
    report.add_argument("date", nargs="?", default=None, help="Any date in the period (YYYY-MM-DD)")

    log = subparsers.add_parser("log", help="Print the chunks tracked on a day")
    log.add_argument("date", nargs="?", default=None, help="Date to print (YYYY-MM-DD)")

    subparsers.add_parser("reset", help="Delete everything tracked today")
    subparsers.add_parser("version", help="Print the version")

    command = find_command(argv)
    if command is not None and command not in subparsers.choices:
        raise InputError(f"The command '{command}' is not valid")

    args = parser.parse_args(argv)
    if args.command == "rep":
        args.command = "report"
    if args.command == "report":
        args.period, args.date = resolve_report_period(args.period, args.date)
    return args


def resolve_report_period(period: str, date: str | None) -> tuple[str, str | None]:
    """
    Interpret the report arguments.

    ``chron report 2023-11-17`` is the day report of that date, so a lone
    date in place of the period is accepted.

    Raises:
        InputError: If the period is neither a known period nor a date.
    """
    if period in REPORT_PERIODS:
        return period, date
    if date is None:
        try:
            dt.datetime.strptime(period, DATE_FORMAT)
        except ValueError:
            pass
        else:
            return "day", period
    raise InputError(
        f"The report period '{period}' is not valid, use one of: {', '.join(REPORT_PERIODS)}"
    )


def parse_time_arg(value: str) -> dt.time:
    """Parse an ``HH:MM`` argument."""
    try:
        return dt.datetime.strptime(value, TIME_FORMAT).time()
    except ValueError as exc:
        raise InputError(
            f"Your time input '{value}' does not match expected format 'HH:MM'"
        ) from exc


def parse_date_arg(value: str | None, today: dt.date) -> dt.date:
    """Parse an optional ``YYYY-MM-DD`` argument, defaulting to today."""
    if value is None:
        return today
    try:
        return dt.datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise InputError(
            f"Your date input '{value}' does not match expected format 'YYYY-MM-DD'"
        ) from exc


def join_description(words: Sequence[str]) -> str | None:
    return " ".join(words) or None


def run_command(
    args: argparse.Namespace,
    tracker: Tracker,
    reports: ReportGenerator,
    printer: ConsolePrinter,
) -> None:
    """
    Execute a parsed command.

    Args:
        args: Parsed arguments from :func:`parse_args`.
        tracker: Tracking engine for today's record.
        reports: Report generator reading from the same store.
        printer: Console output.

    Raises:
        ChronError: Any tracking, validation, storage or input error.
    """
    if args.command == "check-in":
        printer.print_checked_in(tracker.check_in())

    elif args.command == "track":
        chunk = tracker.track(args.project, join_description(args.description))
        printer.print_tracked(chunk.project, chunk.end_time)

    elif args.command == "break":
        chunk = tracker.take_break(join_description(args.description))
        printer.print_tracked(chunk.project, chunk.end_time)

    elif args.command == "retrotrack":
        chunk = tracker.retrotrack(
            parse_time_arg(args.time), args.project, join_description(args.description)
        )
        printer.print_tracked(chunk.project, chunk.end_time)

    elif args.command == "projects":
        name = " ".join(args.name)
        if args.action == "list":
            printer.print_projects(tracker.registry.list())
        elif not name:
            raise InputError(f"You must provide a project name: chron projects {args.action} <name>")
        elif args.action == "add":
            printer.print_project_added(name, tracker.registry.add(name))
        else:
            printer.print_project_deleted(name, tracker.registry.remove(name))

    elif args.command == "report":
        anchor = parse_date_arg(args.date, tracker.now().date())
        if args.period == "week":
            printer.print_report(reports.report_week(anchor))
        elif args.period == "month":
            printer.print_report(reports.report_month(anchor))
        else:
            report = reports.report_day(anchor)
            if report is None:
                printer.print_no_data(anchor)
            else:
                printer.print_report(report)

    elif args.command == "log":
        day_date = parse_date_arg(args.date, tracker.now().date())
        log = reports.log_day(day_date)
        if log is None:
            printer.print_no_data(day_date)
        else:
            printer.print_report(log)

    elif args.command == "reset":
        tracker.reset()
        printer.print_reset(tracker.now().date())

    elif args.command == "version":
        printer.print_version(__version__)

    else:
        raise InputError("You must provide a command: chron <command>")


def main(argv: Sequence[str] | None = None, clock: Clock = dt.datetime.now) -> None:
    """
    Main entry point for chron.

    Every handled outcome, errors included, is reported on the console;
    the process always exits normally.
    """
    printer = ConsolePrinter()

    try:
        args = parse_args(argv)
        config = load_config(args.config)
        configure_logging(config["logging"]["level"])

        store = TimeStore(get_data_dir(config))
        registry = ProjectRegistry(get_projects_file(config))
        tracker = Tracker(store, registry, clock=clock)
        run_command(args, tracker, ReportGenerator(store), printer)
    except AlreadyCheckedInError:
        printer.print_error("You have already checked in today, no need to check in again!")
    except NoActiveDayError:
        printer.print_error("Before tracking any time, you need to check in!")
    except BeforeCheckInError:
        printer.print_error("You cannot track time before your check-in!")
    except AfterNowError:
        printer.print_error("You cannot retro-track time after the current time!")
    except ProjectNotConfiguredError as e:
        printer.print_error(
            f"You are not allowed to track time for the project '{e.project}' "
            "since it is not configured."
        )
    except MalformedRecordError as e:
        printer.print_error(f"Invalid JSON format: {e}")
    except StoreIOError as e:
        printer.print_error(f"IO Error: {e}")
    except ConfigError as e:
        printer.print_error(f"Config error: {e}")
    except InputError as e:
        printer.print_error(str(e))
    except ChronError as e:
        printer.print_error(f"Unexpected error: {e}")


if __name__ == "__main__":
    main()
