from __future__ import annotations

import textwrap
from datetime import date, time

from chron.models import Chunk, Day
from chron.reporter import ReportGenerator, format_day, render_table
from chron.store import TimeStore

EXPECTED_DAY = """\
# Log for: 2023-11-17

## summary

- total amount of work: 8.47h (8h 28m)
- without breaks: 7.42h (7h 25m)

| project     | time           |
|-------------|----------------|
| korra       | 1.25h (1h 15m) |
| kyoshi      | 5.88h (5h 53m) |
| lake laogai | 0.28h (0h 17m) |
| break       | 1.05h (1h 3m)  |

## details

| time    | project     | description                     |
|---------|-------------|---------------------------------|
| 08:06   | check-in    |                                 |
| - 08:45 | kyoshi      | answer messages from colleagues |
| - 09:00 | korra       | daily scrum                     |
| - 09:15 | break       | coffee break                    |
| - 11:23 | kyoshi      | develop feature #123            |
| - 11:55 | kyoshi      |                                 |
| - 12:43 | break       | lunch break                     |
| - 13:00 | lake laogai | answer emails                   |
| - 14:00 | korra       | refinement meeting              |
| - 16:34 | kyoshi      | develop feature #123            |"""

EMPTY_SUMMARY = """\
## summary

- total amount of work: 0.00h (0h 0m)
- without breaks: 0.00h (0h 0m)

| project | time          |
|---------|---------------|
| break   | 0.00h (0h 0m) |"""


def test_format_day(sample_day: Day) -> None:
    assert format_day(sample_day) == EXPECTED_DAY


def test_render_table_widths() -> None:
    table = render_table(["a", "long header"], [["wide cell", "x"]], min_widths=[0, 0])

    assert table == textwrap.dedent(
        """\
        | a         | long header |
        |-----------|-------------|
        | wide cell | x           |"""
    )


def test_render_table_without_rows() -> None:
    assert render_table(["time", "project"], [], min_widths=[7, 0]) == (
        "| time    | project |\n|---------|---------|"
    )


def test_report_day_without_record(store: TimeStore) -> None:
    assert ReportGenerator(store).report_day(date(2023, 11, 17)) is None
    assert ReportGenerator(store).log_day(date(2023, 11, 17)) is None


def test_report_day_from_store(store: TimeStore, sample_day: Day) -> None:
    store.save(sample_day)

    assert ReportGenerator(store).report_day(date(2023, 11, 17)) == EXPECTED_DAY


def test_log_day_prints_details_only(store: TimeStore, sample_day: Day) -> None:
    store.save(sample_day)

    log = ReportGenerator(store).log_day(date(2023, 11, 17))

    assert log == EXPECTED_DAY.split("## details\n\n")[1]


def test_week_without_records(store: TimeStore) -> None:
    report = ReportGenerator(store).report_week(date(2023, 11, 17))

    assert report == f"# Log for week: 46\n\n{EMPTY_SUMMARY}"


def test_month_without_records(store: TimeStore) -> None:
    report = ReportGenerator(store).report_month(date(2023, 11, 17))

    assert report == f"# Log for month: 2023-11\n\n{EMPTY_SUMMARY}"


def test_week_sums_available_days(store: TimeStore, sample_day: Day) -> None:
    store.save(sample_day)
    store.save(
        Day(
            date=date(2023, 11, 13),
            check_in_time=time(9, 0),
            chunks=[Chunk(project="korra", description="planning", end_time="09:45")],
        )
    )
    # next week, not part of the report
    store.save(
        Day(
            date=date(2023, 11, 20),
            check_in_time=time(9, 0),
            chunks=[Chunk(project="korra", end_time="17:00")],
        )
    )

    report = ReportGenerator(store).report_week(date(2023, 11, 15))

    assert report == textwrap.dedent(
        """\
        # Log for week: 46

        ## summary

        - total amount of work: 9.22h (9h 13m)
        - without breaks: 8.17h (8h 10m)

        | project     | time           |
        |-------------|----------------|
        | korra       | 2.00h (2h 0m)  |
        | kyoshi      | 5.88h (5h 53m) |
        | lake laogai | 0.28h (0h 17m) |
        | break       | 1.05h (1h 3m)  |"""
    )


def test_month_sums_available_days(store: TimeStore, sample_day: Day) -> None:
    store.save(sample_day)
    store.save(
        Day(
            date=date(2023, 11, 20),
            check_in_time=time(9, 0),
            chunks=[Chunk(project="korra", end_time="17:00")],
        )
    )
    store.save(
        Day(
            date=date(2023, 12, 1),
            check_in_time=time(9, 0),
            chunks=[Chunk(project="korra", end_time="17:00")],
        )
    )

    report = ReportGenerator(store).report_month(date(2023, 11, 1))

    assert report.startswith("# Log for month: 2023-11\n\n## summary\n\n")
    assert "- total amount of work: 16.47h (16h 28m)" in report
    assert "| korra       | 9.25h (9h 15m) |" in report
