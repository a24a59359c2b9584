from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from chron.models import Day
from chron.store import MalformedRecordError, StoreIOError, TimeStore


def test_path_uses_year_and_month_folders(store: TimeStore, data_dir: Path) -> None:
    assert store.path_for(date(2023, 11, 17)) == data_dir / "2023" / "November" / "2023-11-17.json"


def test_load_missing_day_returns_none(store: TimeStore) -> None:
    assert store.load(date(2023, 11, 17)) is None
    assert not store.exists(date(2023, 11, 17))


def test_save_and_load(store: TimeStore, sample_day: Day) -> None:
    path = store.save(sample_day)

    assert path.is_file()
    assert store.exists(sample_day.date)
    assert store.load(sample_day.date) == sample_day

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["checkInTime"] == "08:06"
    assert len(document["chunks"]) == 9


def test_save_overwrites_whole_record(store: TimeStore, sample_day: Day) -> None:
    store.save(sample_day)
    shortened = sample_day.model_copy(update={"chunks": sample_day.chunks[:1]})
    store.save(shortened)

    assert store.load(sample_day.date).chunks == sample_day.chunks[:1]


def _write(store: TimeStore, day_date: date, content: str) -> None:
    path = store.path_for(day_date)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_invalid_json_is_malformed(store: TimeStore) -> None:
    _write(store, date(2023, 11, 17), "{not json")

    with pytest.raises(MalformedRecordError):
        store.load(date(2023, 11, 17))


def test_other_schema_is_malformed(store: TimeStore) -> None:
    legacy = {"date": "2023-11-17", "check_in": "08:06:00", "chunks": []}
    _write(store, date(2023, 11, 17), json.dumps(legacy))

    with pytest.raises(MalformedRecordError):
        store.load(date(2023, 11, 17))


def test_record_for_another_date_is_malformed(store: TimeStore) -> None:
    record = {"date": "2023-11-16", "checkInTime": "08:06", "chunks": []}
    _write(store, date(2023, 11, 17), json.dumps(record))

    with pytest.raises(MalformedRecordError):
        store.load(date(2023, 11, 17))


def test_delete(store: TimeStore, sample_day: Day) -> None:
    store.save(sample_day)
    store.delete(sample_day.date)

    assert not store.exists(sample_day.date)


def test_delete_missing_day_fails(store: TimeStore) -> None:
    with pytest.raises(StoreIOError):
        store.delete(date(2023, 11, 17))
