from __future__ import annotations

from datetime import datetime, time
from pathlib import Path

import pytest

from chron.models import Chunk, Day
from chron.registry import ProjectRegistry
from chron.store import TimeStore
from chron.tracker import Tracker


class StubClock:
    """Clock returning a settable datetime."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def set(self, hh_mm: str) -> None:
        hours, minutes = (int(part) for part in hh_mm.split(":"))
        self.current = self.current.replace(hour=hours, minute=minutes)


def _chunk(project: str, end_time: str, description: str | None = None) -> Chunk:
    return Chunk(project=project, description=description, end_time=end_time)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def store(data_dir: Path) -> TimeStore:
    return TimeStore(data_dir)


@pytest.fixture
def registry(data_dir: Path) -> ProjectRegistry:
    registry = ProjectRegistry(data_dir / "config.json")
    registry.add("kyoshi")
    registry.add("korra")
    return registry


@pytest.fixture
def clock() -> StubClock:
    return StubClock(datetime(2023, 11, 17, 8, 6, 42))


@pytest.fixture
def tracker(store: TimeStore, registry: ProjectRegistry, clock: StubClock) -> Tracker:
    return Tracker(store, registry, clock=clock)


@pytest.fixture
def sample_day() -> Day:
    """A full working day with one chunk retro-tracked out of order."""
    return Day(
        date="2023-11-17",
        check_in_time=time(8, 6),
        chunks=[
            _chunk("kyoshi", "08:45", "answer messages from colleagues"),
            _chunk("break", "09:15", "coffee break"),
            _chunk("kyoshi", "11:23", "develop feature #123"),
            _chunk("kyoshi", "11:55"),
            _chunk("break", "12:43", "lunch break"),
            _chunk("lake laogai", "13:00", "answer emails"),
            _chunk("korra", "09:00", "daily scrum"),
            _chunk("korra", "14:00", "refinement meeting"),
            _chunk("kyoshi", "16:34", "develop feature #123"),
        ],
    )
