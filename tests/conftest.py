"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List

from dexplorer.errors import ItemFetchError
from dexplorer.logger import StructuredLogger
from dexplorer.models import CatalogReference, EntityRecord


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    """Logger with no handlers output, for metric assertions."""
    return StructuredLogger(name="dexplorer.test", level="DEBUG", enable_console=False)


@pytest.fixture
def make_record():
    """Factory for EntityRecord with sensible defaults."""
    def _make(id: int, name: str, weight: float = 10, height: float = 5, types=("normal",), thumbnail=None):
        return EntityRecord(id=id, name=name, weight=weight, height=height, types=tuple(types), thumbnail=thumbnail)
    return _make


@pytest.fixture
def sample_records(make_record) -> List[EntityRecord]:
    """A small catalog in provider (id) order."""
    return [
        make_record(1, "bulbasaur", 69, 7, ("grass", "poison")),
        make_record(4, "charmander", 85, 6, ("fire",)),
        make_record(5, "charmeleon", 190, 11, ("fire",)),
        make_record(6, "charizard", 905, 17, ("fire", "flying")),
        make_record(7, "squirtle", 90, 5, ("water",)),
        make_record(16, "Pidgey", 18, 3, ("normal", "flying")),
        make_record(25, "pikachu", 60, 4, ("electric",)),
        make_record(129, "magikarp", 100, 9, ("water",)),
        make_record(143, "snorlax", 4600, 21, ("normal",)),
    ]


@pytest.fixture
def detail_payload():
    """Factory for provider detail payloads."""
    def _payload(id: int = 4, name: str = "charmander", weight=85, height=6,
                 types=("fire",), front_default="https://img.example/4.png") -> Dict[str, Any]:
        return {
            "id": id,
            "name": name,
            "weight": weight,
            "height": height,
            "types": [{"slot": i + 1, "type": {"name": t, "url": f"https://x/type/{t}"}} for i, t in enumerate(types)],
            "sprites": {"front_default": front_default},
        }
    return _payload


class FakeHandle:
    def __init__(self, scheduler: "FakeScheduler", when: float, callback):
        self.scheduler = scheduler
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock implementing call_later, in seconds."""

    def __init__(self):
        self.now = 0.0
        self.handles: List[FakeHandle] = []

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self, self.now + delay, lambda: callback(*args))
        self.handles.append(handle)
        return handle

    def advance_to(self, t: float):
        """Fire every live timer due at or before t, in due order."""
        while True:
            due = [h for h in self.handles if not h.cancelled and h.when <= t]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.now = handle.when
            handle.cancelled = True
            handle.callback()
        self.now = t

    @property
    def live_timers(self) -> int:
        return sum(1 for h in self.handles if not h.cancelled)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


class FakeClient:
    """Stands in for CatalogClient; detail payload lookup by location."""

    def __init__(self, records: List[EntityRecord], failing: set = frozenset(), list_error: Exception = None):
        self.records = {f"https://api.example/pokemon/{r.id}/": r for r in records}
        self.failing = set(failing)
        self.list_error = list_error
        self.list_calls = []
        self.detail_calls = []

    def list_references(self, limit=None):
        self.list_calls.append(limit)
        if self.list_error is not None:
            raise self.list_error
        refs = [CatalogReference(name=r.name, location=loc) for loc, r in self.records.items()]
        return refs[:limit] if limit is not None else refs

    def fetch_detail(self, location):
        self.detail_calls.append(location)
        record = self.records[location]
        if record.id in self.failing:
            raise ItemFetchError(location, "503 Server Error", error_type="HTTPError_503")
        return record


@pytest.fixture
def fake_client_cls():
    return FakeClient
