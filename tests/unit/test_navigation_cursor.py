from types import SimpleNamespace

import pytest

from staff_registry.db import schemas
from staff_registry.db.errors import DataAccessFailure
from staff_registry.services.navigation import CursorOutcome, NavigationCursor


class FakeStore:
    """In-memory stand-in that mimics RecordStore's positional semantics."""

    def __init__(self, *keys):
        self.rows = {k: schemas.Employee(key=k, first_name=f"P{k}") for k in keys}
        self.kind = SimpleNamespace(name="employees")
        self.calls = []

    def _sorted(self):
        return sorted(self.rows)

    def find_by_key(self, key):
        self.calls.append(("find_by_key", key))
        return self.rows.get(key)

    def find_first(self):
        self.calls.append(("find_first",))
        keys = self._sorted()
        return self.rows[keys[0]] if keys else None

    def find_last(self):
        self.calls.append(("find_last",))
        keys = self._sorted()
        return self.rows[keys[-1]] if keys else None

    def find_next_circular(self, key):
        self.calls.append(("find_next_circular", key))
        bigger = [k for k in self._sorted() if k > key]
        return self.rows[bigger[0]] if bigger else self.find_first()

    def find_previous_circular(self, key):
        self.calls.append(("find_previous_circular", key))
        smaller = [k for k in self._sorted() if k < key]
        return self.rows[smaller[-1]] if smaller else self.find_last()

    def delete(self, key):
        self.calls.append(("delete", key))
        return self.rows.pop(key, None) is not None


def test_load_shows_first_record():
    cursor = NavigationCursor(FakeStore(4, 2, 9))
    result = cursor.load()
    assert result.outcome is CursorOutcome.SHOWING
    assert result.record.key == 2
    assert cursor.current_key == 2


def test_load_on_empty_store():
    cursor = NavigationCursor(FakeStore())
    result = cursor.load()
    assert result.outcome is CursorOutcome.EMPTY
    assert result.record is None
    assert not cursor.is_showing


def test_next_from_nothing_behaves_like_load():
    store = FakeStore(3, 8)
    cursor = NavigationCursor(store)
    assert cursor.next().record.key == 3
    assert store.calls == [("find_first",)]


def test_previous_from_nothing_starts_at_last():
    cursor = NavigationCursor(FakeStore(3, 8))
    assert cursor.previous().record.key == 8


def test_next_and_previous_wrap_around():
    cursor = NavigationCursor(FakeStore(1, 2, 3))
    cursor.search(3)
    assert cursor.next().record.key == 1
    assert cursor.previous().record.key == 3


def test_search_miss_is_distinct_from_empty():
    cursor = NavigationCursor(FakeStore(1))
    cursor.load()
    result = cursor.search(42)
    assert result.outcome is CursorOutcome.NOT_FOUND
    assert cursor.current_key is None


def test_delete_current_prefers_successor():
    store = FakeStore(1, 3, 5)
    cursor = NavigationCursor(store)
    cursor.search(3)
    result = cursor.delete_current()
    assert result.record.key == 5
    assert 3 not in store.rows


def test_delete_last_record_moves_to_wrapped_successor():
    cursor = NavigationCursor(FakeStore(1, 3, 5))
    cursor.search(5)
    assert cursor.delete_current().record.key == 1


def test_delete_only_record_empties_cursor():
    store = FakeStore(7)
    cursor = NavigationCursor(store)
    cursor.load()
    result = cursor.delete_current()
    assert result.outcome is CursorOutcome.EMPTY
    assert cursor.current_key is None
    assert ("find_previous_circular", 7) in store.calls


def test_delete_without_current_record_is_noop():
    store = FakeStore(1)
    cursor = NavigationCursor(store)
    assert cursor.delete_current().outcome is CursorOutcome.EMPTY
    assert store.calls == []


def test_refresh_picks_up_external_changes():
    store = FakeStore(2)
    cursor = NavigationCursor(store)
    cursor.load()
    store.rows[2] = schemas.Employee(key=2, first_name="Renamed")
    assert cursor.refresh().record.first_name == "Renamed"

    del store.rows[2]
    result = cursor.refresh()
    assert result.outcome is CursorOutcome.EMPTY
    assert cursor.current_key is None


def test_store_failure_propagates_and_keeps_state():
    store = FakeStore(1, 2)
    cursor = NavigationCursor(store)
    cursor.load()

    def boom(key):
        raise DataAccessFailure("employees.find_next", "connection refused")

    store.find_next_circular = boom
    with pytest.raises(DataAccessFailure):
        cursor.next()
    assert cursor.current_key == 1
