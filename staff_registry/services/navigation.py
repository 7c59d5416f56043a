"""
Navigation cursor over one record store.

Tracks the key of the record currently shown and recomputes it after
navigation, search, deletion or an external change. Only the key is kept;
every call re-reads the record from the store. Store failures propagate and
leave the cursor where it was.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from staff_registry.db.repositories.records import RecordStore
from staff_registry.db.schemas import RecordBase

logger = logging.getLogger(__name__)


class CursorOutcome(str, Enum):
    SHOWING = "showing"
    EMPTY = "empty"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CursorResult:
    outcome: CursorOutcome
    record: Optional[RecordBase] = None


class NavigationCursor:
    def __init__(self, store: RecordStore):
        self.store = store
        self.current_key: Optional[int] = None

    @property
    def is_showing(self) -> bool:
        return self.current_key is not None

    def _show(self, record: Optional[RecordBase]) -> CursorResult:
        if record is None:
            self.current_key = None
            return CursorResult(CursorOutcome.EMPTY)
        self.current_key = record.key
        return CursorResult(CursorOutcome.SHOWING, record)

    def load(self) -> CursorResult:
        return self._show(self.store.find_first())

    def next(self) -> CursorResult:
        if self.current_key is None:
            return self.load()
        return self._show(self.store.find_next_circular(self.current_key))

    def previous(self) -> CursorResult:
        if self.current_key is None:
            return self._show(self.store.find_last())
        return self._show(self.store.find_previous_circular(self.current_key))

    def search(self, key: int) -> CursorResult:
        record = self.store.find_by_key(key)
        if record is None:
            self.current_key = None
            return CursorResult(CursorOutcome.NOT_FOUND)
        return self._show(record)

    def delete_current(self) -> CursorResult:
        """Delete the shown record, then move to its successor, else its predecessor."""
        if self.current_key is None:
            return CursorResult(CursorOutcome.EMPTY)
        deleted_key = self.current_key
        self.store.delete(deleted_key)
        logger.debug("cursor_delete: table=%s key=%s", self.store.kind.name, deleted_key)

        record = self.store.find_next_circular(deleted_key)
        if record is None:
            record = self.store.find_previous_circular(deleted_key)
        return self._show(record)

    def refresh(self) -> CursorResult:
        """Re-read the shown record to pick up external edits or deletion."""
        if self.current_key is None:
            return CursorResult(CursorOutcome.EMPTY)
        return self._show(self.store.find_by_key(self.current_key))
