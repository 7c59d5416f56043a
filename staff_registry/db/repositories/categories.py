"""
Category lookup-or-create.

Maps a company or industry display name to its generated id inside the
caller's transaction, creating the row on first use. Where the dialect has a
native insert-if-absent the insert is a single ``ON CONFLICT DO NOTHING``
statement; elsewhere it runs in a SAVEPOINT so a uniqueness violation leaves
the outer transaction usable. Either way a lost race is answered by exactly
one re-select, taken as a locking read so a repeatable-read snapshot
cannot hide the row the competing transaction committed.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from staff_registry.db.errors import CategoryResolutionFailure

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class CategoryResolver:
    def __init__(self, model, *, use_upsert: Optional[bool] = None):
        self.model = model
        self.table = model.__table__
        self.id_column = self.table.primary_key.columns.values()[0]
        # None means: use the native statement whenever the dialect has one
        self.use_upsert = use_upsert

    @property
    def category(self) -> str:
        return self.table.name

    def resolve(self, db: Session, name: str) -> int:
        existing = self._select_id(db, name)
        if existing is not None:
            return existing

        created = self._insert(db, name)
        if created is not None:
            logger.info("category_created: table=%s name=%r id=%s", self.category, name, created)
            return created

        logger.warning(
            "category_race: table=%s name=%r inserted concurrently, re-selecting",
            self.category,
            name,
        )
        existing = self._select_id(db, name, lock=True)
        if existing is not None:
            return existing

        logger.error("category_unresolved: table=%s name=%r", self.category, name)
        raise CategoryResolutionFailure(self.category, name)

    def _id_query(self, name: str, *, lock: bool = False):
        stmt = select(self.id_column).where(self.table.c.name == name)
        # InnoDB only reads the latest committed row under a locking read
        return stmt.with_for_update() if lock else stmt

    def _select_id(self, db: Session, name: str, *, lock: bool = False) -> Optional[int]:
        return db.execute(self._id_query(name, lock=lock)).scalar_one_or_none()

    def _upsert_enabled(self, dialect: str) -> bool:
        if self.use_upsert is None:
            return dialect in _UPSERT_INSERTS
        return self.use_upsert and dialect in _UPSERT_INSERTS

    def _insert(self, db: Session, name: str) -> Optional[int]:
        """Insert ``name`` and return the new id, or None if the name already exists."""
        dialect = db.get_bind().dialect.name
        if self._upsert_enabled(dialect):
            stmt = (
                _UPSERT_INSERTS[dialect](self.table)
                .values(name=name)
                .on_conflict_do_nothing(index_elements=["name"])
                .returning(self.id_column)
            )
            return db.execute(stmt).scalar_one_or_none()

        try:
            with db.begin_nested():
                result = db.execute(insert(self.table).values(name=name))
        except IntegrityError:
            return None
        return result.inserted_primary_key[0]
