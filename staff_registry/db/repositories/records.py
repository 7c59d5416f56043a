"""
Record store shared by the three person tables.

One `RecordStore` serves every table; a `RecordKind` describes the ORM model,
its key column, the pydantic variant it maps to and, for external employees
and customers, the category lookup it joins. Each public method opens its own
session, runs its statements and closes the session before returning.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from staff_registry.db import models, schemas
from staff_registry.db.database import ConnectionProvider
from staff_registry.db.errors import DataAccessFailure
from staff_registry.db.repositories.categories import CategoryResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategorySpec:
    model: type
    foreign_key: str
    relationship: str
    field: str


@dataclass(frozen=True)
class RecordKind:
    name: str
    model: type
    key_column: str
    schema: type
    category: Optional[CategorySpec] = None


EMPLOYEES = RecordKind(
    name="employees",
    model=models.Employee,
    key_column="employee_number",
    schema=schemas.Employee,
)

EXTERNAL_EMPLOYEES = RecordKind(
    name="external_employees",
    model=models.ExternalEmployee,
    key_column="employee_number",
    schema=schemas.ExternalEmployee,
    category=CategorySpec(
        model=models.Company,
        foreign_key="company_id",
        relationship="company",
        field="company",
    ),
)

CUSTOMERS = RecordKind(
    name="customers",
    model=models.Customer,
    key_column="customer_number",
    schema=schemas.Customer,
    category=CategorySpec(
        model=models.Industry,
        foreign_key="industry_id",
        relationship="industry",
        field="industry",
    ),
)


class RecordStore:
    def __init__(
        self,
        provider: ConnectionProvider,
        kind: RecordKind,
        *,
        resolver: Optional[CategoryResolver] = None,
    ):
        self.provider = provider
        self.kind = kind
        self.key = getattr(kind.model, kind.key_column)
        if resolver is None and kind.category is not None:
            resolver = CategoryResolver(kind.category.model)
        self.resolver = resolver

    # -- plumbing ---------------------------------------------------------

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with self.provider.session() as db:
                yield db
        except (SQLAlchemyError, OverflowError) as exc:
            # OverflowError: a key the driver cannot bind as an integer
            raise DataAccessFailure(f"{self.kind.name}.{operation}", str(exc)) from exc

    def _select(self):
        stmt = select(self.kind.model)
        if self.kind.category is not None:
            related = getattr(self.kind.model, self.kind.category.relationship)
            stmt = stmt.options(joinedload(related, innerjoin=True))
        return stmt

    def _to_record(self, row) -> schemas.RecordBase:
        values = {field: getattr(row, field) for field in models.PERSON_FIELDS}
        values["key"] = getattr(row, self.kind.key_column)
        if self.kind.category is not None:
            values[self.kind.category.field] = getattr(row, self.kind.category.relationship).name
        return self.kind.schema(**values)

    @staticmethod
    def _in_range(key: int) -> bool:
        return models.KEY_MIN <= key <= models.KEY_MAX

    def _fetch_one(self, operation: str, stmt) -> Optional[schemas.RecordBase]:
        with self._session(operation) as db:
            row = db.execute(stmt.limit(1)).scalars().first()
            return self._to_record(row) if row is not None else None

    # -- reads ------------------------------------------------------------

    def find_by_key(self, key: int) -> Optional[schemas.RecordBase]:
        if not self._in_range(key):
            return None
        return self._fetch_one("find_by_key", self._select().where(self.key == key))

    def find_all(self) -> List[schemas.RecordBase]:
        with self._session("find_all") as db:
            rows = db.execute(self._select().order_by(self.key.asc())).scalars().all()
            return [self._to_record(row) for row in rows]

    def find_first(self) -> Optional[schemas.RecordBase]:
        return self._fetch_one("find_first", self._select().order_by(self.key.asc()))

    def find_last(self) -> Optional[schemas.RecordBase]:
        return self._fetch_one("find_last", self._select().order_by(self.key.desc()))

    def find_next(self, key: int) -> Optional[schemas.RecordBase]:
        """Record with the smallest key strictly greater than ``key``."""
        if key > models.KEY_MAX:
            return None
        if key < models.KEY_MIN:
            return self.find_first()
        stmt = self._select().where(self.key > key).order_by(self.key.asc())
        return self._fetch_one("find_next", stmt)

    def find_previous(self, key: int) -> Optional[schemas.RecordBase]:
        """Record with the largest key strictly smaller than ``key``."""
        if key < models.KEY_MIN:
            return None
        if key > models.KEY_MAX:
            return self.find_last()
        stmt = self._select().where(self.key < key).order_by(self.key.desc())
        return self._fetch_one("find_previous", stmt)

    def find_next_circular(self, key: int) -> Optional[schemas.RecordBase]:
        """Like `find_next`, wrapping to the first record. None only for an empty table."""
        found = self.find_next(key)
        return found if found is not None else self.find_first()

    def find_previous_circular(self, key: int) -> Optional[schemas.RecordBase]:
        found = self.find_previous(key)
        return found if found is not None else self.find_last()

    def count(self) -> int:
        with self._session("count") as db:
            return db.execute(select(func.count()).select_from(self.kind.model)).scalar_one()

    # -- writes -----------------------------------------------------------

    def insert(self, record: schemas.RecordBase) -> None:
        """Insert ``record`` under its caller-chosen key.

        Neither positivity nor uniqueness of the key is checked here; callers
        look the key up first. For kinds with a category the category id is
        resolved (or created) in the same transaction as the row insert, so a
        failed insert leaves no new category behind.
        """
        if not isinstance(record, self.kind.schema):
            raise TypeError(
                f"{self.kind.name} store cannot insert {type(record).__name__} records"
            )
        values = {field: getattr(record, field) for field in models.PERSON_FIELDS}
        values[self.kind.key_column] = record.key

        with self._session("insert") as db:
            try:
                if self.kind.category is not None:
                    category_name = schemas.category_of(record)
                    values[self.kind.category.foreign_key] = self.resolver.resolve(db, category_name)
                db.add(self.kind.model(**values))
                db.commit()
            except Exception:
                db.rollback()
                raise
        logger.info("record_inserted: table=%s key=%s", self.kind.name, record.key)

    def delete(self, key: int) -> bool:
        """Delete the row with ``key``. Missing keys are a no-op; returns whether a row went away."""
        if not self._in_range(key):
            logger.info("record_deleted: table=%s key=%s removed=False", self.kind.name, key)
            return False
        with self._session("delete") as db:
            try:
                result = db.execute(delete(self.kind.model).where(self.key == key))
                removed = bool(result.rowcount)
                db.commit()
            except Exception:
                db.rollback()
                raise
        logger.info("record_deleted: table=%s key=%s removed=%s", self.kind.name, key, removed)
        return removed


def employee_store(provider: ConnectionProvider) -> RecordStore:
    return RecordStore(provider, EMPLOYEES)


def external_employee_store(provider: ConnectionProvider) -> RecordStore:
    return RecordStore(provider, EXTERNAL_EMPLOYEES)


def customer_store(provider: ConnectionProvider) -> RecordStore:
    return RecordStore(provider, CUSTOMERS)
