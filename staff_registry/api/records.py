"""
Record API endpoints.

One router per person table, built from its `RecordKind`: listing, key lookup,
first/last, circular next/previous, insert and delete.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from staff_registry.db.database import ConnectionProvider, get_provider
from staff_registry.db.models import KEY_MAX
from staff_registry.db.repositories.records import (
    CUSTOMERS,
    EMPLOYEES,
    EXTERNAL_EMPLOYEES,
    RecordKind,
    RecordStore,
)

logger = logging.getLogger(__name__)


def build_router(kind: RecordKind, prefix: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[kind.name])
    schema = kind.schema

    def get_store(provider: ConnectionProvider = Depends(get_provider)) -> RecordStore:
        return RecordStore(provider, kind)

    def _found(record):
        if record is None:
            raise HTTPException(status_code=404, detail=f"No matching record in {kind.name}")
        return record

    @router.get("/", response_model=List[schema])
    def list_records(response: Response, store: RecordStore = Depends(get_store)):
        records = store.find_all()
        response.headers["X-Total-Count"] = str(store.count())
        return records

    # Fixed paths first so they are not captured by /{key}
    @router.get("/first", response_model=schema)
    def first_record(store: RecordStore = Depends(get_store)):
        return _found(store.find_first())

    @router.get("/last", response_model=schema)
    def last_record(store: RecordStore = Depends(get_store)):
        return _found(store.find_last())

    @router.get("/{key}", response_model=schema)
    def get_record(key: int = Path(..., gt=0, le=KEY_MAX), store: RecordStore = Depends(get_store)):
        return _found(store.find_by_key(key))

    @router.get("/{key}/next", response_model=schema)
    def next_record(key: int = Path(..., gt=0, le=KEY_MAX), store: RecordStore = Depends(get_store)):
        return _found(store.find_next_circular(key))

    @router.get("/{key}/previous", response_model=schema)
    def previous_record(key: int = Path(..., gt=0, le=KEY_MAX), store: RecordStore = Depends(get_store)):
        return _found(store.find_previous_circular(key))

    @router.post("/", response_model=schema, status_code=status.HTTP_201_CREATED)
    def create_record(record: schema, store: RecordStore = Depends(get_store)):
        # The store does not check key uniqueness; look it up before inserting
        if store.find_by_key(record.key) is not None:
            raise HTTPException(status_code=409, detail=f"Key {record.key} already exists in {kind.name}")
        store.insert(record)
        return store.find_by_key(record.key)

    @router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_record(key: int = Path(..., gt=0, le=KEY_MAX), store: RecordStore = Depends(get_store)):
        store.delete(key)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


employees_router = build_router(EMPLOYEES, "/employees")
external_employees_router = build_router(EXTERNAL_EMPLOYEES, "/external-employees")
customers_router = build_router(CUSTOMERS, "/customers")
