"""SQLite connection hooks for local runs and tests.

The stdlib ``sqlite3`` driver issues its own implicit BEGIN/COMMIT and only
starts a transaction on DML, which breaks SAVEPOINT handling and lets a
leading SELECT run outside the transaction. These hooks hand transaction
control back to SQLAlchemy and switch on foreign key enforcement, which
SQLite leaves off by default.

Usage: ``install(engine)`` is called by the connection provider for SQLite URLs.
"""
from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.engine import Engine


def install(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # pragma: no cover - driver hook
        # Disable pysqlite's own transaction handling.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN")
