"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration and hands out
short-lived sessions. Engines use ``NullPool`` so every session checkout opens
a fresh DBAPI connection which is closed again when the session ends; there
is no pooling and no retry.
"""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from staff_registry.db import sqlite_shims

logger = logging.getLogger(__name__)

DEFAULT_DRIVER = "postgresql"
_DEFAULT_PORTS = {"postgresql": 5432, "mysql": 3306}


@dataclass(frozen=True)
class ConnectionSettings:
    """Connection parameters supplied by the caller (host, schema, credentials)."""

    host: str
    database: str
    user: str
    password: str
    port: Optional[int] = None
    driver: str = DEFAULT_DRIVER

    @property
    def url(self) -> URL:
        backend = self.driver.split("+", 1)[0]
        query = {"charset": "utf8mb4"} if backend == "mysql" else {}
        return URL.create(
            self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port or _DEFAULT_PORTS.get(backend),
            database=self.database,
            query=query,
        )

    @classmethod
    def from_env(cls) -> "ConnectionSettings":
        """Read ``REGISTRY_DB_*`` variables; host, name, user and password are required."""
        db_host = os.getenv("REGISTRY_DB_HOST")
        db_name = os.getenv("REGISTRY_DB_NAME")
        db_user = os.getenv("REGISTRY_DB_USER")
        db_password = os.getenv("REGISTRY_DB_PASSWORD")

        if not all([db_host, db_name, db_user, db_password]):
            missing = []
            if not db_host: missing.append("REGISTRY_DB_HOST")
            if not db_name: missing.append("REGISTRY_DB_NAME")
            if not db_user: missing.append("REGISTRY_DB_USER")
            if not db_password: missing.append("REGISTRY_DB_PASSWORD")
            raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

        port = os.getenv("REGISTRY_DB_PORT")
        return cls(
            host=db_host,
            database=db_name,
            user=db_user,
            password=db_password,
            port=int(port) if port else None,
            driver=os.getenv("REGISTRY_DB_DRIVER", DEFAULT_DRIVER),
        )


def get_database_url() -> Union[str, URL]:
    # An explicit DATABASE_URL wins over the individual components
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")
    return ConnectionSettings.from_env().url


class ConnectionProvider:
    """Supplies one fresh connection (wrapped in a Session) per operation."""

    def __init__(self, url: Union[str, URL], *, echo: bool = False):
        self.engine = create_engine(url, poolclass=NullPool, echo=echo)
        if self.engine.dialect.name == "sqlite":
            sqlite_shims.install(self.engine)
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )
        logger.debug(
            "connection_provider: dialect=%s url=%s",
            self.engine.dialect.name,
            make_url(url).render_as_string(hide_password=True),
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a Session; it is closed (and its connection released) on exit."""
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def create_schema(self) -> None:
        from staff_registry.db import models  # local import keeps module load light
        models.Base.metadata.create_all(bind=self.engine)

    def drop_schema(self) -> None:
        from staff_registry.db import models
        models.Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


@lru_cache(maxsize=1)
def get_provider() -> ConnectionProvider:
    """Process-wide provider built from the environment on first use."""
    return ConnectionProvider(get_database_url())


def get_db() -> Iterator[Session]:
    """Dependency to get a database session."""
    with get_provider().session() as db:
        yield db
