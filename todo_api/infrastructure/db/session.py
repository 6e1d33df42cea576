# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database layer helpers and session utilities."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from todo_api.shared.config import DatabaseConfig
from todo_api.shared.errors import AppError, InfrastructureError
from todo_api.shared.logging import logger


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_in_memory(url: str) -> bool:
    return _is_sqlite(url) and make_url(url).database in (None, "", ":memory:")


def create_db_engine(config: DatabaseConfig) -> Engine:
    if _is_in_memory(config.url):
        # One shared connection, otherwise every checkout sees an empty database.
        return create_engine(
            config.url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    connect_args: dict[str, object] = {}
    if _is_sqlite(config.url):
        connect_args = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }

    return create_engine(
        config.url,
        echo=False,
        pool_pre_ping=True,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        connect_args=connect_args,
    )


class Database:
    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self.engine = create_db_engine(config)
        self.session_factory = scoped_session(
            sessionmaker(
                bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
            )
        )
        if _is_sqlite(config.url):
            event.listen(self.engine, "connect", _set_sqlite_pragmas)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope for imperative consumers."""

        session = self.session_factory()
        logger.debug("db.session: opened scoped session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed scoped session")
        except AppError as exc:
            logger.info(f"db.session: rolling back ({exc.code})")
            session.rollback()
            raise
        except Exception:
            logger.exception("db.session: error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()
            self.session_factory.remove()
            logger.debug("db.session: closed scoped session")

    def ping(self) -> None:
        """Fail fast with ``database_unreachable`` when no connection can be made."""

        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error(f"db: unreachable ({type(exc).__name__})")
            raise InfrastructureError(
                "database_unreachable",
                message="Database is unreachable",
                context={"detail": str(exc)},
            ) from exc
        logger.info(f"db: connected to {self.engine.url.render_as_string(hide_password=True)}")

    def init_schema(self) -> None:
        from todo_api.infrastructure.db import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def dispose(self) -> None:
        self.session_factory.remove()
        self.engine.dispose()


def _set_sqlite_pragmas(dbapi_conn, _):
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    except Exception:
        logger.exception("Failed to apply SQLite PRAGMAs")
    finally:
        cur.close()
