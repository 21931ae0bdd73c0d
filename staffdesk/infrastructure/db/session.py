# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from staffdesk.shared.config import DatabaseConfig
from staffdesk.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory(url: str) -> bool:
    return _is_sqlite(url) and (":memory:" in url or url.rstrip("/").endswith("sqlite:"))


def build_engine(config: DatabaseConfig) -> Engine:
    url = config.url
    kwargs: dict[str, object] = {"echo": False, "pool_pre_ping": True}

    if _is_memory(url):
        # A single shared connection, otherwise every checkout sees an empty database.
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool
    else:
        if _is_sqlite(url):
            kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            }
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )

    engine = create_engine(url, **kwargs)

    if _is_sqlite(url):
        event.listen(engine, "connect", _set_sqlite_pragmas)

    logger.info(f"db.engine: created (dialect={engine.dialect.name})")
    return engine


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # Import for side effect: registers the tables on Base.metadata.
    from staffdesk.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
