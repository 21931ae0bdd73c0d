# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transactional scope shared by the SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from staffdesk.shared.logging import logger

SessionFactory = Callable[[], Session]


@contextmanager
def unit_of_work_scope(factory: SessionFactory) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""

    session = factory()
    logger.debug("uow: session opened")
    try:
        yield session
        session.commit()
        logger.debug("uow: committed")
    except Exception as exc:
        logger.warning(f"uow: rollback due to {type(exc).__name__}")
        session.rollback()
        raise
    finally:
        session.close()
        logger.debug("uow: session closed")


__all__ = ["SessionFactory", "unit_of_work_scope"]
