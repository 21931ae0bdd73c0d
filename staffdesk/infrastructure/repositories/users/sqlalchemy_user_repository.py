# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from staffdesk.domain.users.entities import Role
from staffdesk.domain.users.entities import SessionToken as DomainSessionToken
from staffdesk.domain.users.entities import User as DomainUser
from staffdesk.domain.users.exceptions import UserAlreadyExistsError
from staffdesk.domain.users.repositories import SessionRepository, UserRepository
from staffdesk.infrastructure.db.models import SessionToken, User
from staffdesk.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope
from staffdesk.shared.logging import logger, token_fingerprint
from staffdesk.shared.utils import Clock, ensure_utc, utcnow


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        role=Role(row.role),
        created_at=ensure_utc(row.created_at),
    )


def _to_domain_session(row: SessionToken) -> DomainSessionToken:
    return DomainSessionToken(
        token=row.token,
        user_id=row.user_id,
        username=row.username,
        role=Role(row.role),
        created_at=ensure_utc(row.created_at),
        expires_at=ensure_utc(row.expires_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory, *, clock: Clock = utcnow) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.username == username).first()
            return _to_domain_user(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain_user(row) if row else None

    def add(self, username: str, password_hash: str, role: Role) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=username,
                    password_hash=password_hash,
                    role=role.value,
                    created_at=self._clock(),
                )
                session.add(row)
                session.flush()
                return _to_domain_user(row)
        except IntegrityError as exc:
            # Unique index on username lost a race with a concurrent registration.
            logger.info(f"users.add: duplicate username={username}")
            raise UserAlreadyExistsError() from exc


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: SessionFactory, *, clock: Clock = utcnow) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def create(self, user: DomainUser, expires_at: datetime) -> DomainSessionToken:
        with unit_of_work_scope(self._session_factory) as session:
            row = SessionToken(
                token=secrets.token_urlsafe(48),
                user_id=user.id,
                username=user.username,
                role=user.role.value,
                created_at=self._clock(),
                expires_at=expires_at,
            )
            session.add(row)
            session.flush()
            return _to_domain_session(row)

    def get(self, token: str) -> DomainSessionToken | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(SessionToken).filter(SessionToken.token == token).first()
            return _to_domain_session(row) if row else None

    def revoke(self, token: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            removed = session.query(SessionToken).filter(SessionToken.token == token).delete()
        logger.debug(f"sessions.revoke: token={token_fingerprint(token)} removed={removed}")

    def purge_expired(self, now: datetime) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            removed = (
                session.query(SessionToken)
                .filter(SessionToken.expires_at <= now)
                .delete(synchronize_session=False)
            )
        if removed:
            logger.info(f"sessions.purge: removed={removed}")
        return removed
