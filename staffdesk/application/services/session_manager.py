# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Login sessions: issue on valid credentials, validate per request, destroy on logout."""

from __future__ import annotations

import secrets
from datetime import timedelta

from staffdesk.domain.users.entities import SessionInfo, SessionToken
from staffdesk.domain.users.exceptions import InvalidCredentialsError
from staffdesk.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    UserRepository,
)
from staffdesk.shared.logging import logger, token_fingerprint
from staffdesk.shared.utils import Clock, utcnow

DEFAULT_SESSION_TTL = timedelta(hours=1)


class SessionManager:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utcnow,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._ttl = ttl
        self._clock = clock
        self._dummy_hash: str | None = None

    def login(self, username: str, password: str) -> SessionToken:
        """Create a session for valid credentials.

        Unknown usernames and wrong passwords raise the same
        :class:`InvalidCredentialsError`, and both pay for one hash check.
        """

        user = self._users.find_by_username(username)
        if user is None:
            self._password_hasher.verify(password, self._placeholder_hash())
            logger.info("session.login: rejected")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info("session.login: rejected")
            raise InvalidCredentialsError()

        now = self._clock()
        self._sessions.purge_expired(now)
        session = self._sessions.create(user, expires_at=now + self._ttl)
        logger.info(
            f"session.login: ok user_id={user.id} role={user.role} "
            f"token={token_fingerprint(session.token)} exp={session.expires_at.isoformat()}"
        )
        return session

    def validate(self, token: str | None) -> SessionInfo | None:
        """Resolve ``token`` to the caller, or ``None`` when unknown or expired.

        Expiry is fixed at login; validating never extends it. Username and
        role come from the current user row, not the copy stored at login.
        """

        if not token:
            return None

        session = self._sessions.get(token)
        if session is None:
            logger.debug(f"session.validate: unknown token={token_fingerprint(token)}")
            return None

        if session.is_expired(self._clock()):
            logger.debug(f"session.validate: expired token={token_fingerprint(token)}")
            self._sessions.revoke(token)
            return None

        user = self._users.find_by_id(session.user_id)
        if user is None:
            logger.warning(f"session.validate: user gone user_id={session.user_id}")
            self._sessions.revoke(token)
            return None

        return SessionInfo(
            user_id=user.id,
            username=user.username,
            role=user.role,
            expires_at=session.expires_at,
        )

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        self._sessions.revoke(token)
        logger.info(f"session.destroy: token={token_fingerprint(token)}")

    def _placeholder_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash


__all__ = ["DEFAULT_SESSION_TTL", "SessionManager"]
