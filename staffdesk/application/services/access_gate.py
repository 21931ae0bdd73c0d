# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.application.services.session_manager import SessionManager
from staffdesk.domain.users.entities import Role, SessionInfo
from staffdesk.shared.errors import ForbiddenError, UnauthorizedError
from staffdesk.shared.logging import logger


class AccessGate:
    """Authentication then authorization, checked in that order."""

    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def authenticate(self, token: str | None) -> SessionInfo:
        info = self._sessions.validate(token)
        if info is None:
            raise UnauthorizedError()
        return info

    def authorize(self, info: SessionInfo, role: Role = Role.ADMIN) -> SessionInfo:
        if info.role is not role:
            logger.warning(f"access.denied: user_id={info.user_id} role={info.role} need={role}")
            raise ForbiddenError()
        return info

    def admit(self, token: str | None, role: Role | None = None) -> SessionInfo:
        info = self.authenticate(token)
        if role is not None:
            self.authorize(info, role)
        return info


__all__ = ["AccessGate"]
