# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Role(StrEnum):
    USER = "user"
    ADMIN = "admin"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    role: Role
    created_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:
    """Persisted login session; ``username`` and ``role`` are copies taken at login."""

    token: str
    user_id: int
    username: str
    role: Role
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(slots=True, frozen=True)
class SessionInfo:
    """What a request learns about its caller after the session is validated."""

    user_id: int
    username: str
    role: Role
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
