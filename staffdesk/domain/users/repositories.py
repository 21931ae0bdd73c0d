# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Role, SessionToken, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, username: str, password_hash: str, role: Role) -> User: ...


class SessionRepository(Protocol):
    def create(self, user: User, expires_at: datetime) -> SessionToken: ...
    def get(self, token: str) -> SessionToken | None: ...
    def revoke(self, token: str) -> None: ...
    def purge_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str, method: str | None = None) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
