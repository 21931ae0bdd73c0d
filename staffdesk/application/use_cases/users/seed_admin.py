# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.domain.users.entities import Role, User
from staffdesk.domain.users.exceptions import UserAlreadyExistsError
from staffdesk.domain.users.repositories import PasswordHasher, UserRepository


class SeedAdminUseCase:
    """Create the bootstrap administrator unless that username is taken."""

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> tuple[User, bool]:
        existing = self._users.find_by_username(username)
        if existing:
            return existing, False
        try:
            user = self._users.add(username, self._password_hasher.hash(password), Role.ADMIN)
        except UserAlreadyExistsError:
            # Another process seeded it first.
            user = self._users.find_by_username(username)
            if user is None:
                raise
            return user, False
        return user, True
