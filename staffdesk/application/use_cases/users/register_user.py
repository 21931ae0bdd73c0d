# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.domain.users.entities import Role, User
from staffdesk.domain.users.exceptions import UserAlreadyExistsError
from staffdesk.domain.users.repositories import PasswordHasher, UserRepository
from staffdesk.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str, role: Role = Role.USER) -> User:
        # Fast path only; the unique index in the store settles concurrent registrations.
        if self._users.find_by_username(username):
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(password)
        user = self._users.add(username, hashed, role)
        logger.info(f"users.register: ok user_id={user.id} role={user.role}")
        return user
