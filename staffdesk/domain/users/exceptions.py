# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from staffdesk.shared.errors.base import ConflictError, DomainError


class UserAlreadyExistsError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Username exists", code="user_already_exists")


class InvalidCredentialsError(DomainError):
    # Same message for unknown users and wrong passwords.
    def __init__(self) -> None:
        super().__init__(
            "Invalid credentials",
            code="invalid_credentials",
            status=HTTPStatus.BAD_REQUEST,
        )
