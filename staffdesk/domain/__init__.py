# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .employees.entities import MUTABLE_FIELDS, Employee, EmployeeDraft
from .employees.exceptions import EmployeeNotFoundError
from .users.entities import Role, SessionInfo, SessionToken, User
from .users.exceptions import InvalidCredentialsError, UserAlreadyExistsError

__all__ = [
    "MUTABLE_FIELDS",
    "Employee",
    "EmployeeDraft",
    "EmployeeNotFoundError",
    "InvalidCredentialsError",
    "Role",
    "SessionInfo",
    "SessionToken",
    "User",
    "UserAlreadyExistsError",
]
