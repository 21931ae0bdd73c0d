# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.shared.errors.base import NotFoundError


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: str) -> None:
        super().__init__("Not found", code="employee_not_found")
        self.employee_id = employee_id
