# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.domain.employees.entities import Employee
from staffdesk.domain.employees.repositories import EmployeeRepository


class ListEmployeesUseCase:
    def __init__(self, *, employees: EmployeeRepository) -> None:
        self._employees = employees

    def execute(self) -> list[Employee]:
        """Newest first."""

        return list(self._employees.list_all())
