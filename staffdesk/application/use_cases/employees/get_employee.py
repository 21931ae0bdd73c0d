# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.domain.employees.entities import Employee
from staffdesk.domain.employees.exceptions import EmployeeNotFoundError
from staffdesk.domain.employees.repositories import EmployeeRepository


class GetEmployeeUseCase:
    def __init__(self, *, employees: EmployeeRepository) -> None:
        self._employees = employees

    def execute(self, employee_id: str) -> Employee:
        employee = self._employees.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee
