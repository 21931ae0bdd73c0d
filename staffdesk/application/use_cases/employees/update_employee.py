# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from staffdesk.domain.employees.entities import Employee, mutable_changes
from staffdesk.domain.employees.exceptions import EmployeeNotFoundError
from staffdesk.domain.employees.repositories import EmployeeRepository


class UpdateEmployeeUseCase:
    def __init__(self, *, employees: EmployeeRepository) -> None:
        self._employees = employees

    def execute(self, employee_id: str, changes: Mapping[str, Any]) -> Employee:
        employee = self._employees.update(employee_id, mutable_changes(changes))
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee
