# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.domain.employees.entities import Employee, EmployeeDraft
from staffdesk.domain.employees.repositories import EmployeeRepository


class CreateEmployeeUseCase:
    def __init__(self, *, employees: EmployeeRepository) -> None:
        self._employees = employees

    def execute(self, draft: EmployeeDraft) -> Employee:
        return self._employees.add(draft)
