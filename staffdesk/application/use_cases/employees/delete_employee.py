# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from staffdesk.domain.employees.repositories import EmployeeRepository
from staffdesk.shared.logging import logger


class DeleteEmployeeUseCase:
    def __init__(self, *, employees: EmployeeRepository) -> None:
        self._employees = employees

    def execute(self, employee_id: str) -> None:
        # Deleting an unknown id is not an error.
        removed = self._employees.delete(employee_id)
        if not removed:
            logger.info(f"employees.delete: no row for id={employee_id}")
