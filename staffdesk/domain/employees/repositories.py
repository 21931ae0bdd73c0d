# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .entities import Employee, EmployeeDraft


class EmployeeRepository(Protocol):
    def add(self, draft: EmployeeDraft) -> Employee: ...
    def list_all(self) -> Sequence[Employee]: ...
    def get(self, employee_id: str) -> Employee | None: ...
    def update(self, employee_id: str, changes: Mapping[str, Any]) -> Employee | None: ...
    def delete(self, employee_id: str) -> bool: ...
