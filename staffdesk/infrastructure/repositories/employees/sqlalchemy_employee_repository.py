# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from typing import Any

from staffdesk.domain.employees.entities import Employee as DomainEmployee
from staffdesk.domain.employees.entities import MUTABLE_FIELDS, EmployeeDraft
from staffdesk.domain.employees.repositories import EmployeeRepository
from staffdesk.infrastructure.db.models import Employee
from staffdesk.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope
from staffdesk.shared.utils import Clock, ensure_utc, utcnow


def _to_domain(row: Employee) -> DomainEmployee:
    return DomainEmployee(
        id=row.id,
        name=row.name,
        email=row.email,
        position=row.position,
        salary=float(row.salary),
        created_at=ensure_utc(row.created_at),
    )


class SqlAlchemyEmployeeRepository(EmployeeRepository):
    def __init__(self, session_factory: SessionFactory, *, clock: Clock = utcnow) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def add(self, draft: EmployeeDraft) -> DomainEmployee:
        with unit_of_work_scope(self._session_factory) as session:
            row = Employee(
                id=uuid.uuid4().hex,
                name=draft.name,
                email=draft.email,
                position=draft.position,
                salary=float(draft.salary),
                created_at=self._clock(),
            )
            session.add(row)
            session.flush()
            return _to_domain(row)

    def list_all(self) -> Sequence[DomainEmployee]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = (
                session.query(Employee)
                .order_by(Employee.created_at.desc(), Employee.seq.desc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def get(self, employee_id: str) -> DomainEmployee | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(Employee).filter(Employee.id == employee_id).first()
            return _to_domain(row) if row else None

    def update(self, employee_id: str, changes: Mapping[str, Any]) -> DomainEmployee | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(Employee).filter(Employee.id == employee_id).first()
            if not row:
                return None
            updated = _to_domain(row).with_changes(changes)
            for field in MUTABLE_FIELDS:
                setattr(row, field, getattr(updated, field))
            session.flush()
            return _to_domain(row)

    def delete(self, employee_id: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            removed = session.query(Employee).filter(Employee.id == employee_id).delete()
        return bool(removed)
