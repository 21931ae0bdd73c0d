# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Employee records managed by administrators."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

MUTABLE_FIELDS: tuple[str, ...] = ("name", "email", "position", "salary")


@dataclass(slots=True, frozen=True)
class EmployeeDraft:
    """Fields supplied by the client when an employee is created."""

    name: str
    email: str
    position: str
    salary: float


@dataclass(slots=True, frozen=True)
class Employee:
    """Canonical employee record; ``id`` and ``created_at`` never change."""

    id: str
    name: str
    email: str
    position: str
    salary: float
    created_at: datetime

    def with_changes(self, changes: Mapping[str, Any]) -> Employee:
        """Return a copy with the mutable fields in ``changes`` applied.

        Keys outside :data:`MUTABLE_FIELDS` (identity, creation time, anything
        else) are ignored.
        """

        updates = {key: value for key, value in changes.items() if key in MUTABLE_FIELDS}
        if "salary" in updates:
            updates["salary"] = float(updates["salary"])
        return replace(self, **updates)


def mutable_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    return {key: changes[key] for key in MUTABLE_FIELDS if key in changes}
