from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from staffdesk.domain.employees.entities import Employee, EmployeeDraft

# Keys the browser client echoes back on save; accepted and dropped.
_IGNORED_KEYS = ("id", "_id", "createdAt")


def _strip_ignored(payload: Any) -> Any:
    if isinstance(payload, dict):
        return {key: value for key, value in payload.items() if key not in _IGNORED_KEYS}
    return payload


class EmployeeCreateDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, allow_inf_nan=False)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    position: str = Field(min_length=1)
    salary: float

    @classmethod
    def from_payload(cls, payload: Any) -> EmployeeCreateDTO:
        return cls.model_validate(_strip_ignored(payload))

    def to_draft(self) -> EmployeeDraft:
        return EmployeeDraft(
            name=self.name,
            email=self.email,
            position=self.position,
            salary=self.salary,
        )


class EmployeeUpdateDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, allow_inf_nan=False)

    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    position: str | None = Field(default=None, min_length=1)
    salary: float | None = None

    @field_validator("name", "email", "position", "salary", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @classmethod
    def from_payload(cls, payload: Any) -> EmployeeUpdateDTO:
        return cls.model_validate(_strip_ignored(payload))

    def changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent."""

        return self.model_dump(exclude_unset=True)


class EmployeeDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    legacy_id: str = Field(serialization_alias="_id")
    name: str
    email: str
    position: str
    salary: float
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_entity(cls, employee: Employee) -> EmployeeDTO:
        return cls(
            id=employee.id,
            legacy_id=employee.id,
            name=employee.name,
            email=employee.email,
            position=employee.position,
            salary=employee.salary,
            created_at=employee.created_at,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
