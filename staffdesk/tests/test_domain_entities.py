from __future__ import annotations

from datetime import UTC, datetime

from staffdesk.domain.employees.entities import Employee, mutable_changes


def _employee() -> Employee:
    return Employee(
        id="e1",
        name="Ann",
        email="ann@corp.test",
        position="Dev",
        salary=1000.0,
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


def test_with_changes_applies_only_mutable_fields() -> None:
    original = _employee()

    updated = original.with_changes(
        {"name": "Bea", "salary": 1500, "id": "e2", "created_at": None, "extra": 1}
    )

    assert updated.name == "Bea"
    assert updated.salary == 1500.0
    assert isinstance(updated.salary, float)
    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.email == original.email


def test_with_changes_leaves_original_untouched() -> None:
    original = _employee()

    original.with_changes({"position": "Lead"})

    assert original.position == "Dev"


def test_mutable_changes_drops_identity_keys() -> None:
    assert mutable_changes({"_id": "x", "createdAt": "y", "email": "e@corp.test"}) == {
        "email": "e@corp.test"
    }
