from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from staffdesk.application.services.access_gate import AccessGate
from staffdesk.application.use_cases.employees import (
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    UpdateEmployeeUseCase,
)
from staffdesk.domain.users.entities import Role, SessionInfo
from staffdesk.interfaces.http.controllers.employees_controller import EmployeesController
from staffdesk.shared.errors import ForbiddenError, UnauthorizedError
from staffdesk.shared.middleware.error_handler import configure_error_handling

NOW = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)
ADMIN = SessionInfo(user_id=1, username="admin", role=Role.ADMIN, expires_at=NOW)
PAYLOAD = {"name": "Ann", "email": "ann@corp.test", "position": "Dev", "salary": 1000}


class StubGate:
    def __init__(self, outcome: SessionInfo | Exception = ADMIN) -> None:
        self.outcome = outcome
        self.calls: list[tuple] = []

    def admit(self, token, role=None) -> SessionInfo:
        self.calls.append((token, role))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def _app(gate: StubGate, employees) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    controller = EmployeesController(
        access_gate=cast(AccessGate, gate),
        create_use_case=CreateEmployeeUseCase(employees=employees),
        list_use_case=ListEmployeesUseCase(employees=employees),
        get_use_case=GetEmployeeUseCase(employees=employees),
        update_use_case=UpdateEmployeeUseCase(employees=employees),
        delete_use_case=DeleteEmployeeUseCase(employees=employees),
    )
    app.register_blueprint(controller.as_blueprint())
    return app


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("post", "/api/employees"),
        ("get", "/api/employees"),
        ("get", "/api/employees/abc"),
        ("put", "/api/employees/abc"),
        ("delete", "/api/employees/abc"),
    ],
)
def test_every_route_requires_a_session(employees, method: str, path: str) -> None:
    app = _app(StubGate(UnauthorizedError()), employees)

    with app.test_client() as client:
        response = getattr(client, method)(path, json={"anything": True})

    assert response.status_code == 401
    assert response.get_json()["error"] == "Unauthorized"


def test_non_admin_is_forbidden(employees) -> None:
    app = _app(StubGate(ForbiddenError()), employees)

    with app.test_client() as client:
        response = client.post("/api/employees", json=PAYLOAD)

    assert response.status_code == 403
    assert response.get_json()["error"] == "Admin only"
    assert employees.list_all() == []


def test_gate_receives_cookie_and_admin_role(employees) -> None:
    gate = StubGate()
    app = _app(gate, employees)

    with app.test_client() as client:
        client.set_cookie("sid", "tok")
        client.get("/api/employees")

    assert gate.calls == [("tok", Role.ADMIN)]


def test_create_returns_employee_json(employees, clock) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        response = client.post("/api/employees", json={**PAYLOAD, "_id": "ignored"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["name"] == "Ann"
    assert body["salary"] == 1000.0
    assert body["id"] == body["_id"] != "ignored"
    assert datetime.fromisoformat(body["createdAt"]) == clock()


def test_create_missing_fields(employees) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        response = client.post("/api/employees", json={"name": "Ann"})

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "Missing fields"
    assert {"email", "position", "salary"} <= set(body["context"]["fields"])


def test_create_storage_failure_is_server_error() -> None:
    broken = MagicMock()
    broken.add.side_effect = RuntimeError("disk full")
    app = _app(StubGate(), broken)

    with app.test_client() as client:
        response = client.post("/api/employees", json=PAYLOAD)

    assert response.status_code == 500
    assert response.get_json()["error"] == "Failed to add"


def test_list_failure_is_server_error() -> None:
    broken = MagicMock()
    broken.list_all.side_effect = RuntimeError("gone")
    app = _app(StubGate(), broken)

    with app.test_client() as client:
        response = client.get("/api/employees")

    assert response.status_code == 500
    assert response.get_json()["error"] == "Failed to fetch"


def test_get_unknown_is_not_found(employees) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        response = client.get("/api/employees/missing")

    assert response.status_code == 404
    assert response.get_json()["error"] == "Not found"


def test_update_is_partial(employees) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        created = client.post("/api/employees", json=PAYLOAD).get_json()
        response = client.put(
            f"/api/employees/{created['id']}",
            json={"position": "Lead", "_id": created["id"], "createdAt": created["createdAt"]},
        )

    assert response.status_code == 200
    body = response.get_json()
    assert body["position"] == "Lead"
    assert body["name"] == "Ann"
    assert body["createdAt"] == created["createdAt"]


def test_update_rejects_wrong_types(employees) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        created = client.post("/api/employees", json=PAYLOAD).get_json()
        response = client.put(f"/api/employees/{created['id']}", json={"salary": "lots"})

    assert response.status_code == 400


def test_update_unknown_is_not_found(employees) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        response = client.put("/api/employees/missing", json={"name": "X"})

    assert response.status_code == 404


def test_delete_always_succeeds(employees) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        created = client.post("/api/employees", json=PAYLOAD).get_json()
        first = client.delete(f"/api/employees/{created['id']}")
        second = client.delete(f"/api/employees/{created['id']}")

    assert first.status_code == second.status_code == 200
    assert second.get_json() == {"message": "Deleted"}
    assert employees.list_all() == []


@pytest.mark.parametrize("salary", ["nan", "NaN", "inf", "-Infinity"])
def test_create_rejects_non_finite_salary(employees, salary) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        response = client.post("/api/employees", json={**PAYLOAD, "salary": salary})

    assert response.status_code == 400
    assert "salary" in response.get_json()["context"]["fields"]
    assert employees.list_all() == []


def test_create_rejects_overflowing_salary_literal(employees) -> None:
    app = _app(StubGate(), employees)
    body = '{"name": "Ann", "email": "ann@corp.test", "position": "Dev", "salary": 1e999}'

    with app.test_client() as client:
        response = client.post("/api/employees", data=body, content_type="application/json")
        listed = client.get("/api/employees")

    assert response.status_code == 400
    assert listed.get_json() == []


def test_update_rejects_non_finite_salary(employees) -> None:
    app = _app(StubGate(), employees)

    with app.test_client() as client:
        created = client.post("/api/employees", json=PAYLOAD).get_json()
        response = client.put(
            f"/api/employees/{created['id']}",
            data='{"salary": 1e999}',
            content_type="application/json",
        )
        fetched = client.get(f"/api/employees/{created['id']}")

    assert response.status_code == 400
    assert fetched.get_json()["salary"] == 1000.0
