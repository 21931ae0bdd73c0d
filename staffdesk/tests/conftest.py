from __future__ import annotations

import itertools
from collections.abc import Iterator, Mapping
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from staffdesk.app import create_app
from staffdesk.domain.employees.entities import Employee, EmployeeDraft
from staffdesk.domain.users.entities import Role, SessionToken, User
from staffdesk.domain.users.exceptions import UserAlreadyExistsError
from staffdesk.shared.config import (
    AdminConfig,
    AppConfig,
    DatabaseConfig,
    SecurityConfig,
)

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
FAST_HASH = "pbkdf2:sha256:1000"


class FakeClock:
    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class DeterministicHasher:
    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str, method: str | None = None) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


class InMemoryUserRepository:
    def __init__(self, clock: FakeClock | None = None) -> None:
        self._users: dict[int, User] = {}
        self._seq = itertools.count(1)
        self._clock = clock or FakeClock()

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, username: str, password_hash: str, role: Role) -> User:
        if self.find_by_username(username):
            raise UserAlreadyExistsError()
        user = User(
            id=next(self._seq),
            username=username,
            password_hash=password_hash,
            role=role,
            created_at=self._clock(),
        )
        self._users[user.id] = user
        return user

    def set_role(self, user_id: int, role: Role) -> None:
        self._users[user_id] = replace(self._users[user_id], role=role)

    def remove(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class InMemorySessionRepository:
    def __init__(self, clock: FakeClock | None = None) -> None:
        self.rows: dict[str, SessionToken] = {}
        self._seq = itertools.count(1)
        self._clock = clock or FakeClock()

    def create(self, user: User, expires_at: datetime) -> SessionToken:
        session = SessionToken(
            token=f"token-{next(self._seq)}",
            user_id=user.id,
            username=user.username,
            role=user.role,
            created_at=self._clock(),
            expires_at=expires_at,
        )
        self.rows[session.token] = session
        return session

    def get(self, token: str) -> SessionToken | None:
        return self.rows.get(token)

    def revoke(self, token: str) -> None:
        self.rows.pop(token, None)

    def purge_expired(self, now: datetime) -> int:
        expired = [t for t, s in self.rows.items() if s.is_expired(now)]
        for token in expired:
            del self.rows[token]
        return len(expired)


class InMemoryEmployeeRepository:
    def __init__(self, clock: FakeClock | None = None) -> None:
        self._rows: dict[str, tuple[int, Employee]] = {}
        self._seq = itertools.count(1)
        self._clock = clock or FakeClock()

    def add(self, draft: EmployeeDraft) -> Employee:
        seq = next(self._seq)
        employee = Employee(
            id=f"emp{seq}",
            name=draft.name,
            email=draft.email,
            position=draft.position,
            salary=float(draft.salary),
            created_at=self._clock(),
        )
        self._rows[employee.id] = (seq, employee)
        return employee

    def list_all(self) -> list[Employee]:
        ordered = sorted(self._rows.values(), key=lambda r: (r[1].created_at, r[0]), reverse=True)
        return [employee for _, employee in ordered]

    def get(self, employee_id: str) -> Employee | None:
        row = self._rows.get(employee_id)
        return row[1] if row else None

    def update(self, employee_id: str, changes: Mapping[str, Any]) -> Employee | None:
        row = self._rows.get(employee_id)
        if row is None:
            return None
        updated = row[1].with_changes(changes)
        self._rows[employee_id] = (row[0], updated)
        return updated

    def delete(self, employee_id: str) -> bool:
        return self._rows.pop(employee_id, None) is not None


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def users(clock: FakeClock) -> InMemoryUserRepository:
    return InMemoryUserRepository(clock)


@pytest.fixture()
def sessions(clock: FakeClock) -> InMemorySessionRepository:
    return InMemorySessionRepository(clock)


@pytest.fixture()
def employees(clock: FakeClock) -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository(clock)


def make_config(tmp_path: Path, *, admin_password: str | None = "admin123") -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'staffdesk-test.db'}"),
        admin=AdminConfig(username="admin", password=admin_password),
        security=SecurityConfig(
            enable_rate_limit=False,
            password_hash_method=FAST_HASH,
        ),
    )


@pytest.fixture()
def config_factory(tmp_path: Path):
    def _factory(**kwargs: Any) -> AppConfig:
        return make_config(tmp_path, **kwargs)

    return _factory


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return make_config(tmp_path)


@pytest.fixture()
def app(app_config: AppConfig) -> Iterator[Flask]:
    flask_app = create_app(app_config)
    yield flask_app
    flask_app.extensions["staffdesk.container"].engine.dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def login_as(client: FlaskClient):
    def _login(username: str = "admin", password: str = "admin123"):
        return client.post("/api/login", json={"username": username, "password": password})

    return _login
