from __future__ import annotations

from datetime import timedelta

import pytest

from staffdesk.application.services.session_manager import SessionManager
from staffdesk.domain.users.entities import Role
from staffdesk.domain.users.exceptions import InvalidCredentialsError


@pytest.fixture()
def manager(users, sessions, hasher, clock) -> SessionManager:
    users.add("alice", "hashed:secret", Role.USER)
    return SessionManager(
        users=users,
        sessions=sessions,
        password_hasher=hasher,
        ttl=timedelta(hours=1),
        clock=clock,
    )


def test_login_issues_session_expiring_after_ttl(manager: SessionManager, clock) -> None:
    session = manager.login("alice", "secret")

    assert session.token
    assert session.username == "alice"
    assert session.role is Role.USER
    assert session.expires_at == clock() + timedelta(hours=1)


def test_each_login_gets_a_distinct_token(manager: SessionManager) -> None:
    first = manager.login("alice", "secret")
    second = manager.login("alice", "secret")

    assert first.token != second.token
    assert manager.validate(first.token) is not None
    assert manager.validate(second.token) is not None


def test_wrong_password_and_unknown_user_fail_identically(manager: SessionManager, hasher) -> None:
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        manager.login("alice", "nope")
    calls_after_wrong = hasher.verify_calls

    with pytest.raises(InvalidCredentialsError) as unknown_user:
        manager.login("mallory", "secret")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert wrong_password.value.status == unknown_user.value.status == 400
    # The unknown user still pays for a hash check.
    assert hasher.verify_calls == calls_after_wrong + 1


def test_validate_returns_session_info(manager: SessionManager) -> None:
    session = manager.login("alice", "secret")

    info = manager.validate(session.token)

    assert info is not None
    assert info.username == "alice"
    assert info.role is Role.USER
    assert not info.is_admin


@pytest.mark.parametrize("token", [None, "", "does-not-exist"])
def test_validate_rejects_missing_or_unknown_tokens(manager: SessionManager, token) -> None:
    assert manager.validate(token) is None


def test_session_is_valid_until_expiry_and_never_extended(
    manager: SessionManager, sessions, clock
) -> None:
    session = manager.login("alice", "secret")

    clock.advance(3599)
    info = manager.validate(session.token)
    assert info is not None
    assert info.expires_at == session.expires_at

    clock.advance(1)
    assert manager.validate(session.token) is None
    assert session.token not in sessions.rows


def test_destroy_invalidates_immediately_and_is_idempotent(manager: SessionManager) -> None:
    session = manager.login("alice", "secret")

    manager.destroy(session.token)
    manager.destroy(session.token)
    manager.destroy(None)

    assert manager.validate(session.token) is None


def test_login_purges_expired_sessions(manager: SessionManager, sessions, clock) -> None:
    stale = manager.login("alice", "secret")
    clock.advance(7200)

    fresh = manager.login("alice", "secret")

    assert stale.token not in sessions.rows
    assert fresh.token in sessions.rows


def test_validate_reads_current_role(manager: SessionManager, users) -> None:
    session = manager.login("alice", "secret")
    users.set_role(session.user_id, Role.ADMIN)

    info = manager.validate(session.token)

    assert info is not None
    assert info.role is Role.ADMIN


def test_validate_drops_session_of_removed_user(manager: SessionManager, users, sessions) -> None:
    session = manager.login("alice", "secret")
    users.remove(session.user_id)

    assert manager.validate(session.token) is None
    assert session.token not in sessions.rows
