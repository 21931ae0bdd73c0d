from __future__ import annotations

from datetime import UTC, datetime

from flask import Flask, g, jsonify

from staffdesk.domain.users.entities import Role, SessionInfo
from staffdesk.interfaces.http.guards import (
    SESSION_COOKIE_CONFIG_KEY,
    admin_required,
    session_required,
)
from staffdesk.shared.errors import ForbiddenError
from staffdesk.shared.middleware.error_handler import configure_error_handling

STAFF = SessionInfo(
    user_id=7,
    username="staff",
    role=Role.USER,
    expires_at=datetime(2025, 1, 1, tzinfo=UTC),
)


class RecordingGate:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def admit(self, token, role=None) -> SessionInfo:
        self.calls.append((token, role))
        if role is Role.ADMIN:
            raise ForbiddenError()
        return STAFF


class Views:
    def __init__(self, gate: RecordingGate) -> None:
        self._access_gate = gate

    @session_required
    def profile(self):
        info = g.session_info
        return jsonify({"user": info.username, "user_id": g.user_id})

    @admin_required
    def admin_only(self):
        return jsonify({"ok": True})


def _app(gate: RecordingGate, cookie_name: str = "sid") -> Flask:
    app = Flask(__name__)
    app.config[SESSION_COOKIE_CONFIG_KEY] = cookie_name
    configure_error_handling(app)
    views = Views(gate)
    app.add_url_rule("/profile", view_func=views.profile)
    app.add_url_rule("/admin", view_func=views.admin_only)
    return app


def test_session_required_exposes_session_on_g() -> None:
    gate = RecordingGate()

    with _app(gate).test_client() as client:
        client.set_cookie("sid", "tok")
        response = client.get("/profile")

    assert response.get_json() == {"user": "staff", "user_id": 7}
    assert gate.calls == [("tok", None)]


def test_admin_required_asks_for_admin_role() -> None:
    gate = RecordingGate()

    with _app(gate).test_client() as client:
        response = client.get("/admin")

    assert response.status_code == 403
    assert gate.calls == [(None, Role.ADMIN)]


def test_configured_cookie_name_is_used() -> None:
    gate = RecordingGate()

    with _app(gate, cookie_name="staffdesk_session").test_client() as client:
        client.set_cookie("sid", "ignored")
        client.set_cookie("staffdesk_session", "tok")
        client.get("/profile")

    assert gate.calls == [("tok", None)]
