# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, g, request

from staffdesk.domain.users.entities import Role

SESSION_COOKIE_CONFIG_KEY = "STAFFDESK_SESSION_COOKIE"
DEFAULT_SESSION_COOKIE = "sid"


def session_cookie_name() -> str:
    return current_app.config.get(SESSION_COOKIE_CONFIG_KEY, DEFAULT_SESSION_COOKIE)


def read_session_token() -> str | None:
    """Session token from the cookie; never from the query string."""

    return request.cookies.get(session_cookie_name()) or None


def _guard(role: Role | None) -> Callable:
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def wrapper(self, *args: Any, **kwargs: Any):
            info = self._access_gate.admit(read_session_token(), role)
            g.session_info = info
            g.user_id = info.user_id
            return f(self, *args, **kwargs)

        return wrapper

    return decorator


session_required = _guard(None)
admin_required = _guard(Role.ADMIN)


__all__ = [
    "DEFAULT_SESSION_COOKIE",
    "SESSION_COOKIE_CONFIG_KEY",
    "admin_required",
    "read_session_token",
    "session_cookie_name",
    "session_required",
]
