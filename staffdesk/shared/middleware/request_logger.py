# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from staffdesk.infrastructure.observability import observe_request
from staffdesk.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"
_REDACTED_PARAMS = ("password", "token", "sid", "secret")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _safe_args() -> dict[str, str]:
    return {
        key: "<redacted>" if any(word in key.lower() for word in _REDACTED_PARAMS) else value
        for key, value in request.args.items()
    }


def configure_request_logging(
    app: Flask, *, debug_mode: bool = False, metrics_enabled: bool = True
) -> None:
    """Per-request correlation id, start/end log lines and latency metrics.

    Cookies and headers are never logged; the session shows up only as the
    ``user`` field once a guard has resolved it.
    """

    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6))
        g.request_start_time = time.perf_counter()
        if debug_mode:
            logger.debug(
                f"http.start: {request.method} {request.path} from {_client_ip()} "
                f"(args={_safe_args()}, body_size={request.content_length or 0})"
            )

    @app.after_request
    def _after_request(response: Response) -> Response:
        duration = time.perf_counter() - g.get("request_start_time", time.perf_counter())
        user_id = g.get("user_id")
        logger.info(
            f"http.done: {request.method} {request.path} -> {response.status_code} "
            f"(user={user_id if user_id is not None else '-'}, dt_ms={duration * 1000:.0f})"
        )
        if metrics_enabled:
            endpoint = request.url_rule.rule if request.url_rule else "<unmatched>"
            observe_request(request.method, endpoint, response.status_code, duration)
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http.failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["configure_request_logging"]
