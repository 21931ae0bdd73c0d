# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_LATENCY = Histogram(
    "staffdesk_request_latency_seconds",
    "Request latency",
    labelnames=("method", "endpoint"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "staffdesk_requests_total",
    "Number of processed requests",
    labelnames=("method", "endpoint", "status"),
)
LOGIN_COUNTER = Counter(
    "staffdesk_logins_total",
    "Login attempts by outcome",
    labelnames=("outcome",),
)


def observe_request(method: str, endpoint: str, status: int, duration: float) -> None:
    REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(duration)
    REQUEST_COUNTER.labels(method=method, endpoint=endpoint, status=str(status)).inc()


def record_login(success: bool) -> None:
    LOGIN_COUNTER.labels(outcome="success" if success else "failure").inc()


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "LOGIN_COUNTER",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "observe_request",
    "record_login",
    "render_metrics",
]
