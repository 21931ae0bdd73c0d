# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from threading import Lock

from flask import Request, current_app, request

from staffdesk.shared.errors import RateLimitedError
from staffdesk.shared.logging import logger

RATE_LIMIT_ENABLED = "STAFFDESK_RATE_LIMIT_ENABLED"
RATE_LIMIT_REQUESTS = "STAFFDESK_RATE_LIMIT_REQUESTS"
RATE_LIMIT_WINDOW = "STAFFDESK_RATE_LIMIT_WINDOW"
TRUST_PROXY_HEADERS = "STAFFDESK_TRUST_PROXY_HEADERS"


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._buckets: dict[str, Bucket] = {}
        self._last_sweep = 0.0
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._buckets)

    def allow(self, key: str, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        with self._lock:
            if now - self._last_sweep > self._window:
                self._sweep(now)
            bucket = self._buckets.setdefault(key, Bucket(deque()))
            # Drop old
            while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
                bucket.timestamps.popleft()
            if len(bucket.timestamps) >= self._limit:
                return False
            bucket.timestamps.append(now)
            return True

    def _sweep(self, now: float) -> None:
        stale = [
            key
            for key, bucket in self._buckets.items()
            if not bucket.timestamps or (now - bucket.timestamps[-1]) > self._window
        ]
        for key in stale:
            del self._buckets[key]
        self._last_sweep = now


def _client_key(req: Request, *, trust_proxy: bool) -> str:
    # X-Forwarded-For is client-controlled unless a proxy in front rewrites it.
    if trust_proxy:
        forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
        if forwarded:
            return forwarded
    return req.remote_addr or "unknown"


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Per-client sliding window limit; settings come from ``app.config`` at call time."""

    limiters: dict[tuple[int, float], InMemoryRateLimiter] = {}
    limiters_lock = Lock()

    def _limiter_for(app_limit: int, app_window: float) -> InMemoryRateLimiter:
        key = (limit or app_limit, window_seconds or app_window)
        with limiters_lock:
            if key not in limiters:
                limiters[key] = InMemoryRateLimiter(*key)
            return limiters[key]

    def decorator(f: Callable):
        @wraps(f)
        def wrapper(*args, **kwargs):
            config = current_app.config
            if not config.get(RATE_LIMIT_ENABLED, True):
                return f(*args, **kwargs)
            limiter = _limiter_for(
                int(config.get(RATE_LIMIT_REQUESTS, 10)),
                float(config.get(RATE_LIMIT_WINDOW, 60.0)),
            )
            trust_proxy = bool(config.get(TRUST_PROXY_HEADERS, False))
            key = f"{request.path}:{_client_key(request, trust_proxy=trust_proxy)}"
            if not limiter.allow(key):
                logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                raise RateLimitedError()
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = [
    "InMemoryRateLimiter",
    "RATE_LIMIT_ENABLED",
    "RATE_LIMIT_REQUESTS",
    "RATE_LIMIT_WINDOW",
    "TRUST_PROXY_HEADERS",
    "rate_limit",
]
