# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True, eq=False)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.code
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "domain_error",
        status: HTTPStatus = HTTPStatus.BAD_REQUEST,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, status=status, message=message, context=context)


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        message: str = "Server error",
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, message=message, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "Missing fields",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            context=context,
        )


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            code="unauthorized",
            status=HTTPStatus.UNAUTHORIZED,
            message=message,
        )


class ForbiddenError(AppError):
    def __init__(self, message: str = "Admin only") -> None:
        super().__init__(
            code="forbidden",
            status=HTTPStatus.FORBIDDEN,
            message=message,
        )


class NotFoundError(DomainError):
    def __init__(self, message: str = "Not found", *, code: str = "not_found") -> None:
        super().__init__(message, code=code, status=HTTPStatus.NOT_FOUND)


class ConflictError(DomainError):
    # Duplicate unique keys are reported as 400 to keep the public contract.
    def __init__(self, message: str = "Conflict", *, code: str = "conflict") -> None:
        super().__init__(message, code=code, status=HTTPStatus.BAD_REQUEST)


class RateLimitedError(AppError):
    def __init__(self) -> None:
        super().__init__(
            code="rate_limited",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            message="Too many requests",
        )
