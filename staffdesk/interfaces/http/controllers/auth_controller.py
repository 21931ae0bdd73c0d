# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from staffdesk.application.services.session_manager import SessionManager
from staffdesk.application.use_cases.users.register_user import RegisterUserUseCase
from staffdesk.domain.users.exceptions import InvalidCredentialsError
from staffdesk.infrastructure.observability import record_login
from staffdesk.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginSuccessDTO,
    MeDTO,
    MessageDTO,
    RegisterRequestDTO,
)
from staffdesk.interfaces.http.guards import read_session_token
from staffdesk.shared.errors import UnauthorizedError
from staffdesk.shared.errors.validation import raise_validation_error
from staffdesk.shared.logging import logger
from staffdesk.shared.middleware.rate_limit import rate_limit


@dataclass(slots=True, frozen=True)
class SessionCookie:
    name: str = "sid"
    max_age: int = 3600
    secure: bool = False
    samesite: str = "Lax"

    def attach(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.name,
            token,
            max_age=self.max_age,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            self.name,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        session_manager: SessionManager,
        cookie: SessionCookie,
    ) -> None:
        self._register_use_case = register_use_case
        self._session_manager = session_manager
        self._cookie = cookie

    @rate_limit()
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.username, dto.password, dto.role)
        logger.info(f"auth.register: ok (user_id={user.id}, role={user.role})")
        return jsonify(MessageDTO(message="Registered").model_dump()), 200

    @rate_limit()
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            session = self._session_manager.login(dto.username, dto.password)
        except InvalidCredentialsError:
            record_login(False)
            raise
        record_login(True)

        response = jsonify(LoginSuccessDTO(role=session.role).model_dump(mode="json"))
        self._cookie.attach(response, session.token)
        logger.info(f"auth.login: ok (user_id={session.user_id}, role={session.role})")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        self._session_manager.destroy(read_session_token())
        response = jsonify(MessageDTO(message="Logged out").model_dump())
        self._cookie.clear(response)
        logger.info("auth.logout: ok")
        return response, 200

    def me(self) -> tuple[Response, int]:
        info = self._session_manager.validate(read_session_token())
        if info is None:
            raise UnauthorizedError("Not logged in")
        payload = MeDTO(username=info.username, role=info.role).model_dump(mode="json")
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
