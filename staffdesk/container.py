
"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from staffdesk.application.services.access_gate import AccessGate
from staffdesk.application.services.password_hashing import WerkzeugPasswordHasher
from staffdesk.application.services.session_manager import SessionManager
from staffdesk.application.use_cases.employees import (
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    UpdateEmployeeUseCase,
)
from staffdesk.application.use_cases.users.register_user import RegisterUserUseCase
from staffdesk.application.use_cases.users.seed_admin import SeedAdminUseCase
from staffdesk.infrastructure.db import build_engine, build_session_factory
from staffdesk.infrastructure.repositories.employees.sqlalchemy_employee_repository import (
    SqlAlchemyEmployeeRepository,
)
from staffdesk.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from staffdesk.interfaces.http.controllers.auth_controller import AuthController, SessionCookie
from staffdesk.interfaces.http.controllers.employees_controller import EmployeesController
from staffdesk.interfaces.http.controllers.misc_controller import MiscController
from staffdesk.shared.config import AppConfig, load_config
from staffdesk.shared.utils import Clock, utcnow


class Container:
    def __init__(self, config: AppConfig | None = None, *, clock: Clock = utcnow) -> None:
        self.config = config or load_config()
        self.clock = clock

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory, clock=self.clock)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.session_factory, clock=self.clock)

    @cached_property
    def employee_repository(self) -> SqlAlchemyEmployeeRepository:
        return SqlAlchemyEmployeeRepository(self.session_factory, clock=self.clock)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            ttl=timedelta(seconds=self.config.session.ttl_seconds),
            clock=self.clock,
        )

    @cached_property
    def access_gate(self) -> AccessGate:
        return AccessGate(sessions=self.session_manager)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def seed_admin_use_case(self) -> SeedAdminUseCase:
        return SeedAdminUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        security = self.config.security
        return AuthController(
            register_use_case=self.register_user_use_case,
            session_manager=self.session_manager,
            cookie=SessionCookie(
                name=self.config.session.cookie_name,
                max_age=self.config.session.ttl_seconds,
                secure=security.cookie_secure,
                samesite=security.cookie_samesite,
            ),
        )

    @cached_property
    def employees_controller(self) -> EmployeesController:
        repo = self.employee_repository
        return EmployeesController(
            access_gate=self.access_gate,
            create_use_case=CreateEmployeeUseCase(employees=repo),
            list_use_case=ListEmployeesUseCase(employees=repo),
            get_use_case=GetEmployeeUseCase(employees=repo),
            update_use_case=UpdateEmployeeUseCase(employees=repo),
            delete_use_case=DeleteEmployeeUseCase(employees=repo),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            engine=self.engine,
            metrics_enabled=self.config.observability.metrics_enabled,
        )
