# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


from __future__ import annotations

from time import perf_counter

from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError

from staffdesk.application.services.access_gate import AccessGate
from staffdesk.application.use_cases.employees import (
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    UpdateEmployeeUseCase,
)
from staffdesk.interfaces.http.dto.employees import (
    EmployeeCreateDTO,
    EmployeeDTO,
    EmployeeUpdateDTO,
)
from staffdesk.interfaces.http.guards import admin_required
from staffdesk.shared.errors import AppError, InfrastructureError
from staffdesk.shared.errors.validation import raise_validation_error
from staffdesk.shared.logging import logger


class EmployeesController:
    def __init__(
        self,
        *,
        access_gate: AccessGate,
        create_use_case: CreateEmployeeUseCase,
        list_use_case: ListEmployeesUseCase,
        get_use_case: GetEmployeeUseCase,
        update_use_case: UpdateEmployeeUseCase,
        delete_use_case: DeleteEmployeeUseCase,
    ) -> None:
        self._access_gate = access_gate
        self._create_use_case = create_use_case
        self._list_use_case = list_use_case
        self._get_use_case = get_use_case
        self._update_use_case = update_use_case
        self._delete_use_case = delete_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("employees", __name__, url_prefix="/api")
        bp.add_url_rule("/employees", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/employees", view_func=self.list_employees, methods=["GET"])
        bp.add_url_rule("/employees/<employee_id>", view_func=self.get, methods=["GET"])
        bp.add_url_rule("/employees/<employee_id>", view_func=self.update, methods=["PUT"])
        bp.add_url_rule(
            "/employees/<employee_id>",
            view_func=self.delete,
            methods=["DELETE"],
        )
        return bp

    @admin_required
    def create(self):
        t0 = perf_counter()
        user_id = g.user_id
        try:
            dto = EmployeeCreateDTO.from_payload(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            employee = self._create_use_case.execute(dto.to_draft())
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"employees.create: err (user_id={user_id})")
            raise InfrastructureError(code="employee_create_failed", message="Failed to add") from exc

        dt = (perf_counter() - t0) * 1000
        logger.info(f"employees.create: ok (user_id={user_id}, id={employee.id}, dt_ms={dt:.0f})")
        return jsonify(EmployeeDTO.from_entity(employee).to_json())

    @admin_required
    def list_employees(self):
        t0 = perf_counter()
        user_id = g.user_id
        try:
            items = self._list_use_case.execute()
        except Exception as exc:
            logger.exception(f"employees.list: err (user_id={user_id})")
            raise InfrastructureError(code="employees_list_failed", message="Failed to fetch") from exc

        dt = (perf_counter() - t0) * 1000
        logger.info(f"employees.list: ok (user_id={user_id}, n={len(items)}, dt_ms={dt:.0f})")
        return jsonify([EmployeeDTO.from_entity(item).to_json() for item in items])

    @admin_required
    def get(self, employee_id: str):
        try:
            employee = self._get_use_case.execute(employee_id)
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"employees.get: err (id={employee_id})")
            raise InfrastructureError(code="employee_get_failed", message="Failed to fetch") from exc
        return jsonify(EmployeeDTO.from_entity(employee).to_json())

    @admin_required
    def update(self, employee_id: str):
        t0 = perf_counter()
        user_id = g.user_id
        try:
            dto = EmployeeUpdateDTO.from_payload(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc, message="Invalid fields")

        try:
            employee = self._update_use_case.execute(employee_id, dto.changes())
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"employees.update: err (user_id={user_id}, id={employee_id})")
            raise InfrastructureError(
                code="employee_update_failed", message="Failed to update"
            ) from exc

        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"employees.update: ok (user_id={user_id}, id={employee_id}, "
            f"fields={sorted(dto.changes())}, dt_ms={dt:.0f})"
        )
        return jsonify(EmployeeDTO.from_entity(employee).to_json())

    @admin_required
    def delete(self, employee_id: str):
        user_id = g.user_id
        try:
            self._delete_use_case.execute(employee_id)
        except Exception as exc:
            logger.exception(f"employees.delete: err (user_id={user_id}, id={employee_id})")
            raise InfrastructureError(
                code="employee_delete_failed", message="Failed to delete"
            ) from exc

        logger.info(f"employees.delete: ok (user_id={user_id}, id={employee_id})")
        return jsonify({"message": "Deleted"})
