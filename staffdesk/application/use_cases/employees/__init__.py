# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .create_employee import CreateEmployeeUseCase
from .delete_employee import DeleteEmployeeUseCase
from .get_employee import GetEmployeeUseCase
from .list_employees import ListEmployeesUseCase
from .update_employee import UpdateEmployeeUseCase

__all__ = [
    "CreateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "GetEmployeeUseCase",
    "ListEmployeesUseCase",
    "UpdateEmployeeUseCase",
]
