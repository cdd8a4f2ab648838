from __future__ import annotations

from flask import Flask, request

from ..common.http import ok
from ..common.serializers import to_json
from ..container import Container
from ..core.exceptions import EmployeeNotFoundError
from .model import Employee


def _employee_json(employee: Employee) -> dict:
    data = to_json(employee)
    data["compensation_mode"] = employee.compensation_mode.value
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        include_inactive = request.args.get("all") in {"1", "true", "yes"}
        employees = container.employees_repo.list_all(active_only=not include_inactive)
        return ok([_employee_json(e) for e in employees])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    def employees_get(employee_id: int):
        employee = container.employees_repo.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFoundError(employee_id)
        return ok(_employee_json(employee))
