from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..common.http import (
    department_to_json,
    employee_to_json,
    json_body,
    json_error,
    row_to_json,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        """All employees with today's attendance (left join, absent days are not-checked-in)."""
        try:
            rows = container.attendance_service.list_with_attendance(now_local().date())
            return jsonify([row_to_json(r) for r in rows])
        except DomainError as e:
            return json_error(e, "Failed to fetch employees")

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        try:
            data = json_body()
            employee = container.employee_service.create(
                name=data.get("name"),
                department=data.get("department"),
                email=data.get("email"),
                avatar=data.get("avatar"),
            )
            return jsonify(employee_to_json(employee)), 201
        except DomainError as e:
            return json_error(e, "Failed to create employee")

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: str):
        try:
            return jsonify(employee_to_json(container.employee_service.get(employee_id)))
        except DomainError as e:
            return json_error(e, "Failed to fetch employee")

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: str):
        try:
            data = json_body()
            employee = container.employee_service.update(
                employee_id,
                name=data.get("name"),
                department=data.get("department"),
                email=data.get("email"),
                avatar=data.get("avatar"),
            )
            return jsonify(employee_to_json(employee))
        except DomainError as e:
            return json_error(e, "Failed to update employee")

    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    def list_departments():
        try:
            counts = container.department_service.employee_counts()
            departments = container.department_service.list_all()
            return jsonify([department_to_json(d, counts.get(d.name, 0)) for d in departments])
        except DomainError as e:
            return json_error(e, "Failed to fetch departments")

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    def create_department():
        try:
            department = container.department_service.create(name=json_body().get("name"))
            return jsonify(department_to_json(department)), 201
        except DomainError as e:
            return json_error(e, "Failed to create department")
