from __future__ import annotations

import logging
from typing import Any, Optional

from flask import jsonify, request

from ..attendance.model import AttendanceRecord, EmployeeAttendanceRow
from ..common.datetime_utils import format_instant, format_iso_date
from ..core.exceptions import DomainError, NotFoundError, StoreError, ValidationError
from ..employees.department_model import Department
from ..employees.model import Employee

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def json_error(e: DomainError, failure_message: str):
    """Map a domain error to a JSON response; store errors hide their details."""

    if isinstance(e, ValidationError):
        return jsonify({"message": str(e)}), 400
    if isinstance(e, NotFoundError):
        return jsonify({"message": str(e)}), 404
    if isinstance(e, StoreError):
        logger.error("%s: %s", failure_message, e)
    else:
        logger.exception(failure_message)
    return jsonify({"message": failure_message}), 500


def employee_to_json(e: Employee) -> dict[str, Any]:
    return {
        "id": e.employee_id,
        "name": e.name,
        "department": e.department,
        "email": e.email,
        "avatar": e.avatar,
    }


def record_to_json(r: AttendanceRecord) -> dict[str, Any]:
    return {
        "id": r.record_id,
        "employeeId": r.employee_id,
        "date": format_iso_date(r.work_date),
        "status": r.status.value,
        "checkinTime": format_instant(r.checkin_time),
        "checkoutTime": format_instant(r.checkout_time),
    }


def row_to_json(row: EmployeeAttendanceRow) -> dict[str, Any]:
    data = employee_to_json(row.employee)
    data["todayRecord"] = record_to_json(row.record) if row.record else None
    data["status"] = row.status.value
    return data


def department_to_json(d: Department, employee_count: Optional[int] = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": d.department_id,
        "name": d.name,
        "createdAt": format_instant(d.created_at),
    }
    if employee_count is not None:
        data["employeeCount"] = employee_count
    return data
