from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import json_body, json_error, record_to_json
from ..common.validators import optional_hhmm, optional_status, positive_int, require_iso_date, require_status
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    stats = container.stats_service

    @app.route("/api/employees/<employee_id>/toggle-attendance", methods=["POST"], endpoint="toggle_attendance")
    def toggle_attendance(employee_id: str):
        """Quick toggle for today: not-checked-in -> working -> checked-out."""
        try:
            record = service.toggle(employee_id, now_local().date())
            return jsonify(record_to_json(record))
        except DomainError as e:
            return json_error(e, "Failed to toggle attendance")

    @app.route("/api/employees/<employee_id>/attendance/status", methods=["POST"], endpoint="set_attendance_status")
    def set_attendance_status(employee_id: str):
        try:
            data = json_body()
            work_date = require_iso_date(data.get("date"))
            status = require_status(data.get("status"))
            record = service.set_status(employee_id, work_date, status)
            return jsonify(record_to_json(record))
        except DomainError as e:
            return json_error(e, "Failed to set attendance status")

    @app.route("/api/employees/<employee_id>/attendance/set", methods=["POST"], endpoint="set_attendance_times")
    def set_attendance_times(employee_id: str):
        """Admin correction from the calendar: explicit HH:MM times, optional status override."""
        try:
            data = json_body()
            record = service.set_explicit_times(
                employee_id,
                require_iso_date(data.get("date")),
                checkin=optional_hhmm(data.get("checkinTime"), "checkinTime"),
                checkout=optional_hhmm(data.get("checkoutTime"), "checkoutTime"),
                status=optional_status(data.get("status")),
            )
            return jsonify(record_to_json(record))
        except DomainError as e:
            return json_error(e, "Failed to set attendance status")

    @app.route("/api/attendance/bulk-update", methods=["POST"], endpoint="bulk_update_attendance")
    def bulk_update_attendance():
        try:
            changes = json_body().get("changes")
            if not isinstance(changes, list):
                raise ValidationError("Changes must be an array")

            result = service.bulk_update(changes)
            return jsonify(
                {
                    "success": not result.errors,
                    "updated": result.updated,
                    "unchanged": result.unchanged,
                    "errors": result.errors,
                }
            )
        except DomainError as e:
            return json_error(e, "Failed to bulk update attendance")

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        try:
            date_s = request.args.get("date")
            work_date = require_iso_date(date_s) if date_s else now_local().date()
            s = stats.daily_stats(work_date)
            return jsonify(
                {
                    "total": s.total,
                    "working": s.working,
                    "checkedOut": s.checked_out,
                    "notCheckedIn": s.not_checked_in,
                }
            )
        except DomainError as e:
            return json_error(e, "Failed to fetch statistics")

    @app.route("/api/employees/<employee_id>/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history(employee_id: str):
        try:
            limit = positive_int(request.args.get("limit"), "limit", DEFAULT_HISTORY_LIMIT)
            history = service.get_history(employee_id, limit=limit)
            return jsonify([record_to_json(r) for r in history])
        except DomainError as e:
            return json_error(e, "Failed to fetch attendance history")

    @app.route("/api/employees/<employee_id>/attendance/stats", methods=["GET"], endpoint="attendance_history_stats")
    def attendance_history_stats(employee_id: str):
        try:
            s = stats.employee_history_stats(employee_id)
            return jsonify(
                {
                    "totalDays": s.total_days,
                    "workingDays": s.working_days,
                    "absentDays": s.absent_days,
                    "averageWorkingHours": s.average_working_hours,
                    "thisWeekWorkingDays": s.this_week_working_days,
                    "thisMonthWorkingDays": s.this_month_working_days,
                }
            )
        except DomainError as e:
            return json_error(e, "Failed to fetch attendance statistics")
