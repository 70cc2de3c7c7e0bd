from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, json_object
from ..common.validators import require_id
from ..container import Container
from ..core.enums import AttendanceStatus


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:employee_id>/punch-in", methods=["POST"], endpoint="punch_in")
    def punch_in(employee_id: int):
        try:
            entry = container.attendance_service.punch_in(employee_id)
        except Exception as e:
            return error_response(e, fallback="Error punching in")
        return jsonify({"success": True, "message": "Punch-in successful.", "entry": entry.to_dict()}), 201

    @app.route("/api/attendance/<int:employee_id>/punch-out", methods=["POST"], endpoint="punch_out")
    def punch_out(employee_id: int):
        try:
            entry = container.attendance_service.punch_out(employee_id)
        except Exception as e:
            return error_response(e, fallback="Error punching out")
        return jsonify({"success": True, "message": "Punch-out successful.", "entry": entry.to_dict()}), 200

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        data = json_object()
        try:
            entry = container.attendance_service.mark_manual(
                require_id(data.get("employee_id"), "employee_id"),
                parse_iso_date(data.get("date")),
                data.get("status"),
            )
        except Exception as e:
            return error_response(e, fallback="Error marking attendance")
        return jsonify({"success": True, "entry": entry.to_dict()}), 200

    @app.route("/api/attendance/today", methods=["GET"], endpoint="todays_attendance")
    def todays_attendance():
        try:
            rows = container.attendance_aggregator.todays_status()
        except Exception as e:
            return error_response(e, fallback="Error fetching today's attendance status")
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/attendance/<int:employee_id>/today", methods=["GET"], endpoint="my_today")
    def my_today(employee_id: int):
        try:
            entry = container.attendance_service.today_entry(employee_id)
        except Exception as e:
            return error_response(e, fallback="Error fetching today's attendance")
        if entry is None:
            return jsonify({"employee_id": employee_id, "status": AttendanceStatus.NOT_PUNCHED_IN.value, "entry": None})
        return jsonify({"employee_id": employee_id, "status": entry.derived_status().value, "entry": entry.to_dict()})

    @app.route("/api/attendance/sheet", methods=["GET"], endpoint="attendance_sheet")
    def attendance_sheet():
        try:
            sheet = container.attendance_aggregator.attendance_sheet()
        except Exception as e:
            return error_response(e, fallback="Error fetching attendance sheet data")
        return jsonify(sheet.to_dict())

    @app.route("/api/attendance", methods=["GET"], endpoint="all_attendance")
    def all_attendance():
        try:
            rows = container.attendance_aggregator.all_attendance()
        except Exception as e:
            return error_response(e, fallback="Error fetching attendance records")
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="employee_attendance")
    def employee_attendance(employee_id: int):
        try:
            entries = container.attendance_service.history(employee_id)
        except Exception as e:
            return error_response(e, fallback="Error fetching attendance data")
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/attendance/sweep", methods=["POST"], endpoint="run_sweep")
    def run_sweep():
        data = json_object()
        try:
            reference_date = parse_iso_date(data["date"]) if data.get("date") else None
            result = container.absence_sweeper.run_daily_sweep(reference_date)
        except Exception as e:
            return error_response(e, fallback="Error marking absentees")
        return jsonify({"success": True, **result.to_dict()}), 200
