from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_object
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/generate", methods=["POST"], endpoint="generate_payroll")
    def generate_payroll():
        data = json_object()
        try:
            result = container.payroll_service.generate(data.get("employee_ids") or [], data.get("month") or "")
        except Exception as e:
            return error_response(e, fallback="Error generating salary slips")
        return jsonify(result.to_dict()), 207 if result.has_failures else 200

    @app.route("/api/payroll/history", methods=["GET"], endpoint="salary_history")
    def salary_history():
        try:
            rows = container.payroll_service.all_salary_history()
        except Exception as e:
            return error_response(e, fallback="Error fetching salary history")
        return jsonify(rows)

    @app.route("/api/employees/<int:employee_id>/salary-history", methods=["GET"], endpoint="employee_salary_history")
    def employee_salary_history(employee_id: int):
        try:
            records = container.payroll_service.salary_history(employee_id)
        except Exception as e:
            return error_response(e, fallback="Error fetching salary history")
        return jsonify([r.to_dict() for r in records])
