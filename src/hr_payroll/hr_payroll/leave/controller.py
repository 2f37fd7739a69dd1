from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_context, json_body, to_json
from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leave-requests", methods=["POST"], endpoint="leave_submit")
    @admin_required
    def leave_submit():
        body = json_body()
        try:
            employee_id = int(body.get("employeeId"))
        except (TypeError, ValueError):
            raise ValidationError("employeeId must be an integer")

        req = service.submit(
            employee_id=employee_id,
            leave_type=str(body.get("leaveType") or ""),
            start_date=parse_iso_date(body.get("startDate") or ""),
            end_date=parse_iso_date(body.get("endDate") or ""),
            reason=str(body.get("reason") or ""),
        )
        return jsonify(to_json(req)), 201

    @app.route("/api/leave-requests", methods=["GET"], endpoint="leave_list")
    @admin_required
    def leave_list():
        raw_employee = request.args.get("employeeId")
        if raw_employee:
            try:
                return jsonify(to_json(service.list_for_employee(int(raw_employee))))
            except ValueError:
                raise ValidationError("employeeId must be an integer")

        raw_status = request.args.get("status")
        try:
            status = LeaveStatus(raw_status.upper()) if raw_status else None
        except ValueError:
            raise ValidationError(f"Unknown leave status: {raw_status!r}")
        return jsonify(to_json(service.list_all(status=status)))

    @app.route("/api/leave-requests/<int:request_id>/approve", methods=["PUT"], endpoint="leave_approve")
    @admin_required
    def leave_approve(request_id: int):
        return jsonify(to_json(service.approve(request_id=request_id, actor=current_context().actor)))

    @app.route("/api/leave-requests/<int:request_id>/reject", methods=["PUT"], endpoint="leave_reject")
    @admin_required
    def leave_reject(request_id: int):
        return jsonify(to_json(service.reject(request_id=request_id, actor=current_context().actor)))
