from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, json_body, to_json
from ..container import Container
from ..core.exceptions import ValidationError


def _employee_id(body) -> int:
    try:
        return int(body.get("employeeId"))
    except (TypeError, ValueError):
        raise ValidationError("employeeId must be an integer")


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    overview = container.overview_aggregator

    @app.route("/api/attendance/overview", methods=["GET"], endpoint="attendance_overview")
    @admin_required
    def attendance_overview():
        raw = request.args.get("date")
        day = parse_iso_date(raw) if raw else service.today()
        return jsonify(to_json(overview.overview(day)))

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @admin_required
    def attendance_clock_in():
        record = service.clock_in(_employee_id(json_body()))
        return jsonify(to_json(record)), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @admin_required
    def attendance_clock_out():
        record = service.clock_out(_employee_id(json_body()))
        return jsonify(to_json(record))

    @app.route("/api/attendance/<int:attendance_id>/remarks", methods=["PUT"], endpoint="attendance_remarks")
    @admin_required
    def attendance_remarks(attendance_id: int):
        record = service.update_remarks(attendance_id, json_body().get("remarks"))
        return jsonify(to_json(record))

    @app.route("/api/attendance/mark-absentees", methods=["POST"], endpoint="attendance_mark_absentees")
    @admin_required
    def attendance_mark_absentees():
        raw = json_body().get("date")
        day = parse_iso_date(raw) if raw else service.today()
        marked = service.mark_absentees(day)
        return jsonify({"date": day.isoformat(), "markedEmployeeIds": marked})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @admin_required
    def attendance_history():
        employee_id = _employee_id(request.args)
        start = parse_iso_date(request.args.get("start") or "")
        end = parse_iso_date(request.args.get("end") or "")
        return jsonify(to_json(service.history(employee_id, start=start, end=end)))
