from __future__ import annotations

from dataclasses import replace

from flask import Flask, jsonify

from ..common.datetime_utils import parse_period_date
from ..common.http import admin_required, current_context, json_body, to_json
from ..container import Container
from .model import PayrollRun


def _summary(run: PayrollRun) -> dict:
    data = to_json(replace(run, paychecks=()))
    data.pop("paychecks", None)
    return data


def register(app: Flask, container: Container) -> None:
    workflow = container.payroll_workflow
    drafts = container.draft_store

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    @admin_required
    def payroll_preview():
        body = json_body()
        start = parse_period_date(body.get("payPeriodStart") or "", "payPeriodStart")
        end = parse_period_date(body.get("payPeriodEnd") or "", "payPeriodEnd")

        draft = workflow.preview(start, end, current_context().actor)
        data = to_json(draft)
        data["draftRef"] = drafts.put(draft)
        return jsonify(data)

    @app.route("/api/payroll/finalize", methods=["POST"], endpoint="payroll_finalize")
    @admin_required
    def payroll_finalize():
        ref = json_body().get("draftRef") or ""
        draft = drafts.get(ref)

        run = workflow.finalize(draft, current_context().actor)
        drafts.discard(ref)
        return jsonify(to_json(run)), 201

    @app.route("/api/payroll/pay/<int:run_id>", methods=["POST"], endpoint="payroll_mark_paid")
    @admin_required
    def payroll_mark_paid(run_id: int):
        run = workflow.mark_paid(run_id, current_context().actor)
        return jsonify(to_json(run))

    @app.route("/api/payroll/runs", methods=["GET"], endpoint="payroll_runs")
    @admin_required
    def payroll_runs():
        return jsonify([_summary(r) for r in workflow.list_runs()])

    @app.route("/api/payroll/run/<int:run_id>", methods=["GET"], endpoint="payroll_run_detail")
    @admin_required
    def payroll_run_detail(run_id: int):
        return jsonify(to_json(workflow.get_run(run_id)))

    @app.route("/api/payroll/run/<int:run_id>", methods=["DELETE"], endpoint="payroll_run_delete")
    @admin_required
    def payroll_run_delete(run_id: int):
        workflow.delete_run(run_id, current_context().actor)
        return "", 204
