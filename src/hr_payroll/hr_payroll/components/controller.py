from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, json_body, to_json
from ..common.money import to_decimal
from ..container import Container
from ..core.enums import ComponentKind
from ..core.exceptions import ComponentConfigError, ValidationError
from .model import SalaryComponent


def _parse_kind(raw) -> ComponentKind:
    try:
        return ComponentKind(str(raw or "").strip().upper())
    except ValueError:
        raise ComponentConfigError(f"Unknown component kind: {raw!r}")


def _parse_flag(body: dict, key: str) -> bool:
    value = body.get(key, False)
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be a JSON boolean")
    return value


def _component_from_body(body: dict, component_id=None) -> SalaryComponent:
    return SalaryComponent(
        component_id=component_id,
        name=str(body.get("name") or ""),
        kind=_parse_kind(body.get("kind")),
        amount=to_decimal(body.get("amount"), "amount"),
        is_percentage=_parse_flag(body, "isPercentage"),
    )


def register(app: Flask, container: Container) -> None:
    catalog = container.component_catalog

    @app.route("/api/salary-components", methods=["GET"], endpoint="components_list")
    @admin_required
    def components_list():
        raw = request.args.get("kind")
        kind = _parse_kind(raw) if raw else None
        return jsonify(to_json(catalog.list(kind=kind)))

    @app.route("/api/salary-components/<int:component_id>", methods=["GET"], endpoint="components_get")
    @admin_required
    def components_get(component_id: int):
        return jsonify(to_json(catalog.get(component_id)))

    @app.route("/api/salary-components", methods=["POST"], endpoint="components_create")
    @admin_required
    def components_create():
        component = catalog.upsert(_component_from_body(json_body()))
        return jsonify(to_json(component)), 201

    @app.route("/api/salary-components/<int:component_id>", methods=["PUT"], endpoint="components_update")
    @admin_required
    def components_update(component_id: int):
        component = catalog.upsert(_component_from_body(json_body(), component_id))
        return jsonify(to_json(component))

    @app.route("/api/salary-components/<int:component_id>", methods=["DELETE"], endpoint="components_delete")
    @admin_required
    def components_delete(component_id: int):
        catalog.delete(component_id)
        return "", 204
