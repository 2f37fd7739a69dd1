"""Helpers shared by the JSON controllers."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

from flask import Flask, current_app, g, jsonify, request

from ..core.constants import DEFAULT_ACTOR_HEADER, DEFAULT_ROLE_HEADER
from ..core.exceptions import DomainError, ValidationError
from .request_context import RequestContext

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_json(value: Any) -> Any:
    """Convert domain objects into JSON-ready values.

    Dataclass fields become camelCase keys, money stays exact as a decimal string
    and dates use ISO format.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {_camel(f.name): to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_context() -> RequestContext:
    return g.request_context


def admin_required(view):
    """Build the RequestContext from gateway headers and insist on an admin caller."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        actor_header = current_app.config.get("ACTOR_HEADER", DEFAULT_ACTOR_HEADER)
        role_header = current_app.config.get("ROLE_HEADER", DEFAULT_ROLE_HEADER)
        ctx = RequestContext.from_headers(request.headers.get(actor_header), request.headers.get(role_header))
        g.request_context = ctx.require_admin()
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        logger.warning("%s %s -> %s: %s", request.method, request.path, exc.code, exc)
        body = {"error": exc.code, "message": str(exc)}
        if exc.retryable:
            body["retryable"] = True
        return jsonify(body), exc.status_code
