"""Helpers shared by the JSON controllers."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..auth.service import SessionContext
from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    NotFoundError,
    PartialBatchError,
    StoreError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def current_session() -> SessionContext:
    return SessionContext(session)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_session().is_authenticated:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def ok(payload: Optional[dict] = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_date_value(value: Any, field_name: str = "date") -> date:
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field_name} (YYYY-MM-DD)")


def parse_int_value(value: Any, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if parsed <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return parsed


def parse_bool_value(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ValidationError, 400),
    (StoreError, 503),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(PartialBatchError)
    def partial_batch(e: PartialBatchError):
        return jsonify({"success": False, "message": str(e), "result": e.result.to_dict()}), 207

    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
        if status >= 500:
            logger.error("Store failure on %s %s: %s", request.method, request.path, e)
        return jsonify({"success": False, "message": str(e)}), status
