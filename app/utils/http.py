import math
from typing import Any, Dict, Optional, Tuple, Type
from flask import request, jsonify
from marshmallow import Schema, ValidationError


def ok(payload: Any, status: int = 200):
    return jsonify(payload), status


def error(code: str, message: str, status: int = 400, **extra):
    body: Dict[str, Any] = {"error": {"code": code, "message": message}}
    if extra:
        body["error"].update(extra)
    return jsonify(body), status


def json_body() -> Dict[str, Any]:
    # Try parsing as JSON first (force=True allows missing Content-Type header)
    data = request.get_json(force=True, silent=True)
    if data is not None:
        return data
    # Fallback to form data (converted to dict) if JSON parsing fails
    return request.form.to_dict() if request.form else {}


def validate_schema(schema_cls: Type[Schema], data: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
    """Load ``data`` through ``schema_cls``; returns (loaded, None) or (None, field errors)."""
    try:
        return schema_cls().load(data if data is not None else {}), None
    except ValidationError as e:
        return None, e.normalized_messages()


def arg_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = request.args.get(name)
    if val is None:
        return default
    return val


def arg_float(name: str, default: float, min_value: Optional[float] = None) -> float:
    try:
        v = float(request.args.get(name, default))
    except (TypeError, ValueError):
        v = default
    # "nan" and "inf" parse as floats
    if not math.isfinite(v):
        v = default
    if min_value is not None and v < min_value:
        v = default
    return v


def service_error(e):
    """Render a ServiceError in the standard error envelope."""
    return error(e.code, e.message, e.status, **e.extra)
