from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple, Type
from flask import request, jsonify
from marshmallow import Schema, ValidationError

from nutrilog.exceptions import NutriLogError


def ok(payload: Any, status: int = 200):
    return jsonify(payload), status


def error(code: str, message: str, status: int = 400, **extra):
    body: Dict[str, Any] = {"error": {"code": code, "message": message}}
    if extra:
        body["error"].update(extra)
    return jsonify(body), status


def error_from(exc: NutriLogError):
    return error(exc.code, exc.message, exc.status, **exc.extra)


def no_content():
    return "", 204


def json_body() -> Dict[str, Any]:
    # Try parsing as JSON first (force=True allows missing Content-Type header)
    data = request.get_json(force=True, silent=True)
    if isinstance(data, dict):
        return data
    # Fallback to form data (converted to dict) if JSON parsing fails
    return request.form.to_dict() if request.form else {}


def validate_schema(schema_cls: Type[Schema], data: Dict[str, Any], partial: bool = False) -> Tuple[Dict[str, Any], Optional[Dict]]:
    try:
        return schema_cls().load(data, partial=partial), None
    except ValidationError as e:
        return {}, e.messages


def arg_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = request.args.get(name)
    if val is None:
        return default
    return val


def parse_iso_date(value: Any) -> Optional[date]:
    """Accept YYYY-MM-DD or a full ISO timestamp; anything else gives None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip().replace("Z", "+00:00")
        try:
            return date.fromisoformat(text[:10]) if len(text) == 10 else datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def uploaded_image(field: str = "image"):
    """Return (bytes, mimetype) of an uploaded file, or (None, None)."""
    file = request.files.get(field)
    if file is None:
        return None, None
    data = file.read()
    if not data:
        return None, None
    return data, (file.mimetype or "image/jpeg")
