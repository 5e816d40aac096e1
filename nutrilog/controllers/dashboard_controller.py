from flask import request, current_app

from nutrilog.extensions import db
from nutrilog.schemas.food_schema import GoalSchema
from nutrilog.services.dashboard_service import build_dashboard, get_goals, save_goals
from nutrilog.utils.http import ok, error, json_body, validate_schema, arg_str, parse_iso_date


def dashboard_handler():
    raw = arg_str("date")
    day = parse_iso_date(raw) if raw else None
    if raw and day is None:
        return error("VALIDATION_ERROR", "date must be YYYY-MM-DD", 400)
    return ok(build_dashboard(request.user_id, day))


def get_goals_handler():
    return ok(get_goals(request.user_id))


def update_goals_handler():
    data, errors = validate_schema(GoalSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid goals", 400, details=errors)
    try:
        goals = save_goals(request.user_id, data)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Failed to save goals")
        return error("UNKNOWN_ERROR", str(e), 500)
    return ok(goals)
