"""
Food Entry Controller Module

Diary endpoints: create, read, update and delete the user's logged foods,
plus the weekly summary and the recent-foods shortcut list.
"""

from datetime import date

from flask import request, current_app

from nutrilog.extensions import db
from nutrilog.exceptions import NutriLogError
from nutrilog.schemas.food_schema import FoodEntrySchema
from nutrilog.services.food_constants import MEAL_ALIASES, MEAL_TYPES
from nutrilog.services import food_entry_service
from nutrilog.utils.http import (
    ok,
    error,
    error_from,
    no_content,
    json_body,
    validate_schema,
    arg_str,
    parse_iso_date,
)


def _date_arg():
    """Returns (date or None, error response or None) for ?date=."""
    raw = arg_str("date")
    if not raw:
        return None, None
    day = parse_iso_date(raw)
    if day is None:
        return None, error("VALIDATION_ERROR", "date must be YYYY-MM-DD", 400)
    return day, None


def list_entries_handler():
    day, err = _date_arg()
    if err:
        return err

    meal = (arg_str("meal") or "").strip().lower() or None
    if meal:
        meal = MEAL_ALIASES.get(meal, meal)
        if meal not in MEAL_TYPES:
            return error("VALIDATION_ERROR", f"meal must be one of {', '.join(MEAL_TYPES)}", 400)

    entries = food_entry_service.list_entries(request.user_id, day, meal)
    return ok([entry.to_dict() for entry in entries])


def create_entry_handler():
    data, errors = validate_schema(FoodEntrySchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid food entry", 400, details=errors)

    try:
        entry = food_entry_service.create_entry(request.user_id, data)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Failed to create food entry")
        return error("UNKNOWN_ERROR", str(e), 500)

    return ok({
        "success": True,
        "message": "Food entry added successfully",
        "entry": entry.to_dict(),
    }, 201)


def get_entry_handler(entry_id: int):
    try:
        entry = food_entry_service.get_entry(request.user_id, entry_id)
    except NutriLogError as e:
        return error_from(e)
    return ok(entry.to_dict())


def update_entry_handler(entry_id: int):
    data, errors = validate_schema(FoodEntrySchema, json_body(), partial=True)
    if errors:
        return error("VALIDATION_ERROR", "Invalid food entry", 400, details=errors)

    try:
        entry = food_entry_service.update_entry(request.user_id, entry_id, data)
    except NutriLogError as e:
        return error_from(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Failed to update food entry %s", entry_id)
        return error("UNKNOWN_ERROR", str(e), 500)

    return ok({
        "success": True,
        "message": "Food entry updated successfully",
        "entry": entry.to_dict(),
    })


def delete_entry_handler(entry_id: int):
    try:
        food_entry_service.delete_entry(request.user_id, entry_id)
    except NutriLogError as e:
        return error_from(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Failed to delete food entry %s", entry_id)
        return error("UNKNOWN_ERROR", str(e), 500)
    return no_content()


def weekly_handler():
    day, err = _date_arg()
    if err:
        return err
    return ok(food_entry_service.weekly_totals(request.user_id, day or date.today()))


def recent_foods_handler():
    return ok(food_entry_service.list_recent_foods(request.user_id))
