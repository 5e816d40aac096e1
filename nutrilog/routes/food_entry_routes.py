from flask import Blueprint
from nutrilog.controllers.food_entry_controller import (
    list_entries_handler,
    create_entry_handler,
    get_entry_handler,
    update_entry_handler,
    delete_entry_handler,
    weekly_handler,
    recent_foods_handler,
)
from nutrilog.utils.auth import require_auth

food_entries_bp = Blueprint("food_entries", __name__, url_prefix="/api")


@food_entries_bp.get("/food-entries")
@require_auth
def list_entries():
    return list_entries_handler()


@food_entries_bp.post("/food-entries")
@require_auth
def create_entry():
    return create_entry_handler()


@food_entries_bp.get("/food-entries/weekly")
@require_auth
def weekly():
    return weekly_handler()


@food_entries_bp.get("/food-entries/<int:entry_id>")
@require_auth
def get_entry(entry_id: int):
    return get_entry_handler(entry_id)


@food_entries_bp.put("/food-entries/<int:entry_id>")
@require_auth
def update_entry(entry_id: int):
    return update_entry_handler(entry_id)


@food_entries_bp.delete("/food-entries/<int:entry_id>")
@require_auth
def delete_entry(entry_id: int):
    return delete_entry_handler(entry_id)


@food_entries_bp.get("/recent-foods")
@require_auth
def recent_foods():
    return recent_foods_handler()
