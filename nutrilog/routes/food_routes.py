from flask import Blueprint
from nutrilog.controllers.food_controller import (
    lookup_barcode_handler,
    decode_barcode_handler,
    database_search_handler,
    save_food_info_handler,
    list_food_info_handler,
    delete_food_info_handler,
    analyze_food_handler,
    analyze_text_food_handler,
    scan_label_handler,
    assistant_handler,
    calculate_nutrition_handler,
    export_food_log_handler,
)
from nutrilog.utils.auth import require_auth

food_bp = Blueprint("food", __name__, url_prefix="/api")


@food_bp.get("/lookup-barcode")
@require_auth
def lookup_barcode():
    return lookup_barcode_handler()


@food_bp.post("/decode-barcode")
@require_auth
def decode_barcode():
    return decode_barcode_handler()


@food_bp.get("/database-search")
@require_auth
def database_search():
    return database_search_handler()


@food_bp.post("/food-info")
@require_auth
def save_food_info():
    return save_food_info_handler()


@food_bp.get("/food-info")
@require_auth
def list_food_info():
    return list_food_info_handler()


@food_bp.delete("/food-info/<int:food_id>")
@require_auth
def delete_food_info(food_id: int):
    return delete_food_info_handler(food_id)


@food_bp.post("/analyze-food")
@require_auth
def analyze_food():
    return analyze_food_handler()


@food_bp.post("/analyze-text-food")
@require_auth
def analyze_text_food():
    return analyze_text_food_handler()


@food_bp.post("/scan-label")
@require_auth
def scan_label():
    return scan_label_handler()


@food_bp.post("/assistant")
@require_auth
def assistant():
    return assistant_handler()


@food_bp.post("/nutrition/calculate")
@require_auth
def calculate_nutrition():
    return calculate_nutrition_handler()


@food_bp.post("/sheets/food-log")
@require_auth
def export_food_log():
    return export_food_log_handler()
