"""
Food Controller Module

Handles food-related endpoints including:
- Barcode lookup and decoding
- Food database search
- The user's saved food catalog
- AI food photo, text and nutrition label analysis
- Portion calculation and spreadsheet export
"""

from flask import request, current_app

from nutrilog.extensions import db
from nutrilog.exceptions import NutriLogError
from nutrilog.schemas.food_schema import FoodInfoSchema, FoodInfoQuerySchema, NutritionCalculateSchema
from nutrilog.services import (
    food_analysis_service,
    food_info_service,
    openfoodfacts_service,
    sheets_service,
)
from nutrilog.services.nutrition_service import (
    calories_from_macros,
    per_gram_values,
    scale_nutrients,
)
from nutrilog.utils.barcode import decode_barcode_image
from nutrilog.utils.http import (
    ok,
    error,
    error_from,
    no_content,
    json_body,
    validate_schema,
    arg_str,
    uploaded_image,
)
from nutrilog.utils.units import convert_to_grams

# ============================================================================
# Barcode & database search
# ============================================================================

def lookup_barcode_handler():
    """
    Look a barcode up in the saved catalog first, then in OpenFoodFacts.

    Query Parameters:
        - barcode (required): EAN/UPC digits
    """
    barcode = (arg_str("barcode") or "").strip()
    if not barcode:
        return error("VALIDATION_ERROR", "Barcode is required", 400)

    saved = food_info_service.find_by_barcode(barcode)
    if saved:
        return ok(saved.to_dict())

    try:
        product = openfoodfacts_service.lookup_barcode(barcode)
    except NutriLogError as e:
        return error_from(e)

    if product is None:
        return error("NOT_FOUND", "Product not found", 404, barcode=barcode)
    return ok(product)


def decode_barcode_handler():
    image, _ = uploaded_image()
    if image is None:
        return error("VALIDATION_ERROR", "No image provided", 400)

    try:
        decoded = decode_barcode_image(image)
    except ValueError as e:
        return error("VALIDATION_ERROR", str(e), 400)

    if decoded is None:
        return error("NOT_FOUND", "No barcode detected in image", 404)
    return ok(decoded)


def database_search_handler():
    query = (arg_str("query") or "").strip()
    if not query:
        return error("VALIDATION_ERROR", "Query parameter is required", 400)

    try:
        products = openfoodfacts_service.search_products(query)
    except NutriLogError as e:
        return error_from(e)
    return ok({"products": products})


# ============================================================================
# Saved foods
# ============================================================================

def save_food_info_handler():
    data, errors = validate_schema(FoodInfoSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid food data", 400, details=errors)

    try:
        food, created = food_info_service.save_food(request.user_id, data)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Failed to save food info")
        return error("UNKNOWN_ERROR", str(e), 500)

    if not created:
        return ok({
            "message": "Food already exists",
            "id": food.id,
            "created": False,
            "food": food.to_dict(),
        })
    return ok({
        "message": "Food info saved successfully",
        "id": food.id,
        "created": True,
        "food": food.to_dict(),
    }, 201)


def list_food_info_handler():
    params, errors = validate_schema(FoodInfoQuerySchema, request.args.to_dict())
    if errors:
        return error("VALIDATION_ERROR", "Invalid query parameters", 400, details=errors)
    return ok(food_info_service.list_foods(request.user_id, **params))


def delete_food_info_handler(food_id: int):
    try:
        food_info_service.delete_food(request.user_id, food_id)
    except NutriLogError as e:
        return error_from(e)
    return no_content()


# ============================================================================
# AI analysis
# ============================================================================

def analyze_food_handler():
    image, mime_type = uploaded_image()
    if image is None:
        return error("VALIDATION_ERROR", "No image provided", 400)

    try:
        result = food_analysis_service.analyze_food_image(image, mime_type)
    except NutriLogError as e:
        return error_from(e)
    return ok(result)


def analyze_text_food_handler():
    text = (json_body().get("text") or "").strip()
    if not text:
        return error("VALIDATION_ERROR", "No food description provided", 400)

    try:
        result = food_analysis_service.analyze_food_text(text)
    except NutriLogError as e:
        return error_from(e)
    return ok(result)


def scan_label_handler():
    image, mime_type = uploaded_image()
    if image is None:
        return error("VALIDATION_ERROR", "No image provided", 400)

    food_name = (request.form.get("foodName") or "").strip() or None
    try:
        result = food_analysis_service.scan_label(image, mime_type, food_name)
    except NutriLogError as e:
        return error_from(e)
    return ok(result)


def assistant_handler():
    image, mime_type = uploaded_image()
    prompt = request.form.get("prompt") if request.form else None
    if prompt is None and image is None:
        prompt = json_body().get("prompt")
    prompt = (prompt or "").strip() or None

    if not prompt and image is None:
        return error("VALIDATION_ERROR", "A prompt or an image is required", 400)

    try:
        response = food_analysis_service.ask_assistant(prompt, image, mime_type or "image/jpeg")
    except NutriLogError as e:
        return error_from(e)
    return ok({"response": response})


# ============================================================================
# Portions & export
# ============================================================================

def calculate_nutrition_handler():
    data, errors = validate_schema(NutritionCalculateSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid calculation request", 400, details=errors)

    per_gram = data.get("per_gram")
    if not per_gram:
        per_gram = per_gram_values(data["nutrients"], basis=data["basis"], serving_size_g=data.get("serving_size_g"))

    nutrients = scale_nutrients(per_gram, data["amount"], data["unit"])
    return ok({
        "grams": round(convert_to_grams(data["amount"], data["unit"]), 2),
        "nutrients": nutrients,
        "calories_from_macros": calories_from_macros(
            nutrients.get("carbs"), nutrients.get("protein"), nutrients.get("fats")
        ),
    })


def export_food_log_handler():
    body = json_body()
    if not body:
        return error("VALIDATION_ERROR", "Food entry data is required", 400)

    try:
        updates = sheets_service.append_food_row(body)
    except NutriLogError as e:
        return error_from(e)
    return ok({"message": "Food entry added to spreadsheet", "updates": updates})
