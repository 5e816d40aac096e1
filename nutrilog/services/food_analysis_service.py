"""
Food Analysis Service

AI-backed estimation of nutrition from a food photo, a free-text meal
description or a photographed nutrition label.
"""

import logging
from typing import Any, Dict, Optional

from nutrilog.services.nutrition_service import per_gram_values, to_float
from nutrilog.utils.ai import complete, extract_json
from nutrilog.utils.units import convert_to_grams, parse_quantity

logger = logging.getLogger(__name__)

ESTIMATE_FIELDS = ["serving_size", "calories", "carbs", "fats", "protein", "sugar", "fiber"]

ESTIMATE_FORMAT = (
    "foodName (a concise name for this entry), "
    "serving_size (estimated weight in grams), "
    "calories (estimated calories), "
    "carbs (estimated carbs in grams), "
    "fats (estimated fats in grams), "
    "protein (estimated protein in grams), "
    "sugar (estimated sugar in grams), "
    "fiber (estimated fiber in grams)"
)

JSON_ONLY = "Return ONLY the JSON object with no markdown formatting, code blocks, or additional text."

IMAGE_PROMPT = (
    "Please analyze this food image and provide the following information in JSON format: "
    f"{ESTIMATE_FORMAT}. Make your best estimate based on the image. "
    "If you can't identify something clearly, make a reasonable guess."
)

TEXT_SYSTEM_PROMPT = (
    "You are a nutrition expert. Analyze the food description and provide nutritional "
    f"information in JSON format. {JSON_ONLY}"
)

TEXT_PROMPT = (
    "Analyze this food description and provide the following information in JSON format: "
    f"{ESTIMATE_FORMAT}.\n\n"
    "If multiple food items are mentioned, combine them into a single entry with total "
    "nutritional values.\n\n"
    'Food description: "{text}"'
)

LABEL_FIELDS = [
    "calories", "total_carbohydrates", "dietary_fiber", "total_sugars", "added_sugars",
    "total_fat", "saturated_fat", "trans_fat", "protein", "sodium", "potassium",
    "calcium", "iron", "magnesium", "phosphorus", "vitamin_a", "vitamin_c",
]

LABEL_SYSTEM_PROMPT = (
    "You are a nutrition label analyzer. Extract information from nutrition labels and "
    "return it in clean JSON format without markdown formatting, code blocks, or any additional text."
)

LABEL_PROMPT = (
    "Please analyze this nutrition label and extract the following information as a flat JSON "
    "object: serving_size (number), serving_size_unit (preferably g), "
    + ", ".join(LABEL_FIELDS)
    + ". Use grams for macronutrients and milligrams for sodium, potassium, calcium, iron, "
    "magnesium and phosphorus. If a value is not found, return null for that field."
)

# label key -> diary key
LABEL_TO_FOOD = {
    "calories": "calories",
    "total_carbohydrates": "carbs",
    "total_fat": "fats",
    "protein": "protein",
    "total_sugars": "sugar",
    "dietary_fiber": "fiber",
    "sodium": "sodium",
    "potassium": "potassium",
    "calcium": "calcium",
    "iron": "iron",
    "magnesium": "magnesium",
    "phosphorus": "phosphorus",
    "vitamin_a": "vitamin_a",
    "vitamin_c": "vitamin_c",
}

ASSISTANT_SYSTEM_PROMPT = "You are a helpful assistant."
ASSISTANT_IMAGE_PROMPT = "What is in this image?"


def _normalize_estimate(data: Dict[str, Any], fallback_name: str) -> Dict[str, Any]:
    name = data.get("foodName") or data.get("food_name") or fallback_name
    if isinstance(name, list):
        name = ", ".join(str(part) for part in name)
    result = {"foodName": str(name)}
    for field in ESTIMATE_FIELDS:
        result[field] = round(to_float(data.get(field)), 1)
    result["calories"] = int(round(result["calories"]))
    return result


def analyze_food_image(image: bytes, mime_type: str = "image/jpeg") -> Dict[str, Any]:
    content = complete(IMAGE_PROMPT, image=image, mime_type=mime_type)
    return _normalize_estimate(extract_json(content), "Food from photo")


def analyze_food_text(text: str) -> Dict[str, Any]:
    content = complete(TEXT_PROMPT.format(text=text), system=TEXT_SYSTEM_PROMPT)
    return _normalize_estimate(extract_json(content), "Custom Entry")


def label_to_food_item(label: Dict[str, Any], food_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Turn extracted label values (per serving) into a FoodItem whose per-gram
    table is derived from the serving size.
    """
    size, size_unit = parse_quantity(label.get("serving_size"))
    unit = (label.get("serving_size_unit") or size_unit or "g").strip().lower()
    serving_size = size or 100.0
    # ml is close enough to grams for label purposes
    serving_g = convert_to_grams(serving_size, "g" if unit == "ml" else unit)

    nutrients = {food_key: to_float(label.get(label_key)) for label_key, food_key in LABEL_TO_FOOD.items()}
    item = {
        "foodName": food_name or "Scanned Food Item",
        "brands": "",
        "serving_size": f"{serving_size:g}",
        "serving_size_g": round(serving_g, 2),
        "unit": unit,
        **{key: round(value, 2) for key, value in nutrients.items()},
        "per_gram": per_gram_values(nutrients, basis="serving", serving_size_g=serving_g),
        "source": "label",
    }
    item["calories"] = int(round(item["calories"]))
    return item


def scan_label(image: bytes, mime_type: str = "image/jpeg", food_name: Optional[str] = None) -> Dict[str, Any]:
    content = complete(LABEL_PROMPT, system=LABEL_SYSTEM_PROMPT, image=image, mime_type=mime_type)
    label = extract_json(content)
    return {"label": label, "food": label_to_food_item(label, food_name)}


def ask_assistant(prompt: Optional[str] = None, image: Optional[bytes] = None, mime_type: str = "image/jpeg") -> str:
    """Free-form question or image description; an image takes precedence over the prompt."""
    if image is not None:
        response = complete(ASSISTANT_IMAGE_PROMPT, image=image, mime_type=mime_type)
    else:
        response = complete(prompt or "", system=ASSISTANT_SYSTEM_PROMPT)
    return response or "No response from AI provider."
