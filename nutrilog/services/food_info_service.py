"""
Food Info Service

The user's reusable food catalog: foods saved from barcode scans, label
scans, database searches and manual entry.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from nutrilog.extensions import db
from nutrilog.exceptions import NotFoundError
from nutrilog.models.food_info import FoodInfo
from nutrilog.services.food_constants import NUTRIENT_FIELDS
from nutrilog.services.nutrition_service import (
    calories_from_macros,
    per_gram_values,
    to_float,
)
from nutrilog.utils.units import convert_to_grams

logger = logging.getLogger(__name__)


def find_by_name(user_id: int, name: str) -> Optional[FoodInfo]:
    return FoodInfo.query.filter_by(user_id=user_id, food_name=name).first()


def save_food(user_id: int, data: Dict[str, Any]) -> Tuple[FoodInfo, bool]:
    """
    Save a food to the user's catalog unless one with the same name exists.

    Returns:
        (food, created). The per-gram table is computed here, once, from the
        per-serving values unless the caller already supplies it.
    """
    name = data["food_name"].strip()
    existing = find_by_name(user_id, name)
    if existing:
        return existing, False

    nutrients = {field: to_float(data.get(field)) for field in NUTRIENT_FIELDS}
    if data.get("calories") is None:
        nutrients["calories"] = calories_from_macros(nutrients["carbs"], nutrients["protein"], nutrients["fats"])
    micronutrients = data.get("micronutrients") or {}

    per_gram = data.get("per_gram")
    if not per_gram:
        serving_g = convert_to_grams(data.get("serving_size") or 0, data.get("serving_unit") or "g")
        per_gram = per_gram_values({**nutrients, **micronutrients}, basis="serving", serving_size_g=serving_g)

    food = FoodInfo(
        user_id=user_id,
        food_name=name,
        brand=data.get("brand") or None,
        barcode=data.get("barcode") or None,
        source=data.get("source") or "manual",
        serving_size=data.get("serving_size") or 100,
        serving_unit=data.get("serving_unit") or "g",
        calories=int(round(nutrients["calories"])),
        carbs=nutrients["carbs"],
        fats=nutrients["fats"],
        protein=nutrients["protein"],
        sodium=nutrients["sodium"],
        sugar=nutrients["sugar"],
        fiber=nutrients["fiber"],
        micronutrients=micronutrients or None,
        per_gram=per_gram,
    )
    db.session.add(food)
    try:
        db.session.commit()
    except IntegrityError:
        # A concurrent save of the same name won the unique constraint
        db.session.rollback()
        existing = find_by_name(user_id, name)
        if existing is None:
            raise
        return existing, False
    logger.info("User %s saved food %s to catalog", user_id, name)
    return food, True


def find_by_barcode(barcode: str) -> Optional[FoodInfo]:
    return (
        FoodInfo.query
        .filter_by(barcode=barcode)
        .order_by(FoodInfo.created_at)
        .first()
    )


def list_foods(user_id: int, page: int = 1, limit: int = 20, search: Optional[str] = None) -> Dict[str, Any]:
    query = FoodInfo.query.filter_by(user_id=user_id)

    if search:
        term = f"%{search}%"
        query = query.filter(or_(
            FoodInfo.food_name.ilike(term),
            FoodInfo.brand.ilike(term)
        ))

    pagination = query.order_by(FoodInfo.food_name).paginate(page=page, per_page=limit, error_out=False)

    return {
        "items": [food.to_dict() for food in pagination.items],
        "total": pagination.total,
        "page": page,
        "limit": limit,
        "pages": pagination.pages,
    }


def delete_food(user_id: int, food_id: int) -> None:
    food = FoodInfo.query.filter_by(id=food_id, user_id=user_id).first()
    if not food:
        raise NotFoundError("Food not found")
    db.session.delete(food)
    db.session.commit()
