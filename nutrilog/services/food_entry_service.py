"""
Food Entry Service

Handles diary entry creation, update, deletion and retrieval, plus the
daily/weekly aggregations built on top of them.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import desc

from nutrilog.extensions import db
from nutrilog.exceptions import NotFoundError
from nutrilog.models.food_entry import FoodEntry
from nutrilog.services.food_constants import (
    NUTRIENT_FIELDS,
    RECENT_FOODS_LIMIT,
)
from nutrilog.services.nutrition_service import (
    calories_from_macros,
    round_nutrient,
    sum_nutrients,
    to_float,
)

logger = logging.getLogger(__name__)


def _apply_nutrients(entry: FoodEntry, data: Dict[str, Any], derive_calories: bool) -> None:
    for field in NUTRIENT_FIELDS:
        if field == "calories" or field not in data:
            continue
        setattr(entry, field, round_nutrient(field, to_float(data[field])))

    if data.get("calories") is not None:
        entry.calories = round_nutrient("calories", to_float(data["calories"]))
    elif derive_calories:
        entry.calories = calories_from_macros(entry.carbs, entry.protein, entry.fats)


def create_entry(user_id: int, data: Dict[str, Any]) -> FoodEntry:
    """
    Log a food for a user.

    Args:
        user_id: Owner of the entry
        data: Validated FoodEntrySchema payload

    Returns:
        The persisted FoodEntry. Calories are derived from the macros when the
        payload does not carry them.
    """
    entry = FoodEntry(
        user_id=user_id,
        food_name=data["food_name"].strip(),
        meal=data["meal"],
        date=data.get("date") or date.today(),
        quantity=data.get("quantity"),
        unit=data.get("unit"),
        micronutrients=data.get("micronutrients") or None,
    )
    _apply_nutrients(entry, data, derive_calories=True)

    db.session.add(entry)
    db.session.commit()
    logger.info("User %s logged %s (%s, %s)", user_id, entry.food_name, entry.meal, entry.date)
    return entry


def get_entry(user_id: int, entry_id: int) -> FoodEntry:
    entry = FoodEntry.query.filter_by(id=entry_id, user_id=user_id).first()
    if not entry:
        raise NotFoundError("Entry not found or unauthorized")
    return entry


def update_entry(user_id: int, entry_id: int, data: Dict[str, Any]) -> FoodEntry:
    entry = get_entry(user_id, entry_id)

    for field in ["meal", "date", "quantity", "unit"]:
        if field in data and data[field] is not None:
            setattr(entry, field, data[field])
    if data.get("food_name"):
        entry.food_name = data["food_name"].strip()
    if "micronutrients" in data:
        merged = dict(entry.micronutrients or {})
        merged.update(data["micronutrients"])
        entry.micronutrients = merged

    # Editing macros without sending calories keeps the stored calories
    _apply_nutrients(entry, data, derive_calories=False)

    db.session.commit()
    return entry


def delete_entry(user_id: int, entry_id: int) -> None:
    entry = get_entry(user_id, entry_id)
    db.session.delete(entry)
    db.session.commit()
    logger.info("User %s deleted food entry %s", user_id, entry_id)


def list_entries(user_id: int, day: Optional[date] = None, meal: Optional[str] = None) -> List[FoodEntry]:
    query = FoodEntry.query.filter_by(user_id=user_id)
    if day is not None:
        query = query.filter(FoodEntry.date == day)
    if meal:
        query = query.filter(FoodEntry.meal == meal)
    return query.order_by(desc(FoodEntry.date), desc(FoodEntry.created_at), desc(FoodEntry.id)).all()


def list_recent_foods(user_id: int, limit: int = RECENT_FOODS_LIMIT) -> List[Dict[str, Any]]:
    entries = (
        FoodEntry.query
        .filter_by(user_id=user_id)
        .order_by(desc(FoodEntry.created_at), desc(FoodEntry.id))
        .limit(limit)
        .all()
    )
    payload = []
    for entry in entries:
        item = entry.to_dict()
        payload.append({
            key: item[key]
            for key in ["food_ky", "foodName", "quantity", "unit", "calories", "carbs", "fats", "protein"]
        })
    return payload


def week_bounds(day: date):
    """Monday and Sunday of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def weekly_totals(user_id: int, day: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Aggregate a user's entries per day for one Monday..Sunday week.

    Every day of the week is present, in order, with zero totals when
    nothing was logged.
    """
    monday, sunday = week_bounds(day or date.today())
    entries = (
        FoodEntry.query
        .filter(FoodEntry.user_id == user_id)
        .filter(FoodEntry.date >= monday, FoodEntry.date <= sunday)
        .all()
    )

    by_day: Dict[date, List[Dict[str, Any]]] = {}
    for entry in entries:
        by_day.setdefault(entry.date, []).append(entry.to_dict())

    weekly = []
    for offset in range(7):
        current = monday + timedelta(days=offset)
        weekly.append({"date": current.isoformat(), **sum_nutrients(by_day.get(current, []))})
    return weekly
