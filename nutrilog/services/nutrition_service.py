"""
Nutrition Service

Per-gram nutrient tables, serving-size scaling, calorie derivation from
macros and daily totals. Every function here is pure.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from nutrilog.services.food_constants import (
    CALORIES_PER_GRAM_CARBS,
    CALORIES_PER_GRAM_PROTEIN,
    CALORIES_PER_GRAM_FAT,
    DEFAULT_SERVING_SIZE_G,
    NUTRIENT_FIELDS,
    REMAINING_FIELDS,
)
from nutrilog.utils.units import convert_to_grams


def to_float(value: Any) -> float:
    """Coerce user/API supplied numbers; blanks and garbage count as 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def round_nutrient(field: str, value: float):
    if field == "calories":
        return int(round(value))
    return round(value, 1)


def calories_from_macros(carbs: Any = 0, protein: Any = 0, fats: Any = 0) -> int:
    """Energy in kcal from carbohydrate, protein and fat grams (4/4/9)."""
    return int(round(
        to_float(carbs) * CALORIES_PER_GRAM_CARBS
        + to_float(protein) * CALORIES_PER_GRAM_PROTEIN
        + to_float(fats) * CALORIES_PER_GRAM_FAT
    ))


def per_gram_values(
    nutrients: Mapping[str, Any],
    basis: str = "100g",
    serving_size_g: Optional[float] = None,
) -> Dict[str, float]:
    """
    Normalize nutrient amounts to one gram of food.

    Args:
        nutrients: Nutrient name -> amount for the reference quantity
        basis: "100g" when the amounts are per 100 g, "serving" when they are
            per serving of ``serving_size_g`` grams
        serving_size_g: Serving weight in grams (per-serving basis only)

    Returns:
        Nutrient name -> amount per gram. A missing or non-positive serving
        size falls back to 100 g.
    """
    divisor = DEFAULT_SERVING_SIZE_G
    if basis == "serving":
        size = to_float(serving_size_g)
        if size > 0:
            divisor = size
    return {name: to_float(value) / divisor for name, value in nutrients.items()}


def scale_nutrients(per_gram: Mapping[str, Any], amount: Any, unit: str = "g") -> Dict[str, float]:
    """value = per_gram_value x grams_per_unit x amount, rounded for display."""
    grams = convert_to_grams(to_float(amount), unit)
    return {
        name: round_nutrient(name, to_float(value) * grams)
        for name, value in per_gram.items()
    }


def sum_nutrients(rows: Iterable[Mapping[str, Any]], fields=NUTRIENT_FIELDS) -> Dict[str, float]:
    totals = {field: 0.0 for field in fields}
    for row in rows:
        for field in fields:
            totals[field] += to_float(row.get(field))
    return {field: round_nutrient(field, value) for field, value in totals.items()}


def remaining_against_goals(totals: Mapping[str, Any], goals: Mapping[str, Any]) -> Dict[str, float]:
    """Goal minus consumed; negative once the goal is exceeded."""
    return {
        field: round_nutrient(field, to_float(goals.get(field)) - to_float(totals.get(field)))
        for field in REMAINING_FIELDS
    }


def net_carbs(totals: Mapping[str, Any]) -> float:
    return round(to_float(totals.get("carbs")) - to_float(totals.get("fiber")), 1)
