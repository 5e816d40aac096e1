import re
from typing import Any, Dict, Optional, Tuple

# Household measures are volume units; the gram weights assume water density.
GRAMS_PER_UNIT: Dict[str, float] = {
    "g": 1.0,
    "oz": 28.3495,
    "cup": 236.588,
    "tbsp": 14.7868,
    "tsp": 4.92892,
}


def grams_per_unit(unit: str) -> float:
    """Unknown or missing units are treated as grams."""
    return GRAMS_PER_UNIT.get((unit or "g").strip().lower(), 1.0)


def convert_to_grams(amount: float, unit: str) -> float:
    return float(amount or 0) * grams_per_unit(unit)


def convert_from_grams(grams: float, unit: str) -> float:
    return float(grams or 0) / grams_per_unit(unit)


_QUANTITY = re.compile(r"^\s*(\d+(?:[.,]\d+)?)\s*([a-zA-Z]+)?")


def parse_quantity(value: Any) -> Tuple[Optional[float], Optional[str]]:
    """
    Split a serving size such as 30, "30", "30g" or "1.5 oz" into
    (number, unit). Either part is None when it cannot be read.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value), None
    if not isinstance(value, str):
        return None, None
    match = _QUANTITY.match(value)
    if not match:
        return None, None
    unit = match.group(2).lower() if match.group(2) else None
    return float(match.group(1).replace(",", ".")), unit
