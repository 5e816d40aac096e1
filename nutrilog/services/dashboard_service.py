"""
Dashboard Service

Daily totals against the user's nutrition goals, grouped by meal, together
with the surrounding week.
"""

from datetime import date
from typing import Any, Dict, Optional

from nutrilog.extensions import db
from nutrilog.models.goal import NutritionGoal
from nutrilog.services.food_constants import DEFAULT_GOALS, GOAL_FIELDS, MEAL_TYPES
from nutrilog.services.food_entry_service import list_entries, weekly_totals
from nutrilog.services.nutrition_service import net_carbs, remaining_against_goals, sum_nutrients


def get_goals(user_id: int) -> Dict[str, int]:
    goal = db.session.get(NutritionGoal, user_id)
    if goal is None:
        return dict(DEFAULT_GOALS)
    return {field: getattr(goal, field) for field in GOAL_FIELDS}


def save_goals(user_id: int, data: Dict[str, Any]) -> Dict[str, int]:
    """Store goals; fields not sent keep their current (or default) value."""
    goal = db.session.get(NutritionGoal, user_id)
    if goal is None:
        goal = NutritionGoal(user_id=user_id, **DEFAULT_GOALS)
        db.session.add(goal)
    for field in GOAL_FIELDS:
        if field in data:
            setattr(goal, field, data[field])
    db.session.commit()
    return get_goals(user_id)


def build_dashboard(user_id: int, day: Optional[date] = None) -> Dict[str, Any]:
    day = day or date.today()
    entries = [entry.to_dict() for entry in list_entries(user_id, day)]
    goals = get_goals(user_id)
    totals = sum_nutrients(entries)

    meals = {meal: [] for meal in MEAL_TYPES}
    for entry in entries:
        meals.setdefault(entry["meal"], []).append(entry)

    return {
        "date": day.isoformat(),
        "totals": totals,
        "goals": goals,
        "remaining": remaining_against_goals(totals, goals),
        "net_carbs": net_carbs(totals),
        "meals": meals,
        "weekly": weekly_totals(user_id, day),
    }
