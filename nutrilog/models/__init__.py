from nutrilog.models.user import User
from nutrilog.models.food_entry import FoodEntry
from nutrilog.models.food_info import FoodInfo
from nutrilog.models.goal import NutritionGoal

__all__ = ["User", "FoodEntry", "FoodInfo", "NutritionGoal"]
