"""
Food Service Constants

Contains all constants and configuration values used in food-related services.
"""

# Valid meal types
MEAL_TYPES = ["breakfast", "lunch", "dinner", "snack"]
DEFAULT_MEAL = "snack"
MEAL_ALIASES = {"snacks": "snack"}

# Nutrition calculation constants
CALORIES_PER_GRAM_CARBS = 4.0
CALORIES_PER_GRAM_PROTEIN = 4.0
CALORIES_PER_GRAM_FAT = 9.0

# Per-gram tables are derived from per-100g values unless a serving size is known
DEFAULT_SERVING_SIZE_G = 100.0

# Nutrients tracked on every diary entry and catalog food (sodium in mg, the rest in g)
NUTRIENT_FIELDS = ["calories", "carbs", "fats", "protein", "sodium", "sugar", "fiber"]

# Optional micronutrients accepted on diary entries
MICRONUTRIENT_FIELDS = [
    "zinc", "vitamin_a", "vitamin_b", "vitamin_b1", "vitamin_b2", "vitamin_b3",
    "vitamin_b5", "vitamin_b6", "vitamin_b7", "vitamin_b9", "vitamin_b12",
    "vitamin_c", "vitamin_d", "vitamin_e", "vitamin_k", "calcium", "iron",
    "phosphorus", "magnesium", "potassium", "chloride", "sulfur", "manganese",
    "copper", "iodine", "cobalt", "fluoride", "selenium", "molybdenum", "chromium",
]

# Micronutrients kept on catalog foods
FOOD_INFO_MICRONUTRIENTS = [
    "potassium", "calcium", "iron", "vitamin_a", "vitamin_c", "magnesium", "phosphorus",
]

# Default daily goals (dashboard)
DEFAULT_GOALS = {
    "calories": 2000,
    "carbs": 250,
    "protein": 150,
    "fats": 44,
    "sodium": 2300,
    "sugar": 36,
    "fiber": 28,
}
GOAL_FIELDS = list(DEFAULT_GOALS.keys())
REMAINING_FIELDS = ["calories", "carbs", "fats", "protein"]

RECENT_FOODS_LIMIT = 10
DEFAULT_FOOD_NAME = "Custom Entry"
