from marshmallow import Schema, fields, validate, pre_load, validates_schema, ValidationError, EXCLUDE

from nutrilog.services.food_constants import (
    MEAL_TYPES,
    MEAL_ALIASES,
    DEFAULT_MEAL,
    DEFAULT_FOOD_NAME,
    NUTRIENT_FIELDS,
    MICRONUTRIENT_FIELDS,
    FOOD_INFO_MICRONUTRIENTS,
    GOAL_FIELDS,
)
from nutrilog.utils.units import parse_quantity

NonNegative = validate.Range(min=0)


def _blank_to_none(data, names):
    for name in names:
        if data.get(name) == "":
            data[name] = None
    return data


def _collect_micronutrients(data, allowed):
    """Micronutrients may arrive flattened at the top level of the body."""
    micros = dict(data.get("micronutrients") or {})
    for key in allowed:
        if key in data:
            micros[key] = data.pop(key)
    micros = {k: v for k, v in micros.items() if v not in (None, "")}
    if micros or "micronutrients" in data:
        data["micronutrients"] = micros
    return data


class FoodEntrySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    food_name = fields.Str(data_key="foodName", load_default=DEFAULT_FOOD_NAME, validate=validate.Length(min=1, max=255))
    meal = fields.Str(load_default=DEFAULT_MEAL, validate=validate.OneOf(MEAL_TYPES))
    date = fields.Date(allow_none=True, load_default=None)
    quantity = fields.Float(allow_none=True, validate=NonNegative)
    unit = fields.Str(allow_none=True, validate=validate.Length(max=20))
    calories = fields.Float(allow_none=True, load_default=None, validate=NonNegative)
    carbs = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    fats = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    protein = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    sodium = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    sugar = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    fiber = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    micronutrients = fields.Dict(
        keys=fields.Str(validate=validate.OneOf(MICRONUTRIENT_FIELDS)),
        values=fields.Float(validate=NonNegative),
    )

    @pre_load
    def normalize(self, data, **kwargs):
        data = dict(data)
        if isinstance(data.get("foodName"), str):
            name = data["foodName"].strip()
            # A blank name means "no name" on create; on update it stays blank and fails validation
            if name or kwargs.get("partial"):
                data["foodName"] = name
            else:
                data.pop("foodName")
        if isinstance(data.get("meal"), str):
            meal = data["meal"].strip().lower()
            data["meal"] = MEAL_ALIASES.get(meal, meal)
        # Timestamps are accepted; only the calendar day is kept
        if isinstance(data.get("date"), str) and len(data["date"]) > 10:
            data["date"] = data["date"][:10]
        if data.get("date") == "":
            data["date"] = None
        data = _blank_to_none(data, NUTRIENT_FIELDS + ["quantity"])
        return _collect_micronutrients(data, MICRONUTRIENT_FIELDS)


class FoodInfoSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    food_name = fields.Str(data_key="foodName", required=True, validate=validate.Length(min=1, max=255))
    brand = fields.Str(data_key="brands", allow_none=True, load_default=None)
    barcode = fields.Str(allow_none=True, load_default=None, validate=validate.Length(max=32))
    source = fields.Str(load_default="manual", validate=validate.OneOf(["manual", "barcode", "label", "search", "image", "text"]))
    serving_size = fields.Float(load_default=100, validate=NonNegative)
    serving_unit = fields.Str(data_key="unit", load_default="g")
    calories = fields.Float(allow_none=True, load_default=None, validate=NonNegative)
    carbs = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    fats = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    protein = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    sodium = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    sugar = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    fiber = fields.Float(allow_none=True, load_default=0, validate=NonNegative)
    micronutrients = fields.Dict(
        keys=fields.Str(validate=validate.OneOf(FOOD_INFO_MICRONUTRIENTS)),
        values=fields.Float(validate=NonNegative),
        load_default=dict,
    )
    per_gram = fields.Dict(keys=fields.Str(), values=fields.Float(validate=NonNegative), allow_none=True, load_default=None)

    @pre_load
    def normalize(self, data, **kwargs):
        data = dict(data)
        if isinstance(data.get("foodName"), str):
            data["foodName"] = data["foodName"].strip()
        # Scanned foods carry the serving size as text ("30", "30 g")
        size = data.get("serving_size")
        if isinstance(size, str):
            number, unit = parse_quantity(size)
            data["serving_size"] = number
            if unit and not data.get("unit"):
                data["unit"] = unit
        if data.get("serving_size") in ("", None):
            data.pop("serving_size", None)
        if "perGramValues" in data and "per_gram" not in data:
            data["per_gram"] = data.pop("perGramValues")
        data.pop("perGramValues", None)
        data = _blank_to_none(data, NUTRIENT_FIELDS)
        return _collect_micronutrients(data, FOOD_INFO_MICRONUTRIENTS)


class FoodInfoQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    limit = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))
    search = fields.Str(allow_none=True, load_default=None)


class GoalSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    calories = fields.Int(validate=validate.Range(min=0, max=20000))
    carbs = fields.Int(validate=validate.Range(min=0, max=2000))
    protein = fields.Int(validate=validate.Range(min=0, max=2000))
    fats = fields.Int(validate=validate.Range(min=0, max=2000))
    sodium = fields.Int(validate=validate.Range(min=0, max=50000))
    sugar = fields.Int(validate=validate.Range(min=0, max=2000))
    fiber = fields.Int(validate=validate.Range(min=0, max=2000))

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not any(field in data for field in GOAL_FIELDS):
            raise ValidationError("At least one goal is required", field_name="_schema")


class NutritionCalculateSchema(Schema):
    per_gram = fields.Dict(keys=fields.Str(), values=fields.Float(validate=NonNegative), load_default=None, allow_none=True)
    nutrients = fields.Dict(keys=fields.Str(), values=fields.Float(validate=NonNegative), load_default=None, allow_none=True)
    basis = fields.Str(load_default="100g", validate=validate.OneOf(["100g", "serving"]))
    serving_size_g = fields.Float(allow_none=True, load_default=None)
    amount = fields.Float(required=True, validate=NonNegative)
    unit = fields.Str(load_default="g")

    @validates_schema
    def validate_source(self, data, **kwargs):
        if not data.get("per_gram") and not data.get("nutrients"):
            raise ValidationError("per_gram or nutrients is required", field_name="per_gram")
