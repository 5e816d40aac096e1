from datetime import datetime
from nutrilog.extensions import db


class NutritionGoal(db.Model):
    __tablename__ = "nutrition_goals"

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), primary_key=True)
    calories = db.Column(db.Integer, nullable=False)
    carbs = db.Column(db.Integer, nullable=False)
    protein = db.Column(db.Integer, nullable=False)
    fats = db.Column(db.Integer, nullable=False)
    sodium = db.Column(db.Integer, nullable=False)
    sugar = db.Column(db.Integer, nullable=False)
    fiber = db.Column(db.Integer, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
