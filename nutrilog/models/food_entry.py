from datetime import datetime
from nutrilog.extensions import db


class FoodEntry(db.Model):
    """A single logged consumption event in a user's food diary."""
    __tablename__ = "food_entries"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    food_name = db.Column(db.String(255), nullable=False)
    meal = db.Column(db.String(20), nullable=False, default="snack")
    date = db.Column(db.Date, nullable=False, index=True)
    quantity = db.Column(db.Numeric(10, 2), nullable=True)
    unit = db.Column(db.String(20), nullable=True)
    calories = db.Column(db.Integer, nullable=False, default=0)
    carbs = db.Column(db.Numeric(10, 1), nullable=False, default=0)
    fats = db.Column(db.Numeric(10, 1), nullable=False, default=0)
    protein = db.Column(db.Numeric(10, 1), nullable=False, default=0)
    sodium = db.Column(db.Numeric(10, 1), nullable=False, default=0)
    sugar = db.Column(db.Numeric(10, 1), nullable=False, default=0)
    fiber = db.Column(db.Numeric(10, 1), nullable=False, default=0)
    micronutrients = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "food_ky": self.id,
            "userId": self.user_id,
            "foodName": self.food_name,
            "meal": self.meal,
            "date": self.date.isoformat() if self.date else None,
            "quantity": float(self.quantity) if self.quantity is not None else None,
            "unit": self.unit,
            "calories": int(self.calories or 0),
            "carbs": float(self.carbs or 0),
            "fats": float(self.fats or 0),
            "protein": float(self.protein or 0),
            "sodium": float(self.sodium or 0),
            "sugar": float(self.sugar or 0),
            "fiber": float(self.fiber or 0),
            "micronutrients": self.micronutrients or {},
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<FoodEntry {self.id}: {self.food_name} ({self.meal} {self.date})>"
