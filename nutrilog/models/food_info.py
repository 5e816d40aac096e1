from datetime import datetime
from nutrilog.extensions import db


class FoodInfo(db.Model):
    """
    Reusable catalog food. Nutrient columns hold the values for one serving
    of ``serving_size`` ``serving_unit``; ``per_gram`` is derived once when the
    food is saved and never recomputed.
    """
    __tablename__ = "food_info"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    food_name = db.Column(db.String(255), nullable=False)
    brand = db.Column(db.String(255), nullable=True)
    barcode = db.Column(db.String(32), nullable=True, index=True)
    source = db.Column(db.String(32), nullable=False, default="manual")  # manual, barcode, label, search, image
    serving_size = db.Column(db.Numeric(10, 2), nullable=False, default=100)
    serving_unit = db.Column(db.String(20), nullable=False, default="g")
    calories = db.Column(db.Integer, nullable=False, default=0)
    carbs = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    fats = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    protein = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    sodium = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    sugar = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    fiber = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    micronutrients = db.Column(db.JSON, nullable=True)
    per_gram = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('user_id', 'food_name', name='uq_food_info_user_name'),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "foodName": self.food_name,
            "brands": self.brand or "",
            "barcode": self.barcode,
            "source": self.source,
            "serving_size": float(self.serving_size),
            "unit": self.serving_unit,
            "calories": int(self.calories or 0),
            "carbs": float(self.carbs or 0),
            "fats": float(self.fats or 0),
            "protein": float(self.protein or 0),
            "sodium": float(self.sodium or 0),
            "sugar": float(self.sugar or 0),
            "fiber": float(self.fiber or 0),
            **(self.micronutrients or {}),
            "per_gram": self.per_gram or {},
        }

    def __repr__(self):
        return f"<FoodInfo {self.id}: {self.food_name}>"
