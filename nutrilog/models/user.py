from datetime import datetime
from nutrilog.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=True)  # NULL for Google-only accounts
    google_id = db.Column(db.String(255), unique=True, nullable=True)
    avatar = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    last_login_at = db.Column(db.DateTime, nullable=True)

    food_entries = db.relationship("FoodEntry", backref="user", lazy="dynamic", cascade="all, delete-orphan")
    foods = db.relationship("FoodInfo", backref="user", lazy="dynamic", cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
        }

    def __repr__(self):
        return f"<User {self.id}: {self.email}>"
