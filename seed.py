from datetime import date, timedelta

from nutrilog import create_app
from nutrilog.extensions import db
from nutrilog.models.user import User
from nutrilog.models.food_entry import FoodEntry
from nutrilog.services.food_info_service import save_food
from nutrilog.services.nutrition_service import calories_from_macros
from werkzeug.security import generate_password_hash

app = create_app()

with app.app_context():
    # ensure tables exist (non-destructive: won't alter existing columns)
    db.create_all()

    user = User.query.filter_by(email="user@example.com").first()
    if not user:
        user = User(name="User Demo", email="user@example.com",
                    password=generate_password_hash("secret"))
        db.session.add(user)
        db.session.commit()

    # name, brand, serving g, carbs, protein, fats, sugar, fiber, sodium (per serving)
    foods = [
        ("Rolled oats", "Quaker", 40, 27.0, 5.0, 2.5, 1.0, 4.0, 0),
        ("Boiled egg", "", 50, 0.6, 6.3, 5.3, 0.6, 0.0, 62),
        ("Banana", "", 118, 27.0, 1.3, 0.4, 14.4, 3.1, 1),
        ("Grilled chicken breast", "", 100, 0.0, 31.0, 3.6, 0.0, 0.0, 74),
        ("White rice", "", 158, 44.5, 4.3, 0.4, 0.1, 0.6, 2),
    ]
    for name, brand, serving_g, carbs, protein, fats, sugar, fiber, sodium in foods:
        save_food(user.id, {
            "food_name": name,
            "brand": brand,
            "source": "manual",
            "serving_size": serving_g,
            "serving_unit": "g",
            "calories": None,
            "carbs": carbs,
            "protein": protein,
            "fats": fats,
            "sugar": sugar,
            "fiber": fiber,
            "sodium": sodium,
        })

    if not FoodEntry.query.filter_by(user_id=user.id).first():
        today = date.today()
        week = [
            (0, "breakfast", "Rolled oats", 27.0, 5.0, 2.5),
            (0, "lunch", "Grilled chicken breast", 0.0, 31.0, 3.6),
            (1, "breakfast", "Boiled egg", 0.6, 6.3, 5.3),
            (1, "snack", "Banana", 27.0, 1.3, 0.4),
            (2, "dinner", "White rice", 44.5, 4.3, 0.4),
        ]
        for days_ago, meal, name, carbs, protein, fats in week:
            db.session.add(FoodEntry(
                user_id=user.id, food_name=name, meal=meal,
                date=today - timedelta(days=days_ago),
                quantity=1, unit="serving",
                calories=calories_from_macros(carbs, protein, fats),
                carbs=carbs, protein=protein, fats=fats,
            ))

    db.session.commit()
    print("Seed completed")
