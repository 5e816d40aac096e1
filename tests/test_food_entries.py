from datetime import date


def _create(client, headers, **overrides):
    body = {"foodName": "Oatmeal", "meal": "breakfast", "date": "2024-05-15", "carbs": 27, "protein": 5, "fats": 2.5}
    body.update(overrides)
    r = client.post("/api/food-entries", json=body, headers=headers)
    assert r.status_code == 201, r.data
    return r.get_json()["entry"]


def test_create_entry_derives_calories_from_macros(client, auth_headers):
    r = client.post("/api/food-entries", headers=auth_headers, json={
        "foodName": "Rice bowl", "meal": "lunch", "date": "2024-05-15",
        "carbs": 10, "protein": 5, "fats": 2,
    })
    assert r.status_code == 201, r.data
    data = r.get_json()
    assert data["success"] is True
    entry = data["entry"]
    # 10*4 + 5*4 + 2*9
    assert entry["calories"] == 78
    assert entry["meal"] == "lunch"
    assert entry["date"] == "2024-05-15"


def test_create_entry_keeps_explicit_calories_and_rounds(client, auth_headers):
    entry = _create(client, auth_headers, calories=151.6, carbs=12.345, sodium=80.04)
    assert entry["calories"] == 152
    assert entry["carbs"] == 12.3
    assert entry["sodium"] == 80.0


def test_create_entry_defaults(client, auth_headers):
    r = client.post("/api/food-entries", headers=auth_headers, json={"calories": 100})
    assert r.status_code == 201, r.data
    entry = r.get_json()["entry"]
    assert entry["foodName"] == "Custom Entry"
    assert entry["meal"] == "snack"
    assert entry["date"] == date.today().isoformat()


def test_snacks_alias_and_timestamp_date(client, auth_headers):
    entry = _create(client, auth_headers, meal="Snacks", date="2024-05-15T18:30:00.000Z")
    assert entry["meal"] == "snack"
    assert entry["date"] == "2024-05-15"


def test_create_entry_rejects_unknown_meal_and_negative_values(client, auth_headers):
    r = client.post("/api/food-entries", headers=auth_headers, json={"meal": "brunch", "calories": 10})
    assert r.status_code == 400
    assert r.get_json()["error"]["code"] == "VALIDATION_ERROR"

    r2 = client.post("/api/food-entries", headers=auth_headers, json={"meal": "lunch", "carbs": -3})
    assert r2.status_code == 400
    assert "carbs" in r2.get_json()["error"]["details"]


def test_micronutrients_are_collected_and_limited(client, auth_headers):
    entry = _create(client, auth_headers, vitamin_c=12.5, micronutrients={"iron": 2})
    assert entry["micronutrients"] == {"vitamin_c": 12.5, "iron": 2.0}

    r = client.post("/api/food-entries", headers=auth_headers, json={"micronutrients": {"unobtainium": 1}})
    assert r.status_code == 400


def test_list_filters_by_date_and_meal(client, auth_headers):
    _create(client, auth_headers, foodName="Eggs", meal="breakfast", date="2024-05-15")
    _create(client, auth_headers, foodName="Soup", meal="dinner", date="2024-05-15")
    _create(client, auth_headers, foodName="Toast", meal="breakfast", date="2024-05-14")

    r = client.get("/api/food-entries?date=2024-05-15", headers=auth_headers)
    assert r.status_code == 200
    assert sorted(e["foodName"] for e in r.get_json()) == ["Eggs", "Soup"]

    r2 = client.get("/api/food-entries?meal=breakfast", headers=auth_headers)
    names = [e["foodName"] for e in r2.get_json()]
    # newest date first
    assert names == ["Eggs", "Toast"]

    assert client.get("/api/food-entries?date=yesterday", headers=auth_headers).status_code == 400


def test_entries_are_private_to_their_owner(client, auth_headers, other_headers):
    entry = _create(client, auth_headers)

    assert client.get("/api/food-entries", headers=other_headers).get_json() == []
    assert client.get(f"/api/food-entries/{entry['food_ky']}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/food-entries/{entry['food_ky']}", headers=other_headers).status_code == 404
    r = client.put(f"/api/food-entries/{entry['food_ky']}", json={"calories": 1}, headers=other_headers)
    assert r.status_code == 404
    assert r.get_json()["error"]["code"] == "NOT_FOUND"


def test_update_entry_partially(client, auth_headers):
    entry = _create(client, auth_headers, calories=200)

    r = client.put(f"/api/food-entries/{entry['food_ky']}", headers=auth_headers, json={"meal": "dinner", "protein": 30})
    assert r.status_code == 200, r.data
    updated = r.get_json()["entry"]
    assert updated["meal"] == "dinner"
    assert updated["protein"] == 30.0
    # untouched fields stay as they were
    assert updated["calories"] == 200
    assert updated["foodName"] == "Oatmeal"
    assert updated["carbs"] == 27.0

    fetched = client.get(f"/api/food-entries/{entry['food_ky']}", headers=auth_headers).get_json()
    assert fetched["meal"] == "dinner"


def test_delete_entry(client, auth_headers):
    entry = _create(client, auth_headers)
    r = client.delete(f"/api/food-entries/{entry['food_ky']}", headers=auth_headers)
    assert r.status_code == 204
    assert client.get(f"/api/food-entries/{entry['food_ky']}", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/food-entries/{entry['food_ky']}", headers=auth_headers).status_code == 404


def test_weekly_totals_cover_monday_to_sunday(client, auth_headers):
    # 2024-05-15 is a Wednesday
    _create(client, auth_headers, date="2024-05-13", calories=500, carbs=10, protein=0, fats=0)
    _create(client, auth_headers, date="2024-05-13", calories=250, carbs=5, protein=0, fats=0)
    _create(client, auth_headers, date="2024-05-19", calories=300, carbs=0, protein=0, fats=0)
    _create(client, auth_headers, date="2024-05-20", calories=999, carbs=0, protein=0, fats=0)

    r = client.get("/api/food-entries/weekly?date=2024-05-15", headers=auth_headers)
    assert r.status_code == 200
    week = r.get_json()
    assert [d["date"] for d in week] == [
        "2024-05-13", "2024-05-14", "2024-05-15", "2024-05-16", "2024-05-17", "2024-05-18", "2024-05-19",
    ]
    assert week[0]["calories"] == 750
    assert week[0]["carbs"] == 15.0
    assert week[1]["calories"] == 0
    assert week[6]["calories"] == 300
    assert set(week[0]) == {"date", "calories", "carbs", "fats", "protein", "sodium", "sugar", "fiber"}


def test_recent_foods_returns_latest_ten(client, auth_headers):
    for i in range(12):
        _create(client, auth_headers, foodName=f"Food {i}")

    r = client.get("/api/recent-foods", headers=auth_headers)
    assert r.status_code == 200
    recent = r.get_json()
    assert len(recent) == 10
    assert recent[0]["foodName"] == "Food 11"
    assert set(recent[0]) == {"food_ky", "foodName", "quantity", "unit", "calories", "carbs", "fats", "protein"}


def test_food_entries_require_auth(client):
    assert client.get("/api/food-entries").status_code == 401
    assert client.post("/api/food-entries", json={}).status_code == 401


def test_blank_food_name_falls_back_to_default(client, auth_headers):
    r = client.post("/api/food-entries", headers=auth_headers, json={"foodName": "   ", "calories": 10})
    assert r.status_code == 201, r.data
    assert r.get_json()["entry"]["foodName"] == "Custom Entry"

    entry = _create(client, auth_headers, foodName="  Porridge ")
    assert entry["foodName"] == "Porridge"


def test_update_rejects_blank_food_name(client, auth_headers):
    entry = _create(client, auth_headers)
    r = client.put(f"/api/food-entries/{entry['food_ky']}", headers=auth_headers, json={"foodName": "  "})
    assert r.status_code == 400
    assert "foodName" in r.get_json()["error"]["details"]
    fetched = client.get(f"/api/food-entries/{entry['food_ky']}", headers=auth_headers).get_json()
    assert fetched["foodName"] == "Oatmeal"
