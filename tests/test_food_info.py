import pytest


LABEL_FOOD = {
    "foodName": "Greek Yogurt",
    "brands": "Fage",
    "barcode": "5200435000027",
    "source": "barcode",
    "serving_size": "170 g",
    "unit": "g",
    "calories": 170,
    "carbs": 6,
    "fats": 8.5,
    "protein": 17,
    "sodium": 65,
    "calcium": 200,
}


def test_save_food_computes_per_gram_from_serving(client, auth_headers):
    r = client.post("/api/food-info", json=LABEL_FOOD, headers=auth_headers)
    assert r.status_code == 201, r.data
    data = r.get_json()
    assert data["created"] is True
    food = data["food"]
    assert food["serving_size"] == 170.0
    assert food["brands"] == "Fage"
    assert food["calcium"] == 200.0
    assert food["per_gram"]["calories"] == pytest.approx(1.0)
    assert food["per_gram"]["protein"] == pytest.approx(0.1)
    assert food["per_gram"]["calcium"] == pytest.approx(200 / 170)


def test_save_food_dedupes_by_name(client, auth_headers, other_headers):
    first = client.post("/api/food-info", json=LABEL_FOOD, headers=auth_headers).get_json()
    r = client.post("/api/food-info", json={**LABEL_FOOD, "calories": 999}, headers=auth_headers)
    assert r.status_code == 200
    data = r.get_json()
    assert data["created"] is False
    assert data["id"] == first["id"]
    assert data["food"]["calories"] == 170

    # another user's catalog is separate
    assert client.post("/api/food-info", json=LABEL_FOOD, headers=other_headers).status_code == 201


def test_save_food_keeps_supplied_per_gram(client, auth_headers):
    body = {"foodName": "Peanut butter", "serving_size": 32, "perGramValues": {"calories": 5.88, "fats": 0.5}}
    r = client.post("/api/food-info", json=body, headers=auth_headers)
    assert r.status_code == 201
    assert r.get_json()["food"]["per_gram"] == {"calories": 5.88, "fats": 0.5}


def test_save_food_derives_calories_when_missing(client, auth_headers):
    r = client.post("/api/food-info", json={"foodName": "Mix", "carbs": 10, "protein": 10, "fats": 10}, headers=auth_headers)
    assert r.get_json()["food"]["calories"] == 170


def test_save_food_requires_name(client, auth_headers):
    r = client.post("/api/food-info", json={"calories": 10}, headers=auth_headers)
    assert r.status_code == 400
    assert "foodName" in r.get_json()["error"]["details"]


def test_list_foods_paginates_and_searches(client, auth_headers):
    for name, brand in [("Apple", ""), ("Apple pie", "Bakery Co"), ("Banana", ""), ("Cracker", "Apple Farms")]:
        client.post("/api/food-info", json={"foodName": name, "brands": brand, "calories": 50}, headers=auth_headers)

    r = client.get("/api/food-info?search=apple&limit=2&page=1", headers=auth_headers)
    assert r.status_code == 200
    data = r.get_json()
    assert data["total"] == 3
    assert data["pages"] == 2
    assert [f["foodName"] for f in data["items"]] == ["Apple", "Apple pie"]

    r2 = client.get("/api/food-info?search=apple&limit=2&page=2", headers=auth_headers)
    assert [f["foodName"] for f in r2.get_json()["items"]] == ["Cracker"]

    assert client.get("/api/food-info?limit=0", headers=auth_headers).status_code == 400


def test_delete_food(client, auth_headers, other_headers):
    food_id = client.post("/api/food-info", json=LABEL_FOOD, headers=auth_headers).get_json()["id"]

    assert client.delete(f"/api/food-info/{food_id}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/food-info/{food_id}", headers=auth_headers).status_code == 204
    assert client.get("/api/food-info", headers=auth_headers).get_json()["total"] == 0


def test_save_food_rejects_blank_name_and_trims(client, auth_headers):
    r = client.post("/api/food-info", json={"foodName": "   ", "calories": 10}, headers=auth_headers)
    assert r.status_code == 400
    assert "foodName" in r.get_json()["error"]["details"]

    first = client.post("/api/food-info", json={"foodName": "Kefir "}, headers=auth_headers)
    second = client.post("/api/food-info", json={"foodName": " Kefir"}, headers=auth_headers)
    assert first.status_code == 201
    assert second.status_code == 200
    assert second.get_json()["id"] == first.get_json()["id"]


def test_serving_size_text_sets_unit(client, auth_headers):
    r = client.post("/api/food-info", json={"foodName": "Almonds", "serving_size": "1 oz", "calories": 164},
                    headers=auth_headers)
    food = r.get_json()["food"]
    assert food["serving_size"] == 1.0
    assert food["unit"] == "oz"
    assert food["per_gram"]["calories"] == pytest.approx(164 / 28.3495)


def test_concurrent_save_of_same_name_returns_existing(client, app, auth_headers, monkeypatch):
    from nutrilog.services import food_info_service

    first = client.post("/api/food-info", json={"foodName": "Miso soup", "calories": 40}, headers=auth_headers)
    real_find = food_info_service.find_by_name
    lookups = []

    def stale_then_real(user_id, name):
        lookups.append(name)
        # the first lookup runs before the other request committed
        return None if len(lookups) == 1 else real_find(user_id, name)

    monkeypatch.setattr(food_info_service, "find_by_name", stale_then_real)
    r = client.post("/api/food-info", json={"foodName": "Miso soup", "calories": 45}, headers=auth_headers)
    assert r.status_code == 200, r.data
    assert r.get_json()["created"] is False
    assert r.get_json()["id"] == first.get_json()["id"]
    assert len(lookups) == 2
