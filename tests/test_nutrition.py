import pytest

from nutrilog.services.nutrition_service import (
    calories_from_macros,
    net_carbs,
    per_gram_values,
    remaining_against_goals,
    scale_nutrients,
    sum_nutrients,
)
from nutrilog.utils.units import convert_from_grams, convert_to_grams, grams_per_unit


@pytest.mark.parametrize("unit, grams", [
    ("g", 1.0),
    ("oz", 28.3495),
    ("cup", 236.588),
    ("TBSP", 14.7868),
    ("tsp", 4.92892),
    ("handful", 1.0),
    (None, 1.0),
])
def test_grams_per_unit(unit, grams):
    assert grams_per_unit(unit) == grams


def test_convert_round_trip_for_cups():
    grams = convert_to_grams(2, "cup")
    assert grams == pytest.approx(473.176)
    assert convert_from_grams(grams, "cup") == pytest.approx(2)


def test_calories_from_macros():
    assert calories_from_macros(10, 5, 2) == 78
    assert calories_from_macros(None, "", 1) == 9


def test_per_gram_values_per_100g_and_per_serving():
    per_100 = per_gram_values({"calories": 250, "protein": 10}, basis="100g")
    assert per_100 == {"calories": 2.5, "protein": 0.1}

    per_serving = per_gram_values({"calories": 120, "carbs": None}, basis="serving", serving_size_g=30)
    assert per_serving["calories"] == pytest.approx(4.0)
    assert per_serving["carbs"] == 0.0


@pytest.mark.parametrize("size", [0, -5, None])
def test_per_gram_values_guards_bad_serving_size(size):
    assert per_gram_values({"calories": 200}, basis="serving", serving_size_g=size) == {"calories": 2.0}


def test_scale_nutrients_rounds_calories_to_int():
    per_gram = {"calories": 3.89, "protein": 0.169, "carbs": 0.663}
    scaled = scale_nutrients(per_gram, 1.5, "oz")
    grams = 1.5 * 28.3495
    assert scaled["calories"] == round(3.89 * grams)
    assert isinstance(scaled["calories"], int)
    assert scaled["protein"] == round(0.169 * grams, 1)
    assert scaled["carbs"] == round(0.663 * grams, 1)


def test_daily_totals_and_remaining():
    rows = [
        {"calories": 500, "carbs": 60.25, "fats": 10, "protein": 20, "fiber": 5},
        {"calories": 300, "carbs": 30, "fats": 5, "protein": 10, "fiber": 3},
    ]
    totals = sum_nutrients(rows)
    assert totals["calories"] == 800
    assert totals["carbs"] == 90.2
    assert totals["sodium"] == 0.0

    remaining = remaining_against_goals(totals, {"calories": 700, "carbs": 250, "fats": 44, "protein": 150})
    assert remaining == {"calories": -100, "carbs": 159.8, "fats": 29.0, "protein": 120.0}
    assert net_carbs(totals) == 82.2


def test_calculate_endpoint_from_per_100g(client, auth_headers):
    r = client.post("/api/nutrition/calculate", headers=auth_headers, json={
        "nutrients": {"calories": 389, "carbs": 66.3, "protein": 16.9, "fats": 6.9},
        "basis": "100g",
        "amount": 0.5,
        "unit": "cup",
    })
    assert r.status_code == 200, r.data
    data = r.get_json()
    assert data["grams"] == 118.29
    assert data["nutrients"]["calories"] == round(3.89 * 118.294)
    assert data["nutrients"]["protein"] == 20.0
    assert data["calories_from_macros"] == calories_from_macros(
        data["nutrients"]["carbs"], data["nutrients"]["protein"], data["nutrients"]["fats"]
    )


def test_calculate_endpoint_from_per_gram(client, auth_headers):
    r = client.post("/api/nutrition/calculate", headers=auth_headers, json={
        "per_gram": {"calories": 2, "fats": 0.1},
        "amount": 50,
    })
    assert r.status_code == 200
    assert r.get_json()["nutrients"] == {"calories": 100, "fats": 5.0}


def test_calculate_endpoint_validation(client, auth_headers):
    r = client.post("/api/nutrition/calculate", headers=auth_headers, json={"amount": 10})
    assert r.status_code == 400
    r2 = client.post("/api/nutrition/calculate", headers=auth_headers, json={"per_gram": {"calories": 1}})
    assert r2.status_code == 400
