"""
OpenFoodFacts Service

Thin client for the public OpenFoodFacts API: product lookup by barcode and
free-text product search. Products are mapped to the FoodItem shape the
diary uses, with every nutrient expressed per 100 g.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from flask import current_app

from nutrilog.exceptions import ExternalServiceError
from nutrilog.services.nutrition_service import per_gram_values, to_float

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 25
SEARCH_NUTRIMENTS = [
    "energy-kcal_100g",
    "carbohydrates_100g",
    "fat_100g",
    "proteins_100g",
    "sodium_100g",
    "sugars_100g",
    "fiber_100g",
]
KJ_PER_KCAL = 4.184
USER_AGENT = "NutriLog/1.0 (nutrition diary)"


def _get(path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    base = current_app.config["OPENFOODFACTS_URL"].rstrip("/")
    try:
        resp = requests.get(
            f"{base}{path}",
            params=params,
            timeout=current_app.config.get("OPENFOODFACTS_TIMEOUT", 10),
            headers={"User-Agent": USER_AGENT},
        )
    except requests.RequestException as e:
        logger.error("OpenFoodFacts request failed: %s", e)
        raise ExternalServiceError("Failed to reach the food database") from e

    # v2 answers 404 with a JSON body for unknown products
    if resp.status_code == 404:
        return {"status": 0}
    if not resp.ok:
        logger.error("OpenFoodFacts returned HTTP %s for %s", resp.status_code, path)
        raise ExternalServiceError("Failed to fetch food data from the food database")
    try:
        return resp.json()
    except ValueError as e:
        raise ExternalServiceError("Food database returned an invalid response") from e


def _kcal_100g(nutriments: Dict[str, Any]) -> float:
    for key in ("energy-kcal_100g", "energy-kcal"):
        if nutriments.get(key) is not None:
            return to_float(nutriments[key])
    if nutriments.get("energy_100g") is not None:
        return to_float(nutriments["energy_100g"]) / KJ_PER_KCAL
    return 0.0


def map_product(product: Dict[str, Any], barcode: str) -> Dict[str, Any]:
    """Map an OpenFoodFacts product to a FoodItem (values per 100 g, sodium and potassium in mg)."""
    nutriments = product.get("nutriments") or {}
    nutrients = {
        "calories": _kcal_100g(nutriments),
        "carbs": to_float(nutriments.get("carbohydrates_100g")),
        "fats": to_float(nutriments.get("fat_100g")),
        "protein": to_float(nutriments.get("proteins_100g")),
        "sugar": to_float(nutriments.get("sugars_100g")),
        "fiber": to_float(nutriments.get("fiber_100g")),
        "sodium": to_float(nutriments.get("sodium_100g")) * 1000,
        "potassium": to_float(nutriments.get("potassium_100g")) * 1000,
    }
    serving_quantity = to_float(product.get("serving_quantity"))

    return {
        "foodName": product.get("product_name") or "Unknown Food",
        "brands": product.get("brands") or "",
        "serving_size": "100",
        "unit": "g",
        "serving_label": product.get("serving_size") or None,
        "serving_size_g": serving_quantity or None,
        **{name: round(value, 2) for name, value in nutrients.items()},
        "per_gram": per_gram_values(nutrients, basis="100g"),
        "barcode": barcode,
        "source": "openfoodfacts",
    }


def lookup_barcode(barcode: str) -> Optional[Dict[str, Any]]:
    data = _get(f"/api/v2/product/{barcode}.json")
    product = data.get("product")
    if data.get("status") == 1 and product:
        return map_product(product, barcode)
    return None


def search_products(query: str, page_size: int = SEARCH_PAGE_SIZE) -> List[Dict[str, Any]]:
    data = _get("/cgi/search.pl", params={
        "search_terms": query,
        "search_simple": 1,
        "action": "process",
        "json": 1,
        "page_size": page_size,
    })

    products = []
    for product in data.get("products") or []:
        nutriments = product.get("nutriments") or {}
        products.append({
            "code": product.get("code"),
            "product_name": product.get("product_name") or "Unknown Product",
            "brands": product.get("brands") or "Unknown Brand",
            "serving_size": product.get("serving_size") or "100g",
            "nutriments": {key: nutriments.get(key) for key in SEARCH_NUTRIMENTS},
        })
    return products
