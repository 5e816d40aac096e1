"""
Sheets Service

Appends food log rows to a Google Sheet owned by a service account, via the
Sheets v4 REST API.
"""

import logging
from datetime import date
from typing import Any, Dict, List

from flask import current_app
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account
import requests

from nutrilog.exceptions import ExternalServiceError, ServiceNotConfiguredError
from nutrilog.services.food_constants import MICRONUTRIENT_FIELDS

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
APPEND_URL = "https://sheets.googleapis.com/v4/spreadsheets/{sheet_id}/values/{range}:append"
BASE_COLUMNS = ["date", "meal", "foodName", "quantity", "unit", "calories", "carbs", "fats", "protein"]
SHEET_COLUMNS = BASE_COLUMNS + MICRONUTRIENT_FIELDS

logger = logging.getLogger(__name__)


def format_private_key(raw_key: str) -> str:
    """Keys pasted into .env files usually carry literal \\n sequences and quotes."""
    key = (raw_key or "").strip().strip('"').strip("'")
    return key.replace("\\n", "\n")


def build_row(body: Dict[str, Any]) -> List[Any]:
    micros = dict(body.get("micronutrients") or {})
    values = {
        "date": body.get("date") or date.today().isoformat(),
        "meal": body.get("meal") or "",
        "foodName": body.get("foodName") or "Custom Entry",
        "quantity": str(body["quantity"]) if body.get("quantity") else "1",
        "unit": body.get("unit") or "serving",
        "calories": body.get("calories", ""),
        "carbs": body.get("carbs", ""),
        "fats": body.get("fats", ""),
        "protein": body.get("protein", ""),
    }
    for key in MICRONUTRIENT_FIELDS:
        values[key] = micros.get(key, body.get(key, ""))
    return [values[column] for column in SHEET_COLUMNS]


def _session() -> AuthorizedSession:
    cfg = current_app.config
    if not (cfg.get("GOOGLE_SERVICE_ACCOUNT_EMAIL") and cfg.get("GOOGLE_PRIVATE_KEY") and cfg.get("GOOGLE_FOOD_SHEET_ID")):
        raise ServiceNotConfiguredError("Google Sheets export is not configured")
    credentials = service_account.Credentials.from_service_account_info(
        {
            "type": "service_account",
            "client_email": cfg["GOOGLE_SERVICE_ACCOUNT_EMAIL"],
            "private_key": format_private_key(cfg["GOOGLE_PRIVATE_KEY"]),
            "token_uri": "https://oauth2.googleapis.com/token",
        },
        scopes=SCOPES,
    )
    return AuthorizedSession(credentials)


def append_food_row(body: Dict[str, Any]) -> Dict[str, Any]:
    cfg = current_app.config
    session = _session()
    url = APPEND_URL.format(sheet_id=cfg["GOOGLE_FOOD_SHEET_ID"], range=cfg.get("GOOGLE_FOOD_SHEET_NAME", "food"))
    try:
        resp = session.post(
            url,
            params={"valueInputOption": "USER_ENTERED", "insertDataOption": "INSERT_ROWS"},
            json={"values": [build_row(body)]},
            timeout=15,
        )
    except (GoogleAuthError, requests.RequestException, ValueError) as e:
        logger.error("Google Sheets append failed: %s", e)
        raise ExternalServiceError("Failed to add food entry to the spreadsheet") from e

    if not resp.ok:
        logger.error("Google Sheets returned HTTP %s: %s", resp.status_code, resp.text[:300])
        raise ExternalServiceError("Failed to add food entry to the spreadsheet")
    return resp.json().get("updates", {})
