from dotenv import load_dotenv
import os

load_dotenv()


def _engine_options(uri: str):
    if not uri.startswith("postgresql"):
        return {}
    # Managed Postgres drops idle connections, so keep the pool short-lived
    return {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_size': 5,
        'max_overflow': 10,
        'pool_timeout': 30,
        'connect_args': {
            'sslmode': 'require',
            'connect_timeout': 10,
        }
    }


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///nutrilog.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI)

    TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "720"))
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")

    # Image/text analysis
    AI_PROVIDER = os.getenv("AI_PROVIDER", "openai")
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    AI_MAX_TOKENS = int(os.getenv("AI_MAX_TOKENS", "1000"))

    OPENFOODFACTS_URL = os.getenv("OPENFOODFACTS_URL", "https://world.openfoodfacts.org")
    OPENFOODFACTS_TIMEOUT = float(os.getenv("OPENFOODFACTS_TIMEOUT", "10"))

    # Spreadsheet export (service account)
    GOOGLE_SERVICE_ACCOUNT_EMAIL = os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL")
    GOOGLE_PRIVATE_KEY = os.getenv("GOOGLE_PRIVATE_KEY")
    GOOGLE_FOOD_SHEET_ID = os.getenv("GOOGLE_FOOD_SHEET_ID")
    GOOGLE_FOOD_SHEET_NAME = os.getenv("GOOGLE_FOOD_SHEET_NAME", "food")
