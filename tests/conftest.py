import pytest
from werkzeug.security import generate_password_hash

from nutrilog import create_app
from nutrilog.extensions import db
from nutrilog.models.user import User


TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "SQLALCHEMY_ENGINE_OPTIONS": {},
    "SECRET_KEY": "test-secret",
    "GOOGLE_CLIENT_ID": "test-client-id.apps.googleusercontent.com",
    "OPENAI_API_KEY": None,
    "GEMINI_API_KEY": None,
    "GOOGLE_SERVICE_ACCOUNT_EMAIL": None,
    "GOOGLE_PRIVATE_KEY": None,
    "GOOGLE_FOOD_SHEET_ID": None,
}


@pytest.fixture()
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        for name, email in [("User Demo", "user@example.com"), ("Other User", "other@example.com")]:
            db.session.add(User(name=name, email=email, password=generate_password_hash("secret")))
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def login(client, email):
    r = client.post("/api/auth/login", json={"email": email, "password": "secret"})
    assert r.status_code == 200, r.data
    return {"Authorization": f"Bearer {r.get_json()['token']}"}


@pytest.fixture()
def auth_headers(client):
    return login(client, "user@example.com")


@pytest.fixture()
def other_headers(client):
    return login(client, "other@example.com")
