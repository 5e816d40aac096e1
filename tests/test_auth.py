import datetime as dt

import jwt

from nutrilog.extensions import db
from nutrilog.models.user import User


def test_signup_returns_token_and_lowercases_email(client):
    r = client.post("/api/auth/signup", json={"name": "Ana", "email": "  Ana@Example.COM ", "password": "hunter22"})
    assert r.status_code == 201, r.data
    data = r.get_json()
    assert data["token"]
    assert data["user"]["email"] == "ana@example.com"
    assert data["user"]["name"] == "Ana"

    r2 = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "hunter22"})
    assert r2.status_code == 200


def test_signup_rejects_duplicate_email(client):
    r = client.post("/api/auth/signup", json={"email": "user@example.com", "password": "another1"})
    assert r.status_code == 409
    assert r.get_json()["error"]["code"] == "EMAIL_IN_USE"


def test_signup_validates_password_length(client):
    r = client.post("/api/auth/signup", json={"email": "short@example.com", "password": "abc"})
    assert r.status_code == 400
    assert r.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_login_with_wrong_password(client):
    r = client.post("/api/auth/login", json={"email": "user@example.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.get_json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_login_missing_fields(client):
    r = client.post("/api/auth/login", json={"email": "user@example.com"})
    assert r.status_code == 400


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.get_json()["error"]["code"] == "UNAUTHORIZED"


def test_me_returns_current_user(client, auth_headers):
    r = client.get("/api/auth/me", headers=auth_headers)
    assert r.status_code == 200
    assert r.get_json()["user"]["email"] == "user@example.com"


def test_expired_token_is_rejected(client, app):
    with app.app_context():
        user = User.query.filter_by(email="user@example.com").first()
        past = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=2)
        token = jwt.encode(
            {"sub": str(user.id), "iat": int(past.timestamp()), "exp": int((past + dt.timedelta(hours=1)).timestamp())},
            app.config["SECRET_KEY"],
            algorithm="HS256",
        )
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_for_deleted_user_is_rejected(client, app, auth_headers):
    with app.app_context():
        user = User.query.filter_by(email="user@example.com").first()
        db.session.delete(user)
        db.session.commit()
    assert client.get("/api/auth/me", headers=auth_headers).status_code == 401


def test_logout(client, auth_headers):
    r = client.post("/api/auth/logout", headers=auth_headers)
    assert r.status_code == 200
    assert "message" in r.get_json()


def test_google_login_creates_and_links_users(client, app, monkeypatch):
    claims = {
        "iss": "https://accounts.google.com",
        "sub": "google-123",
        "email": "new.person@gmail.com",
        "name": "New Person",
        "picture": "https://example.com/a.png",
    }
    monkeypatch.setattr("google.oauth2.id_token.verify_oauth2_token", lambda token, request, audience: claims)

    r = client.post("/api/auth/google", json={"token": "google-id-token"})
    assert r.status_code == 200, r.data
    assert r.get_json()["user"]["avatar"] == "https://example.com/a.png"

    # existing email account gets linked instead of duplicated
    claims.update({"sub": "google-456", "email": "user@example.com"})
    r2 = client.post("/api/auth/google", json={"token": "google-id-token"})
    assert r2.status_code == 200
    with app.app_context():
        user = User.query.filter_by(email="user@example.com").first()
        assert user.google_id == "google-456"
        assert user.last_login_at is not None
        assert User.query.count() == 3


def test_google_login_rejects_bad_token(client, monkeypatch):
    def fail(token, request, audience):
        raise ValueError("Wrong number of segments")

    monkeypatch.setattr("google.oauth2.id_token.verify_oauth2_token", fail)
    r = client.post("/api/auth/google", json={"token": "garbage"})
    assert r.status_code == 401
    assert r.get_json()["error"]["code"] == "INVALID_TOKEN"


def test_google_login_requires_token(client):
    assert client.post("/api/auth/google", json={}).status_code == 400
