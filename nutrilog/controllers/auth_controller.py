from datetime import datetime

from flask import request, current_app
from google.auth.exceptions import GoogleAuthError

from nutrilog.extensions import db
from nutrilog.models.user import User
from nutrilog.utils.auth import create_token, check_password_hash, hash_password
from nutrilog.utils.http import ok, error, json_body

GOOGLE_ISSUERS = ["accounts.google.com", "https://accounts.google.com"]


def _session_payload(user: User):
    return {"token": create_token(user.id), "user": user.to_dict()}


def login_handler():
    data = json_body()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email or not password:
        return error("VALIDATION_ERROR", "email and password required", 400)

    user = User.query.filter_by(email=email).first()
    # Google-only accounts have no password to check
    if not user or not user.password or not check_password_hash(user.password, password):
        return error("INVALID_CREDENTIALS", "Email or password incorrect", 401)

    user.last_login_at = datetime.utcnow()
    db.session.commit()
    return ok(_session_payload(user))


def signup_handler():
    data = json_body()
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email or not password:
        return error("VALIDATION_ERROR", "email and password required", 400)
    if "@" not in email:
        return error("VALIDATION_ERROR", "email is not valid", 400)
    if len(password) < 6:
        return error("VALIDATION_ERROR", "password must be at least 6 characters", 400)
    if User.query.filter_by(email=email).first():
        return error("EMAIL_IN_USE", "email already registered", 409)
    try:
        user = User(
            name=name or email.split("@")[0],
            email=email,
            password=hash_password(password),
            last_login_at=datetime.utcnow(),
        )
        db.session.add(user)
        db.session.commit()
        current_app.logger.info("New account %s", user.id)
        return ok(_session_payload(user), 201)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Signup failed")
        return error("UNKNOWN_ERROR", str(e), 500)


def logout_handler():
    """
    Tokens are stateless, so logging out is the client discarding its token.
    This endpoint only confirms the action.
    """
    return ok({"message": "Logged out successfully"})


def me_handler():
    user = db.session.get(User, request.user_id)
    return ok({"user": user.to_dict()})


def google_login_handler():
    data = json_body()
    token = data.get("token") or data.get("id_token")
    if not token:
        return error("VALIDATION_ERROR", "Token required", 400)

    client_id = current_app.config.get("GOOGLE_CLIENT_ID")
    if not client_id:
        return error("SERVICE_NOT_CONFIGURED", "Google sign-in is not configured", 503)

    try:
        from google.oauth2 import id_token
        from google.auth.transport import requests as google_requests

        id_info = id_token.verify_oauth2_token(token, google_requests.Request(), audience=client_id)
    except (ValueError, GoogleAuthError) as e:
        return error("INVALID_TOKEN", f"Token verification failed: {e}", 401)

    if id_info.get("iss") not in GOOGLE_ISSUERS:
        return error("INVALID_TOKEN", "Invalid issuer", 401)

    google_id = id_info["sub"]
    email = (id_info.get("email") or "").strip().lower()
    if not email:
        return error("INVALID_TOKEN", "Email not found in token", 400)

    try:
        user = User.query.filter((User.google_id == google_id) | (User.email == email)).first()
        if user:
            # Link an existing email account on first Google sign-in
            if not user.google_id:
                user.google_id = google_id
            if not user.avatar and id_info.get("picture"):
                user.avatar = id_info["picture"]
        else:
            user = User(
                name=id_info.get("name") or email.split("@")[0],
                email=email,
                google_id=google_id,
                avatar=id_info.get("picture"),
            )
            db.session.add(user)
        user.last_login_at = datetime.utcnow()
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Google sign-in failed")
        return error("UNKNOWN_ERROR", str(e), 500)

    return ok(_session_payload(user))
