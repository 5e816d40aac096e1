from flask import Blueprint
from nutrilog.controllers.auth_controller import (
    login_handler,
    signup_handler,
    logout_handler,
    google_login_handler,
    me_handler,
)
from nutrilog.utils.auth import require_auth

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login():
    return login_handler()


@auth_bp.post("/signup")
def signup():
    return signup_handler()


@auth_bp.post("/logout")
def logout():
    return logout_handler()


@auth_bp.post("/google")
def google_login():
    return google_login_handler()


@auth_bp.get("/me")
@require_auth
def me():
    return me_handler()
