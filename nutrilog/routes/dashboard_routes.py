from flask import Blueprint
from nutrilog.controllers.dashboard_controller import dashboard_handler, get_goals_handler, update_goals_handler
from nutrilog.utils.auth import require_auth

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")


@dashboard_bp.get("/dashboard")
@require_auth
def dashboard():
    return dashboard_handler()


@dashboard_bp.get("/goals")
@require_auth
def get_goals():
    return get_goals_handler()


@dashboard_bp.put("/goals")
@require_auth
def update_goals():
    return update_goals_handler()
