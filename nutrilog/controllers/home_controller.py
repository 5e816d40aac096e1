from datetime import datetime

from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from nutrilog.extensions import db


def home_index():
    return jsonify({
        "message": "NutriLog API is running",
    })


def health_check():
    db_status = "healthy"
    try:
        db.session.execute(db.text("SELECT 1"))
    except SQLAlchemyError as e:
        current_app.logger.error("Database health check failed: %s", e)
        db_status = f"unhealthy: {e}"

    return jsonify({
        "status": "online",
        "database": db_status,
        "server_time": datetime.utcnow().isoformat() + "Z",
    }), (200 if db_status == "healthy" else 503)
