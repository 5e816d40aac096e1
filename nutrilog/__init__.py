from flask import Flask, request
from werkzeug.exceptions import HTTPException

from nutrilog.extensions import db, cors, migrate
from nutrilog.routes import register_routes
from nutrilog.utils.http import error


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object("nutrilog.config.Config")
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize database
    db.init_app(app)

    # Initialize Flask-Migrate
    migrate.init_app(app, db)

    # CORS Configuration
    cors.init_app(app,
                  origins=app.config["CORS_ORIGINS"],
                  supports_credentials=True,
                  allow_headers=["Content-Type", "Authorization"],
                  methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                  expose_headers=["Content-Type", "Authorization"])

    # Make sure every model is registered on the metadata
    from nutrilog import models  # noqa: F401

    register_routes(app)
    register_error_handlers(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        code = e.name.upper().replace(" ", "_")
        return error(code, e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        app.logger.exception("Unhandled error on %s", request.path)
        return error("UNKNOWN_ERROR", "Internal server error", 500)
