import logging

from flask import Flask
from werkzeug.exceptions import HTTPException

from app.extensions import db, migrate, cors
from app.routes import register_routes
from app.utils.http import error


def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)

    level = app.config.get("LOG_LEVEL", "INFO")
    app.logger.setLevel(level)
    logging.getLogger("app").setLevel(level)

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
                  expose_headers=["Content-Type"])

    register_routes(app)
    register_error_handlers(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        return error("NOT_FOUND", "Endpoint not found", 404)

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return error(e.name.upper().replace(" ", "_"), e.description, e.code)
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", e)
        return error("UNKNOWN_ERROR", str(e), 500)
