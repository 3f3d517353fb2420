"""Flask application entry point."""

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import settings
from .db import EXTENSION_KEY, Database, create_database
from .exceptions import (
    AuthenticationError,
    DatabaseError,
    InkwellError,
    InvalidTokenError,
    ResourceNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)


# Status code per exception type; subclasses not listed here fall back to 500
ERROR_STATUS = {
    ValidationError: 400,
    DatabaseError: 400,
    AuthenticationError: 401,
    InvalidTokenError: 403,
    ResourceNotFound: 404,
}


def configure_logging():
    """Configure root logging once per process."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# Error handlers
def handle_inkwell_error(error: InkwellError):
    """Handle InkwellError exceptions."""
    status = ERROR_STATUS.get(type(error), 500)
    response = {"error": error.message}
    if error.details:
        response["details"] = error.details
    if status == 500:
        logger.error(f"{error.__class__.__name__}: {error.message}")
        response = {"error": "Server error"}
    return jsonify(response), status


def handle_http_error(error: HTTPException):
    """Handle werkzeug HTTP errors (404 routes, 405 methods) as JSON."""
    return jsonify({"error": error.description}), error.code


def handle_internal_error(error: Exception):
    """Handle any other exception without leaking its detail."""
    logger.exception(f"Internal error on {request.method} {request.path}: {error}")
    return jsonify({"error": "Server error"}), 500


def set_security_headers(response):
    """Add security headers to every response."""
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    response.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
    response.headers.setdefault(
        "Content-Security-Policy",
        "default-src 'none'; frame-ancestors 'none'; base-uri 'none'",
    )
    if settings.production:
        response.headers.setdefault(
            "Strict-Transport-Security",
            "max-age=15552000; includeSubDomains",
        )
    return response


def create_app(database: Database | None = None) -> Flask:
    """
    Create the Flask application.

    Args:
        database: Database gateway to serve requests with. When omitted it
            is built from settings (see db.create_database).

    Returns:
        Configured Flask app

    Raises:
        ConfigurationError: If no database is given and settings are incomplete
    """
    configure_logging()

    app = Flask(__name__)

    # CORS configuration
    CORS(app, origins=[settings.frontend_origin], supports_credentials=True)

    if database is None:
        database = create_database(settings)
    app.extensions[EXTENSION_KEY] = database

    app.register_error_handler(InkwellError, handle_inkwell_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)
    app.after_request(set_security_headers)

    # Health check endpoint
    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok"})

    # Register blueprints
    from .api.posts import posts_bp
    from .auth.api import auth_bp
    from .auth.google import google_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(google_bp)
    app.register_blueprint(posts_bp)

    logger.info(f"Inkwell app created with {database.backend} database")
    return app


if __name__ == "__main__":
    create_app().run(port=settings.port)
