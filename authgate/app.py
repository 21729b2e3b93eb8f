"""Flask application factory."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .auth import EXTENSION_KEY
from .auth.service import AuthService
from .config import Settings
from .db import init_db
from .exceptions import AuthGateError, InternalError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An internal error occurred"


def configure_logging(level: str) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# ============================================================================
# Error Handlers
# ============================================================================


def handle_internal_error(error: InternalError):
    """Log InternalError in full; return only a generic message."""
    logger.error(f"Internal error: {error.message} {error.details}", exc_info=error)
    return jsonify({
        "error": {
            "type": "InternalError",
            "message": GENERIC_ERROR_MESSAGE
        }
    }), 500


def handle_authgate_error(error: AuthGateError):
    """Handle AuthGateError and its client-facing subclasses."""
    response = {
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), error.status_code


def handle_http_exception(error: HTTPException):
    """Render werkzeug HTTP errors (404, 405, ...) in the same JSON shape."""
    return jsonify({
        "error": {
            "type": error.name.replace(" ", ""),
            "message": error.description
        }
    }), error.code


def handle_unexpected_error(error: Exception):
    """Handle anything not raised as an AuthGateError."""
    logger.exception(f"Unhandled error: {error}")
    return jsonify({
        "error": {
            "type": "InternalServerError",
            "message": GENERIC_ERROR_MESSAGE
        }
    }), 500


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(InternalError, handle_internal_error)
    app.register_error_handler(AuthGateError, handle_authgate_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected_error)


# ============================================================================
# Factory
# ============================================================================


def create_app(settings: Settings | None = None) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Configuration for this process. Loaded from the
            environment when omitted.

    Returns:
        Configured Flask app with the database initialized
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["AUTHGATE_SETTINGS"] = settings
    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    init_db(settings.database_path)
    app.extensions[EXTENSION_KEY] = AuthService.from_settings(settings)

    register_error_handlers(app)

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok"})

    from .api import auth_bp, protected_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(protected_bp)

    logger.info("AuthGate application created")
    return app
