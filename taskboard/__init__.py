"""
Flask application factory module.

This module creates and configures the Taskboard application using
the factory pattern, allowing for different configurations
(development, testing, production).
"""

import logging

from flask import Flask, Response

from config import get_config

from .errors import StorageError, TaskboardError
from .sessions import SessionStore
from .store import JsonFileStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _handle_taskboard_error(error: TaskboardError) -> Response:
    """Render an application error as a short plain-text response."""
    if isinstance(error, StorageError):
        logger.error("Storage failure: %s", error)
    return Response(error.message, status=error.status_code, mimetype="text/plain")


def _handle_internal_error(error: Exception) -> Response:
    """Handle 500 Internal Server errors."""
    logger.error("Internal server error: %s", error)
    return Response("Server error", status=500, mimetype="text/plain")


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__, static_folder="public", static_url_path="/public")

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating app with config: %s", config_class.__name__)

    # Process-wide state: the data file is created on startup if absent.
    # Both stores write through immediately, so nothing needs flushing on
    # shutdown; sessions live in memory and end with the process.
    data_store = JsonFileStore(app.config["DATA_FILE"])
    data_store.initialize()
    app.extensions["taskboard.data_store"] = data_store
    app.extensions["taskboard.session_store"] = SessionStore(
        lifetime_seconds=app.config["SESSION_LIFETIME_SECONDS"]
    )
    logger.info("Using data file %s", data_store.path)

    # Register blueprints
    from .routes.auth import auth_bp
    from .routes.tasks import tasks_bp
    from .routes.views import views_bp

    app.register_blueprint(views_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(tasks_bp)

    app.register_error_handler(TaskboardError, _handle_taskboard_error)
    app.register_error_handler(500, _handle_internal_error)

    return app
