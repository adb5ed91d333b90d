"""
Page routes for the Taskboard web interface.

The HTML pages themselves are static files.  Login and registration pages
are public (served by Flask's static handler under ``/public``); the task
pages under ``/protected`` are only served to authenticated sessions.

Routes:
    GET  /                       - Redirect to the login or home page
    GET  /health                 - Health check
    GET  /dashboard              - Redirect to the dashboard page
    GET  /protected/<filename>   - Protected static pages
"""

import logging
import os
from pathlib import Path

from flask import Blueprint, Response, current_app, jsonify, redirect, send_from_directory

from ..auth import current_user, require_session
from ..errors import Unauthorized

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)

LOGIN_PAGE = "/public/login.html"
HOME_PAGE = "/protected/index.html"
DASHBOARD_PAGE = "/protected/dashboard.html"


def _protected_folder() -> Path:
    """Directory holding the pages that require a session."""
    return Path(current_app.root_path) / "protected"


@views_bp.route("/")
def index():
    """
    Send visitors to the home page when logged in, to the login page otherwise.

    Uses the same check as the protected routes, so a session whose
    account has gone is sent to the login page.
    """
    try:
        current_user()
    except Unauthorized:
        return redirect(LOGIN_PAGE)
    return redirect(HOME_PAGE)


@views_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "service": "taskboard",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
    }), 200


@views_bp.route("/dashboard", methods=["GET"])
@require_session
def dashboard():
    """Redirect an authenticated user to the dashboard page."""
    return redirect(DASHBOARD_PAGE)


@views_bp.route("/protected/<path:filename>", methods=["GET"])
@require_session
def protected_page(filename: str):
    """
    Serve a static file from the protected folder.

    Args:
        filename: Path of the file relative to the protected folder.

    Returns:
        The file, or 404 if it does not exist.
    """
    logger.info("GET /protected/%s", filename)
    return send_from_directory(_protected_folder(), filename)
