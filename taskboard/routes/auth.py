"""
Account routes: registration, login and logout.

Request bodies may be JSON or form-encoded.  Failures are raised as
exceptions from :mod:`taskboard.errors` and rendered by the application's
error handler as short plain-text responses.

Endpoints:
    POST /register  - Create a new account
    POST /login     - Authenticate and open a session
    GET  /logout    - Close the session
"""

import logging

from flask import Blueprint, Response, redirect

from ..auth import end_session, establish_session, get_data_store
from ..services import authenticate_user, register_user
from . import request_data
from .views import HOME_PAGE, LOGIN_PAGE

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new user account.

    Request Body:
        username: Login name (required)
        password: Plain-text password (required)

    Returns:
        201 on success, 400 for missing fields or a taken username,
        500 if the data file cannot be accessed.
    """
    logger.info("POST /register - Registering user")

    data = request_data()
    register_user(get_data_store(), data.get("username"), data.get("password"))
    return Response("User registered successfully", mimetype="text/plain"), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Authenticate a user and open a session.

    The deliberately vague "Invalid credentials" message avoids revealing
    whether the username exists.

    Returns:
        302 to the home page with a session cookie on success, 400 for
        missing fields, 401 for bad credentials.
    """
    logger.info("POST /login - Authenticating user")

    data = request_data()
    user = authenticate_user(get_data_store(), data.get("username"), data.get("password"))
    establish_session(user)
    return redirect(HOME_PAGE)


@auth_bp.route("/logout", methods=["GET"])
def logout():
    """Destroy the current session and go back to the login page."""
    logger.info("GET /logout - Closing session")

    end_session()
    return redirect(LOGIN_PAGE)
