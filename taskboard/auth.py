"""
Session-based authentication gate.

Provides helpers to open and close a login session and a decorator for
protecting Flask views.  The signed Flask session cookie carries only an
opaque token; the server-side :class:`~taskboard.sessions.SessionStore`
maps it to a username, and the account itself is re-read from the data
store on every protected request so a session never acts on a stale copy
of the user.

Key Concepts Demonstrated:
- Decorator pattern for endpoint authentication (``require_session``)
- Using ``flask.g`` to store request-scoped user identity
- Server-side session records behind an opaque cookie token
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps

from flask import current_app, g, session

from .errors import Unauthorized
from .models import User
from .sessions import SessionStore
from .store import DataStore

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "session_token"


def get_data_store() -> DataStore:
    """Return the data store registered on the current application."""
    return current_app.extensions["taskboard.data_store"]


def get_session_store() -> SessionStore:
    """Return the session store registered on the current application."""
    return current_app.extensions["taskboard.session_store"]


def establish_session(user: User) -> str:
    """
    Open a session for *user* and bind it to the response cookie.

    Any previous session carried by the cookie is destroyed first so a
    login always starts from a fresh token.

    Returns:
        The new session token.
    """
    sessions = get_session_store()
    previous = session.get(SESSION_TOKEN_KEY)
    if previous:
        sessions.destroy(previous)

    token = sessions.create(user.username)
    session.clear()
    session[SESSION_TOKEN_KEY] = token
    # Permanent cookies carry PERMANENT_SESSION_LIFETIME as their max age,
    # which matches the lifetime of the server-side record.
    session.permanent = True
    return token


def end_session() -> None:
    """Destroy the current session, if any, and clear the cookie."""
    token = session.get(SESSION_TOKEN_KEY)
    if token:
        get_session_store().destroy(token)
    session.clear()


def current_user() -> User:
    """
    Resolve the authenticated user for the current request.

    Returns:
        The :class:`User` as currently held by the data store.

    Raises:
        Unauthorized: If no live session is bound to the request or the
            account no longer exists.
        StorageError: If the data store cannot be read.
    """
    token = session.get(SESSION_TOKEN_KEY)
    if not token:
        raise Unauthorized()

    record = get_session_store().get(token)
    if record is None:
        session.pop(SESSION_TOKEN_KEY, None)
        raise Unauthorized()

    user = get_data_store().load().find_user(record.username)
    if user is None:
        logger.warning("Session refers to unknown user %s", record.username)
        get_session_store().destroy(token)
        session.pop(SESSION_TOKEN_KEY, None)
        raise Unauthorized()
    return user


def require_session(view_func: Callable):
    """
    Decorator that enforces an authenticated session on a view.

    On success the resolved account is stored as ``g.user`` and its name
    as ``g.username`` for the wrapped view.  On failure the request is
    short-circuited with :class:`~taskboard.errors.Unauthorized`, which
    the application renders as a 401 response.

    Args:
        view_func: The Flask view function to protect.

    Returns:
        The decorated view function.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        user = current_user()
        g.user = user
        g.username = user.username
        return view_func(*args, **kwargs)

    return wrapper
