"""
Error taxonomy for the Taskboard application.

Every failure a request can hit maps to one of the exceptions below.  Each
carries the HTTP status code and the short plain-text message that the
application's error handler sends back to the client.
"""

from __future__ import annotations


class TaskboardError(Exception):
    """Base class for errors surfaced directly to the HTTP caller."""

    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(TaskboardError):
    """A required field is missing, empty or of the wrong type."""

    status_code = 400
    message = "Invalid input"


class DuplicateUser(TaskboardError):
    """Registration attempted with a username that already exists."""

    status_code = 400
    message = "User already exists"


class InvalidCredentials(TaskboardError):
    """Unknown username or wrong password; the two are indistinguishable."""

    status_code = 401
    message = "Invalid credentials"


class Unauthorized(TaskboardError):
    """No live session is bound to the request."""

    status_code = 401
    message = "Unauthorized"


class StorageError(TaskboardError):
    """The data file could not be read, parsed or written."""

    status_code = 500
    message = "Server error"

    def __init__(self, detail: str):
        # The detail goes to the logs; clients only ever see "Server error".
        super().__init__()
        self.detail = detail

    def __str__(self) -> str:
        return self.detail
