"""
Routes package for the Taskboard application.

This package contains route blueprints:
- views: landing redirects, health check and protected pages
- auth: registration, login and logout
- tasks: add, list and delete tasks for the logged-in user
"""

from typing import Any

from flask import request


def request_data() -> dict[str, Any]:
    """
    Return the submitted key/value pairs from a JSON or form-encoded body.

    Returns:
        The decoded JSON object, the form fields, or an empty dict.
    """
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
