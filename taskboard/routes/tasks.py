"""
Task endpoints for the logged-in user.

Every route here sits behind ``require_session``, so an unauthenticated
request is rejected with 401 before its body is looked at.

Endpoints:
    POST   /add          - Create a task
    GET    /tasks        - List the caller's tasks as JSON
    DELETE /tasks/<id>   - Delete a task
"""

import logging

from flask import Blueprint, Response, current_app, g, jsonify, redirect

from ..auth import get_data_store, require_session
from ..services import add_task, delete_task, list_tasks, parse_task_id
from . import request_data
from .views import DASHBOARD_PAGE

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)


@tasks_bp.route("/add", methods=["POST"])
@require_session
def create_task():
    """
    Create a new task owned by the caller.

    Request Body:
        task: Task text (required)

    Returns:
        302 to the dashboard page, 400 if the text is missing.
    """
    logger.info("POST /add - Creating task for %s", g.username)

    data = request_data()
    add_task(get_data_store(), g.username, data.get("task"))
    return redirect(DASHBOARD_PAGE)


@tasks_bp.route("/tasks", methods=["GET"])
@require_session
def get_tasks() -> tuple[Response, int]:
    """
    List the caller's tasks in the order they were added.

    Returns:
        JSON array of ``{id, task, user}`` objects and 200 status code.
    """
    logger.info("GET /tasks - Fetching tasks for %s", g.username)

    tasks = list_tasks(get_data_store(), g.username)
    return jsonify([task.to_dict() for task in tasks]), 200


@tasks_bp.route("/tasks/<task_id>", methods=["DELETE"])
@require_session
def remove_task(task_id: str) -> tuple[Response, int]:
    """
    Delete a task by id.

    Unknown ids are not an error, and neither is an id that is not a
    number: it simply matches no task.  Unless ENFORCE_TASK_OWNERSHIP is set,
    the task is removed whoever owns it.

    Args:
        task_id: The id as given in the URL; its leading integer is used.

    Returns:
        Plain-text confirmation and 200 status code.
    """
    logger.info("DELETE /tasks/%s - Deleting task", task_id)

    delete_task(
        get_data_store(),
        parse_task_id(task_id),
        requester=g.username,
        enforce_ownership=current_app.config["ENFORCE_TASK_OWNERSHIP"],
    )
    return Response("Task deleted", mimetype="text/plain"), 200
