"""
Business logic for accounts and tasks.

Every function takes the :class:`~taskboard.store.DataStore` to operate on
and raises the exceptions from :mod:`taskboard.errors` on failure, so the
same logic is usable from the HTTP routes, scripts and tests alike.
Mutations run inside a single store transaction: load, change in memory,
save.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from typing import Any

from .errors import DuplicateUser, InvalidCredentials, InvalidInput
from .models import Snapshot, Task, User
from .store import DataStore

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _validate_required_fields(
    fields: dict[str, Any], message: str = "Invalid input"
) -> None:
    """
    Check that every value in *fields* is a non-empty string.

    Args:
        fields: Mapping of field name to the submitted value.
        message: Error message to raise with.

    Raises:
        InvalidInput: On the first missing, empty or non-string value.
    """
    for name, value in fields.items():
        if not isinstance(value, str) or not value:
            logger.warning("Validation failed: '%s' is required", name)
            raise InvalidInput(message)


def next_task_id(snapshot: Snapshot, now_ms: int) -> int:
    """
    Derive a fresh task id from the current time in milliseconds.

    The timestamp is bumped past the largest existing id when needed, so
    ids stay unique and strictly increasing even for several tasks created
    within the same millisecond.
    """
    highest = max((task.id for task in snapshot.tasks), default=0)
    return max(now_ms, highest + 1)


def parse_task_id(raw: str) -> int | None:
    """
    Read the integer at the start of *raw*, ignoring leading whitespace.

    Trailing characters are ignored, so ``"42abc"`` gives 42.  Returns
    ``None`` when *raw* does not start with a number; such an id matches
    no task.
    """
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


# =====================================================================
# Users
# =====================================================================


def register_user(store: DataStore, username: Any, password: Any) -> User:
    """
    Create a new account.

    Args:
        store: Data store to write to.
        username: Requested login name (exact, case-sensitive).
        password: Plain-text password; only its hash is persisted.

    Returns:
        The created :class:`User`.

    Raises:
        InvalidInput: If either field is missing or empty.
        DuplicateUser: If the username is already registered.
        StorageError: If the data file cannot be read or written.
    """
    _validate_required_fields({"username": username, "password": password})

    with store.transaction() as snapshot:
        if snapshot.find_user(username) is not None:
            logger.warning("Registration rejected, %s already exists", username)
            raise DuplicateUser()
        user = User.create(username, password)
        snapshot.users.append(user)

    logger.info("Registered user %s", username)
    return user


def authenticate_user(store: DataStore, username: Any, password: Any) -> User:
    """
    Check a username/password pair.

    An unknown username and a wrong password produce the same error, and a
    dummy hash verification runs for unknown usernames so both paths take
    comparable time.

    Returns:
        The matching :class:`User`.

    Raises:
        InvalidInput: If either field is missing or empty.
        InvalidCredentials: If the credentials do not match an account.
        StorageError: If the data file cannot be read.
    """
    _validate_required_fields({"username": username, "password": password})

    user = store.load().find_user(username)
    if user is None:
        User.burn_verification(password)
        logger.warning("Failed login for %s", username)
        raise InvalidCredentials()
    if not user.check_password(password):
        logger.warning("Failed login for %s", username)
        raise InvalidCredentials()

    logger.info("User %s authenticated", username)
    return user


# =====================================================================
# Tasks
# =====================================================================


def add_task(
    store: DataStore,
    owner: str,
    text: Any,
    clock: Callable[[], float] = time.time,
) -> Task:
    """
    Append a task owned by *owner*.

    Args:
        store: Data store to write to.
        owner: Username of the authenticated caller.
        text: Task description, stored as submitted.
        clock: Source of the current time in seconds.

    Returns:
        The created :class:`Task`.

    Raises:
        InvalidInput: If *text* is missing or empty.
        StorageError: If the data file cannot be read or written.
    """
    _validate_required_fields({"task": text}, message="Task is required")

    with store.transaction() as snapshot:
        task = Task(
            id=next_task_id(snapshot, int(clock() * 1000)),
            text=text,
            owner=owner,
        )
        snapshot.tasks.append(task)

    logger.info("Created task %s for %s", task.id, owner)
    return task


def list_tasks(store: DataStore, owner: str) -> list[Task]:
    """Return the tasks owned by *owner*, in insertion order."""
    tasks = [task for task in store.load().tasks if task.owner == owner]
    logger.info("Found %d tasks for %s", len(tasks), owner)
    return tasks


def delete_task(
    store: DataStore,
    task_id: int | None,
    requester: str,
    enforce_ownership: bool = False,
) -> int:
    """
    Remove the task(s) with id *task_id*.

    Without ownership enforcement any authenticated requester may remove
    any task.  Deleting an unknown id is not an error.

    Args:
        store: Data store to write to.
        task_id: Identifier of the task to remove; ``None`` matches nothing.
        requester: Username of the authenticated caller.
        enforce_ownership: Only remove tasks owned by *requester*.

    Returns:
        The number of tasks removed (0 or 1 in practice).

    Raises:
        StorageError: If the data file cannot be read or written.
    """

    def _matches(task: Task) -> bool:
        if task.id != task_id:
            return False
        return not enforce_ownership or task.owner == requester

    with store.transaction() as snapshot:
        remaining = [task for task in snapshot.tasks if not _matches(task)]
        removed = len(snapshot.tasks) - len(remaining)
        snapshot.tasks = remaining

    for_owner = " (owner only)" if enforce_ownership else ""
    logger.info("Deleted %d task(s) with id %s%s, requested by %s",
                removed, task_id, for_owner, requester)
    return removed
