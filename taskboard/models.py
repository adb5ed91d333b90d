"""
Data models for the Taskboard application.

This module defines the records held in the data file and the snapshot
aggregate that is loaded and saved as a whole on every operation.  Each
model knows how to convert itself to and from the JSON layout used on
disk, which is also the layout returned by the API.

Key Concepts Demonstrated:
- Dataclass models with explicit serialisation helpers
- Werkzeug password hashing (scrypt by default)
- Strict shape validation when reading persisted data
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    """Hash used to keep failed lookups as slow as real verifications."""
    return generate_password_hash("taskboard-timing-equaliser")


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    """Return ``data[key]`` if present and of type *kind*, else raise ValueError."""
    value = data.get(key)
    # bool is an int subclass but never a valid id
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ValueError(f"'{key}' must be a {kind.__name__}")
    return value


@dataclass(frozen=True)
class User:
    """
    A registered account.

    Passwords are never stored in plain text -- only a one-way hash is
    persisted.  Users are created on registration and never modified.

    Attributes:
        username: Unique, case-sensitive login name.
        password_hash: Werkzeug-generated salted hash of the password.
    """

    username: str
    password_hash: str

    @classmethod
    def create(cls, username: str, password: str) -> User:
        """
        Build a new user, hashing the plain-text password.

        Uses Werkzeug's ``generate_password_hash`` which defaults to a
        salted scrypt derivation.

        Args:
            username: The login name.
            password: The plain-text password to hash.

        Returns:
            A new :class:`User` holding only the hash.
        """
        return cls(username=username, password_hash=generate_password_hash(password))

    def check_password(self, password: str) -> bool:
        """
        Verify a plain-text password against the stored hash.

        Args:
            password: The candidate plain-text password.

        Returns:
            ``True`` if the password matches, ``False`` otherwise, including
            when the stored hash uses a method werkzeug does not know.
        """
        try:
            return check_password_hash(self.password_hash, password)
        except ValueError:
            # hash written by another scheme (e.g. bcrypt "$2b$")
            return False

    @staticmethod
    def burn_verification(password: str) -> None:
        """Run a verification of comparable cost when no user was found."""
        check_password_hash(_dummy_password_hash(), password)

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "password": self.password_hash}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            username=_require(data, "username", str),
            password_hash=_require(data, "password", str),
        )

    def __repr__(self) -> str:
        return f"<User {self.username}>"


@dataclass(frozen=True)
class Task:
    """
    A to-do item owned by one user.

    Attributes:
        id: Unique, monotonically increasing identifier.
        text: The task description.
        owner: Username recorded at creation time.
    """

    id: int
    text: str
    owner: str

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its persisted and API representation.

        Returns:
            Dictionary with ``id``, ``task`` and ``user`` keys.
        """
        return {"id": self.id, "task": self.text, "user": self.owner}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls(
            id=_require(data, "id", int),
            text=_require(data, "task", str),
            owner=_require(data, "user", str),
        )

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.text}>"


@dataclass
class Snapshot:
    """
    The full contents of the data file for one load/save cycle.

    Attributes:
        users: All registered users, in registration order.
        tasks: All tasks, in insertion order.
    """

    users: list[User] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)

    def find_user(self, username: str) -> User | None:
        """Return the user with exactly this username, or ``None``."""
        for user in self.users:
            if user.username == username:
                return user
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "users": [user.to_dict() for user in self.users],
            "tasks": [task.to_dict() for task in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Snapshot:
        """
        Build a snapshot from decoded JSON.

        Raises:
            ValueError: If the top-level shape or any record is invalid.
        """
        if not isinstance(data, dict):
            raise ValueError("top-level value must be an object")
        users = data.get("users")
        tasks = data.get("tasks")
        if not isinstance(users, list) or not isinstance(tasks, list):
            raise ValueError("'users' and 'tasks' must both be lists")
        for record in (*users, *tasks):
            if not isinstance(record, dict):
                raise ValueError("every record must be an object")
        return cls(
            users=[User.from_dict(record) for record in users],
            tasks=[Task.from_dict(record) for record in tasks],
        )
