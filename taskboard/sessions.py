"""
Server-side session records.

The browser only ever holds an opaque random token.  The record it points
to lives in process memory and stores the authenticated username -- an
identity reference, not a copy of the account -- together with a fixed
expiry counted from login.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionRecord:
    """A live login, keyed by its token in :class:`SessionStore`."""

    username: str
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class SessionStore:
    """
    Thread-safe in-memory mapping of session tokens to records.

    Args:
        lifetime_seconds: How long a record stays valid after creation.
        clock: Source of the current time in seconds; injectable for tests.
    """

    def __init__(
        self,
        lifetime_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.lifetime_seconds = lifetime_seconds
        self._clock = clock
        self._records: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, username: str) -> str:
        """
        Open a new session for *username*.

        Returns:
            The opaque token identifying the session.
        """
        now = self._clock()
        token = secrets.token_urlsafe(32)
        record = SessionRecord(
            username=username,
            created_at=now,
            expires_at=now + self.lifetime_seconds,
        )
        with self._lock:
            self._purge_expired(now)
            self._records[token] = record
        logger.info("Opened session for %s", username)
        return token

    def get(self, token: str) -> SessionRecord | None:
        """Return the live record for *token*, or ``None`` if unknown or expired."""
        now = self._clock()
        with self._lock:
            record = self._records.get(token)
            if record is None:
                return None
            if record.is_expired(now):
                del self._records[token]
                logger.info("Session for %s expired", record.username)
                return None
            return record

    def destroy(self, token: str) -> None:
        """Drop the session for *token*; unknown tokens are ignored."""
        with self._lock:
            self._records.pop(token, None)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [token for token, record in self._records.items() if record.is_expired(now)]
        for token in expired:
            del self._records[token]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
