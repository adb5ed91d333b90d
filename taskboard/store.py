"""
Persistence layer for users and tasks.

The whole data set lives in one JSON document that is read and rewritten in
full on every operation.  Callers depend only on the small ``DataStore``
contract (``load``/``save``/``transaction``) so the JSON file can be swapped
for another backend without touching the services.

Key Concepts Demonstrated:
- Injectable storage interface with file and in-memory backends
- One process-wide critical section around read-modify-write cycles
- Atomic file replacement so a failed write never truncates the data file
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .errors import StorageError
from .models import Snapshot

logger = logging.getLogger(__name__)


class DataStore:
    """
    Base class for snapshot stores.

    Subclasses implement ``load`` and ``save``.  Every mutation should go
    through :meth:`transaction`, which serialises read-modify-write cycles
    so that concurrent requests in this process cannot lose each other's
    updates.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def load(self) -> Snapshot:
        raise NotImplementedError

    def save(self, snapshot: Snapshot) -> None:
        raise NotImplementedError

    @contextmanager
    def transaction(self) -> Iterator[Snapshot]:
        """
        Load a snapshot, yield it for mutation, then save it.

        If the body raises, the snapshot is discarded and the stored data
        stays at its last successfully saved state.

        Yields:
            The freshly loaded :class:`Snapshot`.

        Raises:
            StorageError: If loading or saving fails.
        """
        with self._lock:
            snapshot = self.load()
            yield snapshot
            self.save(snapshot)


class JsonFileStore(DataStore):
    """
    Store backed by a single pretty-printed JSON file.

    Args:
        path: Location of the data file.  Parent directories are created
            on first use.
    """

    def __init__(self, path: str | os.PathLike) -> None:
        super().__init__()
        self.path = Path(path)

    def initialize(self) -> None:
        """Create the data file with an empty snapshot if it does not exist."""
        with self._lock:
            if not self.path.exists():
                logger.info("Initialising empty data file at %s", self.path)
                self.save(Snapshot())

    def load(self) -> Snapshot:
        """
        Read and parse the data file.

        Returns:
            The current :class:`Snapshot`.

        Raises:
            StorageError: If the file cannot be read or holds malformed data.
        """
        with self._lock:
            self.initialize()
            try:
                raw = self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Error reading data file %s: %s", self.path, exc)
                raise StorageError(f"Unable to read {self.path}: {exc}") from exc

        try:
            return Snapshot.from_dict(json.loads(raw))
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError subclass
            logger.error("Malformed data file %s: %s", self.path, exc)
            raise StorageError(f"Malformed data in {self.path}: {exc}") from exc

    def save(self, snapshot: Snapshot) -> None:
        """
        Overwrite the data file with *snapshot*.

        The document is written to a temporary sibling file first and then
        renamed over the target, so readers never observe a partial file.

        Raises:
            StorageError: If the file cannot be written.
        """
        payload = json.dumps(snapshot.to_dict(), indent=2)
        with self._lock:
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
                )
                try:
                    handle = os.fdopen(fd, "w", encoding="utf-8")
                except OSError:
                    os.close(fd)
                    raise
                with handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except OSError as exc:
                logger.error("Error writing data file %s: %s", self.path, exc)
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise StorageError(f"Unable to write {self.path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"<JsonFileStore {self.path}>"


class MemoryStore(DataStore):
    """
    Store that keeps the snapshot in process memory.

    Loads and saves deep-copy the snapshot so callers get the same
    isolation semantics as with the file store.
    """

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        super().__init__()
        self._snapshot = copy.deepcopy(snapshot) if snapshot is not None else Snapshot()

    def load(self) -> Snapshot:
        with self._lock:
            return copy.deepcopy(self._snapshot)

    def save(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._snapshot = copy.deepcopy(snapshot)
