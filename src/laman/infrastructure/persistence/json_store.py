"""A JSON document shared by several repositories.

Orders, order items, deliveries and payments live in one document so a
single file replace commits all of them together.  Every write runs
inside ``transaction()``: the document is loaded, mutated by the caller
and written back only if the block finishes without raising.  Writes go
to a temporary file first and are swapped in with ``os.replace``, so a
crash mid-write never leaves a half-written store behind.

Access is serialized by a lock file next to the document, so separate
``laman`` processes sharing a data directory take turns too.  Waiting for
it is bounded by ``timeout``; running out of time raises UnavailableError.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from laman.domain.exceptions import PersistenceError, UnavailableError

Document = dict[str, list[dict]]


def lock_path_for(file_path: Path) -> Path:
    return file_path.with_name(f"{file_path.name}.lock")


@contextmanager
def exclusive(file_path: Path, timeout: float) -> Iterator[None]:
    """Hold the cross-process lock of ``file_path`` for the block."""
    lock = FileLock(lock_path_for(file_path), timeout=timeout)
    try:
        lock.acquire()
    except Timeout:
        raise UnavailableError(
            f"Timed out after {timeout}s waiting for {file_path.name}"
        ) from None
    try:
        yield
    finally:
        lock.release()


def atomic_write(file_path: Path, payload: str) -> None:
    """Replace ``file_path`` with ``payload`` in one step."""
    fd, tmp_name = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, file_path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise PersistenceError(f"Cannot write {file_path}: {exc}") from exc


class JsonDocumentStore:

    def __init__(
        self,
        file_path: Path,
        collections: tuple[str, ...],
        timeout: float = 5.0,
    ) -> None:
        self._file_path = file_path
        self._collections = collections
        self._timeout = timeout
        self._thread_lock = threading.RLock()
        self._ensure_file()

    # --- Public API -----------------------------------------------------------

    def read(self) -> Document:
        """Return a consistent snapshot of the whole document."""
        with self._locked():
            return self._load()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Yield the document for mutation; commit it if the block succeeds."""
        with self._locked():
            document = self._load()
            yield document
            self._persist(document)

    # --- Locking --------------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        # threads of one process queue here first, other processes on the lock file
        if not self._thread_lock.acquire(timeout=self._timeout):
            raise UnavailableError(
                f"Timed out after {self._timeout}s waiting for {self._file_path.name}"
            )
        try:
            with exclusive(self._file_path, self._timeout):
                yield
        finally:
            self._thread_lock.release()

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> Document:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise UnavailableError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise UnavailableError(f"Unexpected content in {self._file_path}")
        return {name: list(raw.get(name, [])) for name in self._collections}

    def _persist(self, document: Document) -> None:
        payload = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        atomic_write(self._file_path, payload)

    def _ensure_file(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self._locked():
            if not self._file_path.exists():
                empty = {name: [] for name in self._collections}
                atomic_write(self._file_path, json.dumps(empty, indent=2) + "\n")
