"""Read-preferring reader/writer lock."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class RWLock:
    """Many concurrent readers or one writer.

    The first reader in takes the writer lock and the last reader out
    releases it, so writers wait until no reader holds the lock. Readers that
    arrive while other readers are active never wait for a pending writer.

    ``threading.Lock`` may be released by a thread other than the one that
    acquired it, which the reader hand-off relies on.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass
        >>> with lock.write():
        ...     pass
    """

    def __init__(self) -> None:
        self._readers = 0
        self._readers_lock = threading.Lock()
        self._writer_lock = threading.Lock()

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        return self._readers

    @contextmanager
    def read(self) -> Iterator[None]:
        self._acquire_read()
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self._writer_lock.acquire()
        try:
            yield
        finally:
            self._writer_lock.release()

    def _acquire_read(self) -> None:
        with self._readers_lock:
            self._readers += 1
            if self._readers == 1:
                # first reader blocks writers
                self._writer_lock.acquire()

    def _release_read(self) -> None:
        with self._readers_lock:
            self._readers -= 1
            if self._readers == 0:
                # last reader releases writer lock
                self._writer_lock.release()
