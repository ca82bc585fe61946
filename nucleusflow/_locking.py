"""Reader/writer lock shared by the generator configuration and asset cache."""

from __future__ import annotations

import contextlib
import threading
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class ReadWriteLock:
    """Allow many concurrent readers or a single exclusive writer.

    Writers are given preference once they start waiting so a steady stream
    of readers cannot starve configuration updates.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextlib.contextmanager
    def read(self) -> cabc.Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextlib.contextmanager
    def write(self) -> cabc.Iterator[None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


__all__ = ["ReadWriteLock"]
