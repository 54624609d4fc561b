# docs_rag/concurrency/read_write_lock.py
import threading
from contextlib import contextmanager


class ReadWriteLock:
    """
    Readers-writer lock guarding the record store.
    - Searches take the read side and may overlap each other.
    - append/clear/replace take the write side, so a search never observes
      a half-swapped corpus.
    - A waiting writer blocks new readers (writer preference).
    """
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._active_readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read_lock(self):
        with self._cond:
            self._cond.wait_for(lambda: not self._writing and self._writers_waiting == 0)
            self._active_readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._active_readers -= 1
                if not self._active_readers:
                    self._cond.notify_all()

    @contextmanager
    def write_lock(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(lambda: not self._writing and self._active_readers == 0)
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()
