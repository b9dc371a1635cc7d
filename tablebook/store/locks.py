import threading
from contextlib import contextmanager

from ..errors import StoreUnavailable


class SlotLocks:
    """One exclusive lock per key, created on demand and dropped when idle.

    Holders of different keys never wait on each other.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout
        self._guard = threading.Lock()
        self._locks: dict[object, list] = {}  # key -> [lock, waiters]

    @contextmanager
    def hold(self, key):
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            if not entry[0].acquire(timeout=self.timeout):
                raise StoreUnavailable(f"Timed out after {self.timeout}s waiting for slot {key}.")
            try:
                yield
            finally:
                entry[0].release()
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
