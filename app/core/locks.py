# app/core/locks.py
import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLocks:
    """
    One ``threading.Lock`` per key, alive only while someone holds or
    waits for it.

    Checkout holds the lock for its cart id so two requests against the
    same cart run one after the other inside this process. Across
    processes the row lock taken by ``CartRepository.lock_cart`` does the
    same job on stores that support ``SELECT ... FOR UPDATE``.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # key -> [lock, number of holders + waiters]
        self._locks: dict[object, list] = {}

    def _acquire_entry(self, key: object) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[key] = entry
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: object) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: object) -> Iterator[None]:
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)
