"""
Per-key locking.
Serializes work that targets the same key while leaving other keys independent.
"""

import threading
from contextlib import contextmanager
from typing import Dict


class KeyedLocks:
    """A set of locks, one per key, kept only while a key is in use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}
        self._users: Dict[str, int] = {}

    @contextmanager
    def hold(self, key: str):
        """Hold the lock for `key` for the duration of the block."""
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._users[key] -= 1
                # Last holder or waiter gone
                if not self._users[key]:
                    del self._users[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
