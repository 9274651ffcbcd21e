from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class UserLocks:
    """Registry of re-entrant locks keyed by user id.

    Every read-modify-write of a user's entries happens while holding that
    user's lock, so two writers for the same user are serialized while
    different users proceed in parallel. Locks are re-entrant because bulk
    operations call single-day operations for the same user.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, user_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        lock = self._lock_for(str(user_id))
        with lock:
            yield
