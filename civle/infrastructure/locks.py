"""Per-day-key mutual exclusion for read-modify-write cycles.

Locks are re-entrant so the leaderboard service can hold a day's lock across
the score submission and the screenshot update that follows it. Different
day-keys never share a lock.
"""
import threading


class DayKeyLocks:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def for_key(self, day_key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(day_key)
            if lock is None:
                lock = threading.RLock()
                self._locks[day_key] = lock
            return lock

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
