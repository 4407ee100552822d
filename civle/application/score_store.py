"""Use case: accept, merge and rank score submissions for one day-key."""
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, List, Tuple

from civle.domain.invariant import (
    validate_name_allowed,
    validate_name_available,
    validate_score,
)
from civle.domain.ranking import SCORE_CAPACITY, apply_submission
from civle.domain.score_entry import ScoreEntry
from civle.infrastructure.blocklist import Blocklist
from civle.infrastructure.locks import DayKeyLocks
from civle.infrastructure.repositories.base import ScoreRepository

log = logging.getLogger("civle.scores")


class ScoreStore:
    """
    Owns the bounded, sorted score list of every day-key.
    The whole load -> merge -> sort -> truncate -> persist cycle runs under
    the day-key's lock, so submissions to one day are linearizable.
    """

    def __init__(
        self,
        repository: ScoreRepository,
        blocklist: Blocklist | None = None,
        locks: DayKeyLocks | None = None,
        capacity: int = SCORE_CAPACITY,
        clock: Callable[[], datetime] | None = None,
    ):
        self._repo = repository
        self._blocklist = blocklist if blocklist is not None else Blocklist()
        self._locks = locks or DayKeyLocks()
        self._capacity = capacity
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def capacity(self) -> int:
        return self._capacity

    def lock_for(self, day_key: str) -> threading.RLock:
        return self._locks.for_key(day_key)

    def load(self, day_key: str) -> List[ScoreEntry]:
        """Sorted entries for *day_key*; empty when nothing was submitted yet."""
        return self._repo.load(day_key)

    def submit(self, day_key: str, score, name: str | None = None) -> Tuple[List[ScoreEntry], int]:
        """
        Record one submission and return (updated list, 1-based rank).
        Raises ValidationError for a bad score, a blocked name or a name
        already used today; StorageError when the day's file is unusable.
        """
        validate_score(score)
        name = name or None
        with self.lock_for(day_key):
            entries = self._repo.load(day_key)
            if name:
                validate_name_allowed(name, self._blocklist)
                validate_name_available(entries, name)
            timestamp = self._clock().isoformat()
            ranked, rank = apply_submission(entries, score, name, timestamp, self._capacity)
            self._repo.save(day_key, ranked)
        log.info("Score %s (%s) recorded for %s at rank %d", score, name or "anonymous", day_key, rank)
        return ranked, rank

    def reset(self, day_key: str) -> bool:
        """Drop the day's list. Returns False when there was nothing to drop."""
        with self.lock_for(day_key):
            removed = self._repo.delete(day_key)
        if removed:
            log.info("Leaderboard %s reset", day_key)
        return removed
