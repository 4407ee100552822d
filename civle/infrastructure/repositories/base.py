"""Repository interfaces for the day-keyed stores.

The file-backed classes are one implementation; the score store and the
leaderboard service only depend on these contracts.
"""
from abc import ABC, abstractmethod
from typing import List, Tuple

from civle.domain.score_entry import ScoreEntry
from civle.domain.screenshot import ScreenshotInfo


class DayKeyedRepository(ABC):
    """Anything the retention sweeper can enumerate and prune."""

    @abstractmethod
    def day_keyed_files(self) -> List[Tuple[str, str]]:
        """Return ``(day_key, locator)`` pairs for every stored artifact."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, locator: str) -> None:
        raise NotImplementedError


class ScoreRepository(DayKeyedRepository):
    @abstractmethod
    def load(self, day_key: str) -> List[ScoreEntry]:
        raise NotImplementedError

    @abstractmethod
    def save(self, day_key: str, entries: List[ScoreEntry]) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, day_key: str) -> bool:
        raise NotImplementedError


class ScreenshotRepository(DayKeyedRepository):
    @abstractmethod
    def store_winner(self, day_key: str, image: bytes, name: str | None = None, score=None) -> str:
        raise NotImplementedError

    @abstractmethod
    def attach_name(self, day_key: str, name: str, score=None) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def lookup(self, day_key: str) -> ScreenshotInfo | None:
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, info: ScreenshotInfo) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def reset(self, day_key: str) -> int:
        raise NotImplementedError
