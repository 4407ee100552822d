"""Loads daily challenge definitions from ``<MM-DD>.civle`` text files."""
import os

from civle.domain.day_key import is_day_key

CHALLENGE_EXTENSION = ".civle"


class ChallengeRepository:
    """Read-only challenge lookup by day-key."""

    def __init__(self, challenges_dir: str):
        self._challenges_dir = challenges_dir

    def path_for(self, day_key: str) -> str:
        if not is_day_key(day_key):
            raise ValueError(f"Invalid day key: {day_key!r}")
        return os.path.join(self._challenges_dir, day_key + CHALLENGE_EXTENSION)

    def get(self, day_key: str) -> str | None:
        path = self.path_for(day_key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
