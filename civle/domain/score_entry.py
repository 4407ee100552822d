"""Score entry entity -- one submission on a day's leaderboard."""
import math
from datetime import datetime, timezone


def is_valid_score(value) -> bool:
    """True for finite ints and floats. Booleans are not scores.

    Ints beyond the float range are rejected: they could not be ordered
    against float scores.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


class ScoreEntry:
    """
    A score with an optional player name.
    The timestamp is fixed at creation; attaching a name later never moves
    the entry's tie-break position.
    """

    def __init__(
        self,
        score: int | float,
        name: str | None = None,
        timestamp: str | None = None,
    ):
        if not is_valid_score(score):
            raise ValueError(f"Invalid score: {score!r}")
        if name is not None and not isinstance(name, str):
            raise ValueError(f"Invalid name: {name!r}")
        self._score = score
        self._name = name or None
        self._timestamp = timestamp or datetime.now(timezone.utc).isoformat()
        self._created_at = _parse_timestamp(self._timestamp)

    @property
    def score(self) -> int | float:
        return self._score

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def timestamp(self) -> str:
        return self._timestamp

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_anonymous(self) -> bool:
        return self._name is None

    def with_name(self, name: str) -> "ScoreEntry":
        """Named copy of an anonymous entry, keeping its timestamp."""
        if not self.is_anonymous:
            raise ValueError("Entry already has a name")
        return ScoreEntry(score=self._score, name=name, timestamp=self._timestamp)

    def sort_key(self) -> tuple:
        """Score descending, then earliest submission first."""
        return (-self._score, self._created_at)

    def to_dict(self) -> dict:
        return {
            "score": self._score,
            "name": self._name,
            "timestamp": self._timestamp,
        }

    def to_public_dict(self) -> dict:
        return {"name": self._name, "score": self._score}

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreEntry":
        if not isinstance(data, dict):
            raise ValueError(f"Score entry must be an object, got {type(data).__name__}")
        if "score" not in data or "timestamp" not in data:
            raise ValueError("Score entry requires 'score' and 'timestamp'")
        return cls(
            score=data["score"],
            name=data.get("name"),
            timestamp=data["timestamp"],
        )

    def __repr__(self) -> str:
        return f"ScoreEntry(score={self._score!r}, name={self._name!r}, timestamp={self._timestamp!r})"


def _parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp: {value!r}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
