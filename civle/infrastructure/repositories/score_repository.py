"""Score list persistence (one JSON file per day-key)."""
import json
import os
import re
from typing import List, Tuple

from civle.domain.day_key import is_day_key
from civle.domain.errors import StorageError
from civle.domain.score_entry import ScoreEntry
from civle.infrastructure.repositories.base import ScoreRepository

_SCORE_FILE = re.compile(r"^(\d{2}-\d{2})\.json$")


class JsonScoreRepository(ScoreRepository):
    """File-based score lists: ``<scores_dir>/<MM-DD>.json``."""

    def __init__(self, scores_dir: str):
        self._scores_dir = scores_dir

    @property
    def scores_dir(self) -> str:
        return self._scores_dir

    def path_for(self, day_key: str) -> str:
        if not is_day_key(day_key):
            raise ValueError(f"Invalid day key: {day_key!r}")
        return os.path.join(self._scores_dir, f"{day_key}.json")

    def load(self, day_key: str) -> List[ScoreEntry]:
        path = self.path_for(day_key)
        if not os.path.exists(path):
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StorageError(f"Malformed score file {path}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"Cannot read score file {path}: {exc}") from exc

        if not isinstance(raw, list):
            raise StorageError(f"Malformed score file {path}: expected a JSON array")
        try:
            return [ScoreEntry.from_dict(item) for item in raw]
        except (TypeError, ValueError, OverflowError) as exc:
            raise StorageError(f"Malformed score entry in {path}: {exc}") from exc

    def save(self, day_key: str, entries: List[ScoreEntry]) -> None:
        path = self.path_for(day_key)
        tmp_path = path + ".tmp"
        try:
            os.makedirs(self._scores_dir, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump([e.to_dict() for e in entries], f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Cannot write score file {path}: {exc}") from exc

    def delete(self, day_key: str) -> bool:
        path = self.path_for(day_key)
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Cannot delete score file {path}: {exc}") from exc
        return True

    def day_keyed_files(self) -> List[Tuple[str, str]]:
        if not os.path.isdir(self._scores_dir):
            return []
        found = []
        for filename in sorted(os.listdir(self._scores_dir)):
            match = _SCORE_FILE.match(filename)
            if match:
                found.append((match.group(1), os.path.join(self._scores_dir, filename)))
        return found

    def remove(self, locator: str) -> None:
        os.remove(locator)
