"""Winner screenshot persistence (at most one PNG per day-key)."""
import logging
import os
from typing import List, Tuple

from civle.domain.day_key import is_day_key
from civle.domain.screenshot import (
    ScreenshotInfo,
    build_filename,
    filename_day_key,
    parse_filename,
    sanitize_name,
)
from civle.infrastructure.repositories.base import ScreenshotRepository

log = logging.getLogger("civle.screenshots")


class FileScreenshotRepository(ScreenshotRepository):
    """File-based winner screenshots: ``<dir>/<MM-DD>[_(Name)][_(Score)].png``."""

    def __init__(self, screenshots_dir: str):
        self._dir = screenshots_dir

    @property
    def screenshots_dir(self) -> str:
        return self._dir

    def _listdir(self) -> List[str]:
        if not os.path.isdir(self._dir):
            return []
        return sorted(os.listdir(self._dir))

    def _images_for(self, day_key: str) -> List[str]:
        return [f for f in self._listdir() if filename_day_key(f) == day_key]

    def store_winner(self, day_key: str, image: bytes, name: str | None = None, score=None) -> str:
        """Replace the day's screenshot. The score is only encoded with a name."""
        if not is_day_key(day_key):
            raise ValueError(f"Invalid day key: {day_key!r}")
        os.makedirs(self._dir, exist_ok=True)
        for existing in self._images_for(day_key):
            os.remove(os.path.join(self._dir, existing))
            log.info("Replaced winner screenshot %s", existing)

        path = os.path.join(self._dir, build_filename(day_key, name, score))
        tmp_path = path + ".tmp"
        with open(tmp_path, "wb") as f:
            f.write(image)
        os.replace(tmp_path, path)
        return path

    def lookup(self, day_key: str) -> ScreenshotInfo | None:
        for filename in self._images_for(day_key):
            parsed = parse_filename(filename)
            if parsed:
                return ScreenshotInfo(
                    day_key=parsed["day_key"],
                    path=os.path.join(self._dir, filename),
                    name=parsed["name"],
                    score=parsed["score"],
                )
        return None

    def attach_name(self, day_key: str, name: str, score=None) -> str | None:
        """Rename the day's screenshot once the winner's name (or score) is known.

        An unnamed file gets the name, plus the score when given. A file
        already carrying this name but no score gets the score. Anything else
        is left alone.
        """
        info = self.lookup(day_key)
        if info is None or not name:
            return None
        if info.name is None:
            target = build_filename(day_key, name, score)
        elif info.score is None and score is not None and info.name == sanitize_name(name):
            target = build_filename(day_key, info.name, score)
        else:
            return None

        new_path = os.path.join(self._dir, target)
        if new_path == info.path:
            return None
        os.replace(info.path, new_path)
        log.info("Renamed winner screenshot %s -> %s", os.path.basename(info.path), target)
        return new_path

    def read_bytes(self, info: ScreenshotInfo) -> bytes:
        with open(info.path, "rb") as f:
            return f.read()

    def reset(self, day_key: str) -> int:
        if not is_day_key(day_key):
            raise ValueError(f"Invalid day key: {day_key!r}")
        removed = 0
        for filename in self._listdir():
            if filename.startswith(day_key):
                os.remove(os.path.join(self._dir, filename))
                removed += 1
        return removed

    def day_keyed_files(self) -> List[Tuple[str, str]]:
        found = []
        for filename in self._listdir():
            day_key = filename_day_key(filename)
            if day_key:
                found.append((day_key, os.path.join(self._dir, filename)))
        return found

    def remove(self, locator: str) -> None:
        os.remove(locator)
