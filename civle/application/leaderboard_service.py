"""Leaderboard orchestration -- score store + winner screenshot per request.

No state is kept between requests: every call re-reads the day's files.
Score persistence takes priority over the screenshot; a screenshot failure is
logged and never fails the submission.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List

from civle.application.score_store import ScoreStore
from civle.config import DEFAULT_LEADERBOARD_SIZE
from civle.domain.day_key import DatePartitioner
from civle.domain.errors import StorageError, ValidationError
from civle.domain.screenshot import decode_data_url, encode_data_url, validate_png
from civle.infrastructure.repositories.base import ScreenshotRepository
from civle.infrastructure.repositories.challenge_repository import ChallengeRepository

log = logging.getLogger("civle.leaderboard")


def normalize_name(name: str | None) -> str | None:
    """Strip surrounding whitespace; blank names count as anonymous."""
    if name is None:
        return None
    return name.strip() or None


class LeaderboardService:
    def __init__(
        self,
        score_store: ScoreStore,
        screenshots: ScreenshotRepository,
        challenges: ChallengeRepository,
        partitioner: DatePartitioner,
        leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE,
        clock: Callable[[], datetime] | None = None,
    ):
        self._scores = score_store
        self._screenshots = screenshots
        self._challenges = challenges
        self._partitioner = partitioner
        self._leaderboard_size = leaderboard_size
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def leaderboard_size(self) -> int:
        return self._leaderboard_size

    def today(self) -> str:
        return self._partitioner.day_key(self._clock())

    def yesterday(self) -> str:
        return self._partitioner.yesterday_key(self._clock())

    # ------------------------------------------------------------------
    # Write paths
    # ------------------------------------------------------------------

    def submit_score(self, score, name: str | None = None, screenshot: str | None = None) -> dict:
        """Record today's submission. Returns ``{"rank", "in_top_n", "day_key"}``."""
        name = normalize_name(name)
        day_key = self.today()
        with self._scores.lock_for(day_key):
            _, rank = self._scores.submit(day_key, score, name)
            if rank == 1:
                self._update_winner_screenshot(day_key, score, name, screenshot)
        return {
            "rank": rank,
            "in_top_n": rank <= self._leaderboard_size,
            "day_key": day_key,
        }

    def _update_winner_screenshot(self, day_key: str, score, name: str | None, screenshot: str | None) -> None:
        if screenshot:
            try:
                image = decode_data_url(screenshot)
                self._screenshots.store_winner(day_key, image, name, score)
            except (ValidationError, OSError) as exc:
                log.error("Could not store winner screenshot for %s: %s", day_key, exc)
        if name:
            try:
                self._screenshots.attach_name(day_key, name, score)
            except OSError as exc:
                log.error("Could not rename winner screenshot for %s: %s", day_key, exc)

    def reset_day(self, day_key: str | None = None) -> dict:
        """Drop the day's scores and its winner screenshot."""
        day_key = day_key or self.today()
        with self._scores.lock_for(day_key):
            scores_removed = self._scores.reset(day_key)
            try:
                screenshots_removed = self._screenshots.reset(day_key)
            except OSError as exc:
                raise StorageError(f"Cannot reset screenshots for {day_key}: {exc}") from exc
        return {
            "day_key": day_key,
            "scores_removed": scores_removed,
            "screenshots_removed": screenshots_removed,
        }

    def upload_winner_screenshot(self, data_url: str, day_key: str | None = None) -> str:
        """Overwrite the day's winner screenshot from a PNG data URL."""
        return self.replace_winner_image(decode_data_url(data_url), day_key)

    def replace_winner_image(self, image: bytes, day_key: str | None = None) -> str:
        """Overwrite the day's winner screenshot, tagged with the current leader."""
        validate_png(image)
        day_key = day_key or self.today()
        with self._scores.lock_for(day_key):
            entries = self._scores.load(day_key)
            leader = entries[0] if entries else None
            try:
                return self._screenshots.store_winner(
                    day_key,
                    image,
                    leader.name if leader else None,
                    leader.score if leader else None,
                )
            except OSError as exc:
                raise StorageError(f"Cannot store screenshot for {day_key}: {exc}") from exc

    # ------------------------------------------------------------------
    # Read paths
    # ------------------------------------------------------------------

    def get_leaderboard(self, day_key: str | None = None, limit: int | None = None) -> List[dict]:
        """Top entries as ``{name, score}``; timestamps are never exposed."""
        entries = self._scores.load(day_key or self.today())
        limit = self._leaderboard_size if limit is None else limit
        return [e.to_public_dict() for e in entries[:limit]]

    def get_daily_challenge(self, day_key: str | None = None) -> str | None:
        return self._challenges.get(day_key or self.today())

    def get_best_setup(self, day_key: str | None = None) -> dict | None:
        """Challenge plus winner screenshot for *day_key* (default: yesterday).

        Returns None when neither exists.
        """
        day_key = day_key or self.yesterday()
        challenge = self._challenges.get(day_key)
        info = self._screenshots.lookup(day_key)
        screenshot_url = None
        if info is not None:
            try:
                screenshot_url = encode_data_url(self._screenshots.read_bytes(info))
            except OSError as exc:
                log.error("Could not read winner screenshot %s: %s", info.path, exc)
                info = None
        if challenge is None and screenshot_url is None:
            return None
        return {
            "day_key": day_key,
            "challenge": challenge,
            "screenshot": screenshot_url,
            "has_screenshot": screenshot_url is not None,
            "player_name": info.name if info else None,
            "player_score": info.score if info else None,
        }
