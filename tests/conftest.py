"""
Shared pytest fixtures for the Civle test suite.

Strategy:
- Domain tests: pure in-memory, zero I/O.
- Infrastructure/application tests: real file repositories under tmp_path.
- API tests: FastAPI TestClient on create_app() with tmp settings and a
  ticking fake clock, so every run sees the same "today".
"""
import os
from datetime import datetime, timedelta, timezone

import pytest

from civle.application.leaderboard_service import LeaderboardService
from civle.application.score_store import ScoreStore
from civle.config import Settings
from civle.domain.day_key import DatePartitioner
from civle.domain.screenshot import encode_data_url
from civle.infrastructure.blocklist import Blocklist
from civle.infrastructure.repositories.challenge_repository import ChallengeRepository
from civle.infrastructure.repositories.score_repository import JsonScoreRepository
from civle.infrastructure.repositories.screenshot_repository import FileScreenshotRepository

# 12:00 in New York (EST, before the March DST switch)
FIXED_NOW = datetime(2025, 3, 7, 17, 0, tzinfo=timezone.utc)
TODAY = "03-07"
YESTERDAY = "03-06"
TWO_DAYS_AGO = "03-05"

ACCESS_KEY = "test-access-key"
BLOCKED_WORDS = ["bad", "rude"]

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 8
PNG_DATA_URL = encode_data_url(PNG_BYTES)


class FakeClock:
    """Returns *start*, then advances by *step* on every call."""

    def __init__(self, start: datetime = FIXED_NOW, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.now
        self.now += self.step
        return value


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def partitioner():
    return DatePartitioner()


@pytest.fixture
def settings(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "bad-words.txt").write_text("\n".join(BLOCKED_WORDS) + "\n", encoding="utf-8")
    return Settings(
        storage_dir=str(tmp_path / "storage"),
        challenges_dir=str(tmp_path / "day_challenges"),
        public_dir=str(tmp_path / "public"),
        data_dir=str(data_dir),
        access_key=ACCESS_KEY,
        access_key_file=str(tmp_path / "endpoint_key.txt"),
    )


@pytest.fixture
def score_repo(settings):
    return JsonScoreRepository(settings.scores_dir)


@pytest.fixture
def screenshot_repo(settings):
    return FileScreenshotRepository(settings.screenshots_dir)


@pytest.fixture
def challenge_repo(settings):
    return ChallengeRepository(settings.challenges_dir)


@pytest.fixture
def store(score_repo, clock):
    return ScoreStore(score_repo, blocklist=Blocklist(BLOCKED_WORDS), clock=clock)


@pytest.fixture
def service(store, screenshot_repo, challenge_repo, partitioner, clock):
    return LeaderboardService(store, screenshot_repo, challenge_repo, partitioner, clock=clock)


def write_challenge(settings: Settings, day_key: str, text: str = "grid: 5x5\n") -> None:
    os.makedirs(settings.challenges_dir, exist_ok=True)
    with open(os.path.join(settings.challenges_dir, f"{day_key}.civle"), "w", encoding="utf-8") as f:
        f.write(text)


# ---------------------------------------------------------------------------
# FastAPI TestClient wired to the tmp directory
# ---------------------------------------------------------------------------

@pytest.fixture
def test_app(settings, clock):
    from civle.main import create_app
    return create_app(settings, clock=clock)


@pytest.fixture
def client(test_app):
    from fastapi.testclient import TestClient
    return TestClient(test_app)
