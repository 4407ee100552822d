"""Tests for Settings construction and environment parsing."""
import os

import pytest

from civle.config import DEFAULT_LEADERBOARD_SIZE, Settings

_ENV_NAMES = (
    "CIVLE_STORAGE_DIR",
    "CIVLE_DATA_DIR",
    "CIVLE_BLOCKLIST_PATH",
    "CIVLE_ACCESS_KEY",
    "CIVLE_TIMEZONE",
    "CIVLE_LEADERBOARD_SIZE",
    "CIVLE_SCORE_CAPACITY",
    "CIVLE_SWEEP_INTERVAL_SECONDS",
    "ALLOWED_ORIGINS",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    def test_defaults(self, clean_env):
        s = Settings.from_env()
        assert s.storage_dir == "storage"
        assert s.scores_dir == os.path.join("storage", "scores")
        assert s.screenshots_dir == os.path.join("storage", "screenshots")
        assert s.blocklist_path == os.path.join("data", "bad-words.txt")
        assert s.access_key is None
        assert s.timezone_name == "America/New_York"
        assert s.leaderboard_size == DEFAULT_LEADERBOARD_SIZE
        assert s.score_capacity == 100
        assert s.allowed_origins == ["*"]
        assert s.log_level == "INFO"

    def test_rejects_non_positive_sizes(self):
        with pytest.raises(ValueError):
            Settings(leaderboard_size=0)
        with pytest.raises(ValueError):
            Settings(sweep_interval_seconds=0)


class TestFromEnv:
    def test_overrides(self, clean_env):
        clean_env.setenv("CIVLE_STORAGE_DIR", "/srv/civle")
        clean_env.setenv("CIVLE_ACCESS_KEY", "  secret  ")
        clean_env.setenv("CIVLE_LEADERBOARD_SIZE", "10")
        clean_env.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
        clean_env.setenv("LOG_LEVEL", "debug")
        s = Settings.from_env()
        assert s.scores_dir == os.path.join("/srv/civle", "scores")
        assert s.access_key == "secret"
        assert s.leaderboard_size == 10
        assert s.allowed_origins == ["https://a.example", "https://b.example"]
        assert s.log_level == "DEBUG"

    def test_blank_access_key_is_unset(self, clean_env):
        clean_env.setenv("CIVLE_ACCESS_KEY", "   ")
        assert Settings.from_env().access_key is None

    def test_bad_integer(self, clean_env):
        clean_env.setenv("CIVLE_SCORE_CAPACITY", "lots")
        with pytest.raises(ValueError, match="CIVLE_SCORE_CAPACITY"):
            Settings.from_env()
