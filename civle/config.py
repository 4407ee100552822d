"""Runtime configuration, built once at startup and passed into components.

Every value comes from the environment (a project-root ``.env`` is loaded by
the entry point). Paths are resolved relative to the working directory.
"""
import os

from civle.domain.day_key import DEFAULT_TIMEZONE
from civle.domain.ranking import SCORE_CAPACITY

DEFAULT_LEADERBOARD_SIZE = 20
DEFAULT_SWEEP_INTERVAL_SECONDS = 24 * 60 * 60


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


class Settings:
    """Explicit configuration object for the whole server."""

    def __init__(
        self,
        storage_dir: str = "storage",
        challenges_dir: str = "day_challenges",
        public_dir: str = "public",
        data_dir: str = "data",
        blocklist_path: str | None = None,
        access_key: str | None = None,
        access_key_file: str = "endpoint_key.txt",
        timezone_name: str = DEFAULT_TIMEZONE,
        leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE,
        score_capacity: int = SCORE_CAPACITY,
        sweep_interval_seconds: int = DEFAULT_SWEEP_INTERVAL_SECONDS,
        allowed_origins: list | None = None,
        log_level: str = "INFO",
    ):
        if leaderboard_size < 1 or score_capacity < 1:
            raise ValueError("leaderboard_size and score_capacity must be positive")
        if sweep_interval_seconds < 1:
            raise ValueError("sweep_interval_seconds must be positive")
        self.storage_dir = storage_dir
        self.challenges_dir = challenges_dir
        self.public_dir = public_dir
        self.data_dir = data_dir
        self.blocklist_path = blocklist_path or os.path.join(data_dir, "bad-words.txt")
        self.access_key = access_key
        self.access_key_file = access_key_file
        self.timezone_name = timezone_name
        self.leaderboard_size = leaderboard_size
        self.score_capacity = score_capacity
        self.sweep_interval_seconds = sweep_interval_seconds
        self.allowed_origins = allowed_origins or ["*"]
        self.log_level = log_level

    @property
    def scores_dir(self) -> str:
        return os.path.join(self.storage_dir, "scores")

    @property
    def screenshots_dir(self) -> str:
        return os.path.join(self.storage_dir, "screenshots")

    @classmethod
    def from_env(cls) -> "Settings":
        data_dir = os.environ.get("CIVLE_DATA_DIR", "data")
        origins = os.environ.get("ALLOWED_ORIGINS", "").strip()
        return cls(
            storage_dir=os.environ.get("CIVLE_STORAGE_DIR", "storage"),
            challenges_dir=os.environ.get("CIVLE_CHALLENGES_DIR", "day_challenges"),
            public_dir=os.environ.get("CIVLE_PUBLIC_DIR", "public"),
            data_dir=data_dir,
            blocklist_path=os.environ.get("CIVLE_BLOCKLIST_PATH") or None,
            access_key=os.environ.get("CIVLE_ACCESS_KEY", "").strip() or None,
            access_key_file=os.environ.get("CIVLE_ACCESS_KEY_FILE", "endpoint_key.txt"),
            timezone_name=os.environ.get("CIVLE_TIMEZONE", DEFAULT_TIMEZONE),
            leaderboard_size=_env_int("CIVLE_LEADERBOARD_SIZE", DEFAULT_LEADERBOARD_SIZE),
            score_capacity=_env_int("CIVLE_SCORE_CAPACITY", SCORE_CAPACITY),
            sweep_interval_seconds=_env_int(
                "CIVLE_SWEEP_INTERVAL_SECONDS", DEFAULT_SWEEP_INTERVAL_SECONDS
            ),
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()] or None,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
