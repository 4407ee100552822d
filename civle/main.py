"""Entry point. Wires stores into the service and serves the game frontend.

Persistence is flat files under ``CIVLE_STORAGE_DIR``:
  - scores/<MM-DD>.json           -- the day's top-100 score list
  - screenshots/<MM-DD>...png     -- the day's winner screenshot
A background task purges everything older than yesterday.
"""
import asyncio
import contextlib
import logging
import os
from datetime import datetime
from typing import Callable

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(PROJECT_DIR, ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from civle.api.responses import register_exception_handlers
from civle.api.routes.admin_routes import router as admin_router
from civle.api.routes.leaderboard_routes import router as leaderboard_router
from civle.application.leaderboard_service import LeaderboardService
from civle.application.score_store import ScoreStore
from civle.config import Settings
from civle.domain.day_key import DatePartitioner
from civle.infrastructure.blocklist import Blocklist
from civle.infrastructure.repositories.challenge_repository import ChallengeRepository
from civle.infrastructure.repositories.score_repository import JsonScoreRepository
from civle.infrastructure.repositories.screenshot_repository import FileScreenshotRepository
from civle.infrastructure.retention import RetentionSweeper

log = logging.getLogger("civle.startup")

VERSION = "1.0.0"

# URL prefix -> directory under the public dir (None = data dir)
_STATIC_MOUNTS = (
    ("/assets", "assets"),
    ("/public", ""),
    ("/data", None),
)


def build_components(settings: Settings, clock: Callable[[], datetime] | None = None):
    """Construct the service and the sweeper from *settings*."""
    partitioner = DatePartitioner(settings.timezone_name)
    score_repo = JsonScoreRepository(settings.scores_dir)
    screenshot_repo = FileScreenshotRepository(settings.screenshots_dir)
    score_store = ScoreStore(
        score_repo,
        blocklist=Blocklist.from_file(settings.blocklist_path),
        capacity=settings.score_capacity,
        clock=clock,
    )
    service = LeaderboardService(
        score_store,
        screenshot_repo,
        ChallengeRepository(settings.challenges_dir),
        partitioner,
        leaderboard_size=settings.leaderboard_size,
        clock=clock,
    )
    sweeper = RetentionSweeper(partitioner, [score_repo, screenshot_repo], clock=clock)
    return service, sweeper


def create_app(settings: Settings | None = None, clock: Callable[[], datetime] | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    service, sweeper = build_components(settings, clock)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        task = asyncio.create_task(sweeper.run_forever(settings.sweep_interval_seconds))
        log.info("Civle server started (storage=%s, tz=%s)", settings.storage_dir, settings.timezone_name)
        try:
            yield
        finally:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    app = FastAPI(
        title="Civle",
        description="Daily puzzle game server with a per-day leaderboard.",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.service = service

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(leaderboard_router)
    app.include_router(admin_router)

    for prefix, subdir in _STATIC_MOUNTS:
        directory = settings.data_dir if subdir is None else os.path.join(settings.public_dir, subdir)
        if os.path.isdir(directory):
            app.mount(prefix, StaticFiles(directory=directory), name=prefix.strip("/"))

    @app.get("/", include_in_schema=False)
    def serve_frontend():
        """Serve the game page."""
        index_path = os.path.join(settings.public_dir, "game.html")
        if os.path.exists(index_path):
            return FileResponse(index_path, headers={"Cache-Control": "no-cache"})
        return {"message": "Civle API is running. No frontend found."}

    @app.get("/health")
    def health():
        return {
            "status": "online",
            "version": VERSION,
            "storage": settings.storage_dir,
            "today": service.today(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "civle.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
        reload=True,
        reload_excludes=["storage/*", "__pycache__/*"],
    )
