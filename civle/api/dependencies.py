"""FastAPI dependencies resolving the components wired in ``create_app``."""
from fastapi import Request

from civle.application.leaderboard_service import LeaderboardService
from civle.config import Settings


def get_service(request: Request) -> LeaderboardService:
    return request.app.state.service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
