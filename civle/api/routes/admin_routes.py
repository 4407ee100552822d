"""Admin API -- access-key gated leaderboard reset and screenshot overwrite."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from civle.api.dependencies import get_service, get_settings
from civle.api.responses import SERVER_ERROR, error_response
from civle.application.leaderboard_service import LeaderboardService
from civle.config import Settings
from civle.domain.errors import AuthError, StorageError, ValidationError
from civle.infrastructure.access_key import verify_access_key

log = logging.getLogger("civle.api")

router = APIRouter(tags=["admin"])


class ScreenshotUploadRequest(BaseModel):
    screenshot: str


@router.get("/reset_leaderboard")
def api_reset_leaderboard(
    key: Optional[str] = None,
    service: LeaderboardService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    """Delete today's scores and winner screenshot."""
    try:
        verify_access_key(settings, key)
        result = service.reset_day()
    except AuthError as e:
        return error_response(403, str(e))
    except StorageError:
        log.exception("Error resetting leaderboard")
        return error_response(500, SERVER_ERROR)
    log.info("Leaderboard %s reset by admin", result["day_key"])
    return {"success": True, "message": "Leaderboard reset successfully"}


@router.post("/first-place-screenshot")
def api_upload_first_place_screenshot(
    req: ScreenshotUploadRequest,
    key: Optional[str] = None,
    service: LeaderboardService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    """Replace today's winner screenshot with an uploaded PNG data URL."""
    try:
        verify_access_key(settings, key)
        path = service.upload_winner_screenshot(req.screenshot)
    except AuthError as e:
        return error_response(403, str(e))
    except ValidationError as e:
        return error_response(400, str(e))
    except StorageError:
        log.exception("Error saving screenshot")
        return error_response(500, SERVER_ERROR)
    log.info("Winner screenshot overwritten by admin: %s", path)
    return {"success": True}
