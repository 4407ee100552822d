"""Public game API -- score submission, leaderboard, challenges, best setup, setup upload."""
import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field, StrictFloat, StrictInt
from starlette.datastructures import UploadFile

from civle.api.dependencies import get_service
from civle.api.responses import SERVER_ERROR, error_response
from civle.application.leaderboard_service import LeaderboardService
from civle.domain.errors import StorageError, ValidationError
from civle.domain.ranking import SCORE_CAPACITY

log = logging.getLogger("civle.api")

router = APIRouter(tags=["leaderboard"])


class SubmitScoreRequest(BaseModel):
    score: Optional[Union[StrictInt, StrictFloat]] = None
    name: Optional[str] = Field(None, max_length=50)
    screenshot: Optional[str] = None


@router.post("/submit-score")
def api_submit_score(req: SubmitScoreRequest, service: LeaderboardService = Depends(get_service)):
    """Record a score for today. Rank 1 may carry a setup screenshot."""
    try:
        result = service.submit_score(req.score, req.name, req.screenshot)
    except ValidationError as e:
        return error_response(400, str(e))
    except StorageError:
        log.exception("Error submitting score")
        return error_response(500, SERVER_ERROR)
    return {
        "success": True,
        "rank": result["rank"],
        "inTopN": result["in_top_n"],
    }


@router.get("/leaderboard")
def api_get_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=SCORE_CAPACITY),
    service: LeaderboardService = Depends(get_service),
):
    """Today's top scores as ``{name, score}``."""
    try:
        leaderboard = service.get_leaderboard(limit=limit)
    except StorageError:
        log.exception("Error loading leaderboard")
        return error_response(500, SERVER_ERROR)
    return {"success": True, "leaderboard": leaderboard}


@router.get("/daily-challenge")
def api_daily_challenge(service: LeaderboardService = Depends(get_service)):
    """Today's challenge definition as plain text."""
    challenge = service.get_daily_challenge()
    if challenge is None:
        return JSONResponse(status_code=404, content={"error": "Challenge not found for today"})
    return PlainTextResponse(challenge)


@router.get("/yesterday-best-setup")
def api_yesterday_best_setup(service: LeaderboardService = Depends(get_service)):
    """Yesterday's challenge with the winning setup screenshot, if any."""
    setup = service.get_best_setup()
    if setup is None:
        return error_response(404, "No setup available for yesterday")
    content = {
        "success": True,
        "challenge": setup["challenge"],
        "screenshot": setup["screenshot"],
        "hasScreenshot": setup["has_screenshot"],
    }
    if setup["player_name"] is not None:
        content["playerName"] = setup["player_name"]
    if setup["player_score"] is not None:
        content["playerScore"] = setup["player_score"]
    return JSONResponse(content=content, headers={"Cache-Control": "no-cache"})


@router.post("/submit-first-place-screenshot")
async def api_submit_first_place_screenshot(
    request: Request,
    service: LeaderboardService = Depends(get_service),
):
    """Game-client upload of today's winning setup as a multipart ``image/png`` part."""
    if not request.headers.get("content-type", "").startswith("multipart/form-data"):
        return error_response(400, "Invalid content type")
    form = await request.form()
    try:
        image = None
        for value in form.values():
            if isinstance(value, UploadFile) and value.content_type == "image/png":
                image = await value.read()
                break
    finally:
        await form.close()
    if not image:
        return error_response(400, "No image data found")
    try:
        path = await run_in_threadpool(service.replace_winner_image, image)
    except ValidationError as e:
        return error_response(400, str(e))
    except StorageError:
        log.exception("Error saving screenshot")
        return error_response(500, SERVER_ERROR)
    log.info("Winner screenshot uploaded: %s", path)
    return {"success": True}
