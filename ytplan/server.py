"""Playlist proxy API - FastAPI application.

Run locally:  python -m ytplan.server
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ytplan.config import Config
from ytplan.errors import CUSTOM_ERRORS, InvalidInputError, status_code_for
from ytplan.models import Video
from ytplan.plans import day_to_dict
from ytplan.proxy import PlaylistService
from ytplan.scheduler import schedule

logger = logging.getLogger(__name__)

# Smaller positive budgets would produce one day per few seconds of video
MIN_DAILY_MINUTES = 1


class PlaylistRequest(BaseModel):
    """POST body for playlist lookups."""
    playlistId: Optional[str] = None


class PlanRequest(BaseModel):
    """POST body for plan generation."""
    playlistId: Optional[str] = None
    dailyMinutes: float = Field(..., description="Minutes available per day")


def client_key(request: Request) -> str:
    """Identify the caller for rate limiting."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def create_app(service: Optional[PlaylistService] = None) -> FastAPI:
    """Build the API around ``service`` (a fresh PlaylistService by default)."""
    service = service or PlaylistService()

    app = FastAPI(
        title="Playlist Planner API",
        description="Proxies YouTube playlist metadata for the day-wise watch planner",
        version="0.1.0",
    )
    app.state.service = service

    # Chrome extensions are always allowed; other origins only when listed
    origins = Config.allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_origin_regex=r"chrome-extension://.*" if origins else None,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    async def planner_error_handler(request: Request, exc: Exception):
        status = status_code_for(exc)
        if status >= 500:
            logger.error(f"API error for {request.url.path}: {type(exc).__name__}: {exc}")
        return JSONResponse(status_code=status, content={"error": str(exc) or "An unexpected error occurred"})

    for error_class in CUSTOM_ERRORS:
        app.add_exception_handler(error_class, planner_error_handler)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"ok": True}

    @app.options("/api/playlist-info")
    async def playlist_info_preflight():
        return {"ok": True}

    @app.get("/api/playlist-info")
    def get_playlist_info(request: Request, playlistId: Optional[str] = None):
        """
        Playlist metadata: title, videoCount and videos with durationMinutes.

        - **playlistId**: YouTube playlist id
        """
        return service.playlist_info(playlistId, client_key(request))

    @app.post("/api/playlist-info")
    def post_playlist_info(request: Request, body: Optional[PlaylistRequest] = None):
        playlist_id = body.playlistId if body else None
        return service.playlist_info(playlist_id, client_key(request))

    @app.post("/api/plan")
    def create_plan(request: Request, body: PlanRequest):
        """Fetch a playlist and split it into days of ``dailyMinutes``."""
        if 0 < body.dailyMinutes < MIN_DAILY_MINUTES:
            raise InvalidInputError(f"Daily watch time must be at least {MIN_DAILY_MINUTES} minute")
        info = service.playlist_info(body.playlistId, client_key(request))
        videos = [
            Video(id=v["id"], title=v["title"], duration_minutes=v["durationMinutes"])
            for v in info["videos"]
        ]
        days = schedule(videos, body.dailyMinutes)
        return {
            "title": info["title"],
            "videoCount": info["videoCount"],
            "dailyMinutes": body.dailyMinutes,
            "totalDays": len(days),
            "plan": [day_to_dict(day) for day in days],
        }

    return app


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    Config.validate()
    uvicorn.run(create_app(), host=Config.HOST, port=Config.PORT)
