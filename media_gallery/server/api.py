"""FastAPI application exposing the media gallery catalog."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from media_gallery.config import GalleryConfig
from media_gallery.library import CatalogIndexError
from media_gallery.service import (
    GalleryService,
    InvalidTagError,
    TagWriteError,
    VideoNotFoundError,
)

logger = logging.getLogger(__name__)

VIDEO_NOT_FOUND = "Video not found"


def _describe_error(error: dict) -> str:
    """Render one validation error as ``field: message``."""
    parts = [str(part) for part in error.get("loc", ()) if part not in ("query", "body", "path")]
    message = error.get("msg", "invalid value")
    return f"{'.'.join(parts)}: {message}" if parts else message


class TagRequest(BaseModel):
    tag: Optional[str] = Field(None, description="Tag to attach to the video.")


def create_app(config: Optional[GalleryConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    config = config or GalleryConfig.from_env()
    service = GalleryService(config)

    app = FastAPI(title="Media Gallery", version="0.1.0")
    app.state.gallery = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(_describe_error(error) for error in exc.errors())
        return JSONResponse({"error": message or "Invalid request"}, status_code=422)

    @app.exception_handler(CatalogIndexError)
    async def index_error(request: Request, exc: CatalogIndexError) -> JSONResponse:
        logger.error("Catalog index unavailable", exc_info=exc)
        return JSONResponse({"error": "Catalog index is unreadable"}, status_code=500)

    # Dependency to access the gallery within endpoints ---------------
    def get_gallery() -> GalleryService:
        return service

    # Routes ---------------------------------------------------------
    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/videos")
    def list_videos(
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1),
        gallery: GalleryService = Depends(get_gallery),
    ) -> dict:
        return gallery.list_videos(page, limit).to_dict()

    @app.get("/api/videos/search")
    def search_videos(
        q: Optional[str] = Query(None),
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1),
        gallery: GalleryService = Depends(get_gallery),
    ) -> dict:
        return gallery.search_videos(q, page, limit).to_dict()

    @app.get("/api/videos/rescan")
    def rescan(gallery: GalleryService = Depends(get_gallery)) -> dict:
        videos = gallery.rescan()
        return {"message": "Rescan completed", "videoCount": len(videos)}

    @app.get("/api/videos/{video_id}")
    def get_video(video_id: str, gallery: GalleryService = Depends(get_gallery)) -> dict:
        try:
            return gallery.get_video(video_id).to_dict()
        except VideoNotFoundError as exc:
            raise HTTPException(status_code=404, detail=VIDEO_NOT_FOUND) from exc

    @app.post("/api/videos/{video_id}/tags")
    def add_tag(
        video_id: str,
        payload: Optional[TagRequest] = Body(None),
        gallery: GalleryService = Depends(get_gallery),
    ) -> dict:
        try:
            return gallery.add_tag(video_id, payload.tag if payload else None).to_dict()
        except InvalidTagError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except VideoNotFoundError as exc:
            raise HTTPException(status_code=404, detail=VIDEO_NOT_FOUND) from exc
        except TagWriteError as exc:
            raise HTTPException(status_code=500, detail="Failed to save tags.") from exc

    @app.delete("/api/videos/{video_id}/tags/{tag}")
    def remove_tag(video_id: str, tag: str, gallery: GalleryService = Depends(get_gallery)) -> dict:
        try:
            return gallery.remove_tag(video_id, tag).to_dict()
        except InvalidTagError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except VideoNotFoundError as exc:
            raise HTTPException(status_code=404, detail=VIDEO_NOT_FOUND) from exc
        except TagWriteError as exc:
            raise HTTPException(status_code=500, detail="Failed to save tags.") from exc

    # Media files and the optional single-page client ----------------
    app.mount("/videos", StaticFiles(directory=config.media_root), name="videos")

    static_dir = config.static_dir
    if static_dir is not None and static_dir.exists():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

        @app.get("/")
        def index() -> Response:
            index_path = static_dir / "index.html"
            if not index_path.exists():
                raise HTTPException(status_code=404, detail="Front-end assets missing.")
            return FileResponse(index_path)

    return app
