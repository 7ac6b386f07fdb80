"""High-level orchestration of catalog reads and tag edits."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .config import GalleryConfig
from .library import CatalogIndex
from .models import CatalogEntry
from .scanner import FolderScanner
from .search import SearchCache
from .tags import read_tags, write_tags

logger = logging.getLogger(__name__)


class VideoNotFoundError(LookupError):
    """Raised when a video id has no folder or no catalog entry."""


class InvalidTagError(ValueError):
    """Raised when a tag cannot be stored in a tag file."""


class TagWriteError(RuntimeError):
    """Raised when a tag file write fails under the ``fail`` policy."""


@dataclass
class Pagination:
    current_page: int
    page_size: int
    total_count: int
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "currentPage": self.current_page,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
        }


@dataclass
class Page:
    videos: List[CatalogEntry]
    pagination: Pagination

    def to_dict(self) -> dict:
        return {
            "videos": [entry.to_dict() for entry in self.videos],
            "pagination": self.pagination.to_dict(),
        }


def paginate(items: List[CatalogEntry], page: int, limit: int) -> Page:
    """Slice ``items`` into the 1-based ``page`` of size ``limit``."""

    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive.")
    start = (page - 1) * limit
    return Page(
        videos=items[start : start + limit],
        pagination=Pagination(
            current_page=page,
            page_size=limit,
            total_count=len(items),
            total_pages=math.ceil(len(items) / limit),
        ),
    )


def normalize_tag(tag: Optional[str]) -> str:
    token = (tag or "").strip()
    if not token:
        raise InvalidTagError("Tag is required")
    if "\n" in token or "\r" in token:
        raise InvalidTagError("Tag cannot contain line breaks")
    return token


class GalleryService:
    """Owns the catalog index, the search cache and the lock guarding both.

    Handlers run concurrently in the server's thread pool; every index
    read-modify-write and every cache mutation happens under ``_lock``.
    """

    def __init__(self, config: Optional[GalleryConfig] = None, *, clock: Optional[Callable[[], float]] = None) -> None:
        self.config = config or GalleryConfig()
        self.config.media_root.mkdir(parents=True, exist_ok=True)
        clock_kwargs = {"clock": clock} if clock is not None else {}
        self.scanner = FolderScanner(
            self.config.media_root,
            self.config.public_base_url,
            sort_listings=self.config.sort_listings,
        )
        self.index = CatalogIndex(
            self.config.index_path,
            self.scanner,
            scan_interval=self.config.scan_interval,
            **clock_kwargs,
        )
        self.search_cache = SearchCache(self.config.search_ttl, **clock_kwargs)
        self._lock = threading.RLock()

    # Internal helpers -------------------------------------------------
    def _folder_path(self, video_id: str) -> Path:
        if not video_id or video_id in (".", "..") or "/" in video_id or "\\" in video_id:
            raise VideoNotFoundError(video_id)
        folder_path = self.config.media_root / video_id
        if not folder_path.is_dir():
            raise VideoNotFoundError(video_id)
        return folder_path

    def _store_tags(self, video_id: str, folder_path: Path, tags: List[str], changed: bool) -> CatalogEntry:
        # empty until first scanned
        self.index.get_or_scan()
        if changed and not write_tags(folder_path, tags):
            if self.config.tag_write_policy == "fail":
                raise TagWriteError(f"Could not write tags for {video_id}")
            logger.warning("Tag file write failed for %s; updating the index anyway", video_id)

        entry = self.index.update_tags(video_id, tags)
        self.search_cache.invalidate_all()
        if entry is None:
            raise VideoNotFoundError(video_id)
        return entry

    # Public API -------------------------------------------------------
    def list_videos(self, page: int = 1, limit: int = 20) -> Page:
        with self._lock:
            entries = self.index.get_or_scan()
        return paginate(entries, page, limit)

    def search_videos(self, term: Optional[str], page: int = 1, limit: int = 20) -> Page:
        with self._lock:
            entries = self.index.get_or_scan()
            results = self.search_cache.search(entries, term)
        return paginate(results, page, limit)

    def rescan(self) -> List[CatalogEntry]:
        with self._lock:
            return self.index.rescan(force=True)

    def get_video(self, video_id: str) -> CatalogEntry:
        with self._lock:
            entry = self.index.get(video_id)
        if entry is None:
            raise VideoNotFoundError(video_id)
        return entry

    def add_tag(self, video_id: str, tag: Optional[str]) -> CatalogEntry:
        """Append ``tag`` to the folder's tags unless it is already present."""

        tag = normalize_tag(tag)
        with self._lock:
            folder_path = self._folder_path(video_id)
            tags = read_tags(folder_path)
            changed = tag not in tags
            if changed:
                tags.append(tag)
            return self._store_tags(video_id, folder_path, tags, changed)

    def remove_tag(self, video_id: str, tag: Optional[str]) -> CatalogEntry:
        tag = normalize_tag(tag)
        with self._lock:
            folder_path = self._folder_path(video_id)
            current = read_tags(folder_path)
            tags = [existing for existing in current if existing != tag]
            return self._store_tags(video_id, folder_path, tags, len(tags) != len(current))
