"""Derive catalog entries from per-video media folders."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional
from urllib.parse import quote

from .models import CatalogEntry
from .tags import read_tags
from .time_utils import utc_timestamp

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = frozenset({".mp4", ".avi", ".mkv", ".mov"})
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif"})


def _first_with_extension(filenames: Iterable[str], extensions: frozenset[str]) -> Optional[str]:
    for filename in filenames:
        if os.path.splitext(filename)[1].lower() in extensions:
            return filename
    return None


class FolderScanner:
    """Inspect folders directly below ``media_root``.

    By default "first video" and "first image" follow the order the filesystem
    lists entries in, which differs between platforms. ``sort_listings`` sorts
    names first so the choice is reproducible.
    """

    def __init__(
        self,
        media_root: str | Path,
        public_base_url: str,
        *,
        sort_listings: bool = False,
    ) -> None:
        self.media_root = Path(media_root)
        self.public_base_url = public_base_url.rstrip("/")
        self.sort_listings = sort_listings

    # Internal helpers -------------------------------------------------
    def _listing(self, path: Path) -> List[str]:
        names = os.listdir(path)
        return sorted(names) if self.sort_listings else names

    def media_url(self, folder_name: str, filename: str) -> str:
        return f"{self.public_base_url}/videos/{quote(folder_name)}/{quote(filename)}"

    # Public API -------------------------------------------------------
    def list_folders(self) -> List[str]:
        """Return the names of the immediate subdirectories of the media root."""
        return [name for name in self._listing(self.media_root) if (self.media_root / name).is_dir()]

    def scan_folder(self, folder_name: str) -> Optional[CatalogEntry]:
        """Build the catalog entry for one folder, or ``None`` if it holds no video."""

        folder_path = self.media_root / folder_name
        try:
            filenames = self._listing(folder_path)
        except OSError:
            logger.warning("Skipping unreadable folder %s", folder_path, exc_info=True)
            return None

        video_file = _first_with_extension(filenames, VIDEO_EXTENSIONS)
        if video_file is None:
            return None
        cover_file = _first_with_extension(filenames, IMAGE_EXTENSIONS)

        return CatalogEntry(
            id=folder_name,
            name=folder_name,
            video_url=self.media_url(folder_name, video_file),
            cover_url=self.media_url(folder_name, cover_file) if cover_file else None,
            tags=read_tags(folder_path),
            created_at=utc_timestamp(),
        )
