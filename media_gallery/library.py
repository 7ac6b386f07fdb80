"""JSON-backed catalog index of the media root."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Callable, List, Optional

from .models import CatalogEntry
from .scanner import FolderScanner
from .time_utils import format_seconds

logger = logging.getLogger(__name__)

DEFAULT_SCAN_INTERVAL_SECONDS = 60 * 60  # one hour


class CatalogIndexError(RuntimeError):
    """Raised when the on-disk index cannot be read or decoded."""


class CatalogIndex:
    """Materialized view of the media root, persisted as a JSON array.

    The index is only rebuilt by :meth:`rescan`. A non-forced rescan inside
    ``scan_interval`` of the previous one returns the persisted data without
    touching the media root. The process starts stale: ``last_scan`` is
    ``None`` until the first walk completes.
    """

    def __init__(
        self,
        path: str | Path,
        scanner: FolderScanner,
        *,
        scan_interval: float = DEFAULT_SCAN_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = Path(path)
        self.scanner = scanner
        self.scan_interval = scan_interval
        self._clock = clock
        self.last_scan: Optional[float] = None
        if not self.path.exists():
            self.persist([])

    # Internal helpers -------------------------------------------------
    def _walk(self) -> List[CatalogEntry]:
        entries = []
        for folder_name in self.scanner.list_folders():
            entry = self.scanner.scan_folder(folder_name)
            if entry is not None:
                entries.append(entry)
        return entries

    # Public API -------------------------------------------------------
    @property
    def is_stale(self) -> bool:
        if self.last_scan is None:
            return True
        return self._clock() - self.last_scan >= self.scan_interval

    def load_persisted(self) -> List[CatalogEntry]:
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
            return [CatalogEntry.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise CatalogIndexError(f"Failed to load catalog index {self.path}: {exc}") from exc

    def persist(self, entries: List[CatalogEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump([entry.to_dict() for entry in entries], handle, indent=2, ensure_ascii=False)

    def rescan(self, force: bool = False) -> List[CatalogEntry]:
        """Return the catalog, walking the media root when forced or stale."""

        if not force and not self.is_stale:
            return self.load_persisted()

        logger.info("Scanning videos in %s", self.scanner.media_root)
        started = time.perf_counter()
        now = self._clock()
        entries = self._walk()
        self.persist(entries)
        self.last_scan = now
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "Video scan completed in %.0fms. Found %d videos. Next automatic scan after %s.",
            elapsed_ms,
            len(entries),
            format_seconds(self.scan_interval),
        )
        return entries

    def get_or_scan(self) -> List[CatalogEntry]:
        """Return the persisted catalog, bootstrapping it with a scan when empty."""
        entries = self.load_persisted()
        if not entries:
            entries = self.rescan()
        return entries

    def get(self, entry_id: str) -> Optional[CatalogEntry]:
        for entry in self.get_or_scan():
            if entry.id == entry_id:
                return entry
        return None

    def update_tags(self, entry_id: str, tags: List[str]) -> Optional[CatalogEntry]:
        """Replace the tags of one entry and persist the index.

        Returns the updated entry, or ``None`` when ``entry_id`` is not indexed,
        in which case nothing is written.
        """

        entries = self.load_persisted()
        for entry in entries:
            if entry.id == entry_id:
                entry.tags = list(tags)
                self.persist(entries)
                return entry
        return None
