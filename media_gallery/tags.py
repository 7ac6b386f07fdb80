"""Plain-text tag lists stored next to each video."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)

TAG_FILENAME = "tags.txt"


def tag_file_path(folder_path: str | Path) -> Path:
    return Path(folder_path) / TAG_FILENAME


def parse_tags(content: str) -> List[str]:
    """Split tag file content into trimmed, non-empty tags."""
    return [tag.strip() for tag in content.split("\n") if tag.strip()]


def read_tags(folder_path: str | Path) -> List[str]:
    """Return the tags stored for a folder.

    A missing tag file means the folder has no tags. Read failures are logged
    and treated the same way so a broken file never fails a scan.
    """

    path = tag_file_path(folder_path)
    if not path.exists():
        return []
    try:
        with path.open("r", encoding="utf-8") as handle:
            return parse_tags(handle.read())
    except (OSError, UnicodeDecodeError):
        logger.error("Error reading tags from %s", path, exc_info=True)
        return []


def write_tags(folder_path: str | Path, tags: Iterable[str]) -> bool:
    """Overwrite the folder's tag file. Returns ``False`` if the write failed."""

    path = tag_file_path(folder_path)
    try:
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write("\n".join(tags))
    except OSError:
        logger.error("Error saving tags to %s", path, exc_info=True)
        return False
    return True
