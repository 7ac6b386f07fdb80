"""Shared fixtures: throwaway media trees and a controllable clock."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest

from media_gallery.config import GalleryConfig


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_folder(root: Path, name: str, files: Dict[str, bytes] | None = None, tags: Optional[str] = None) -> Path:
    """Create ``root/name`` holding ``files`` and, optionally, a tags.txt."""
    folder = root / name
    folder.mkdir(parents=True, exist_ok=True)
    for filename, content in (files or {}).items():
        (folder / filename).write_bytes(content)
    if tags is not None:
        (folder / "tags.txt").write_text(tags, encoding="utf-8")
    return folder


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def media_root(tmp_path):
    root = tmp_path / "videos"
    root.mkdir()
    return root


@pytest.fixture
def cat_video(media_root):
    return make_folder(
        media_root,
        "cat_video",
        {"clip.mp4": b"video-bytes", "thumb.png": b"png-bytes"},
        tags="cat\nfunny",
    )


@pytest.fixture
def config(tmp_path, media_root):
    return GalleryConfig(
        media_root=media_root,
        index_path=tmp_path / "videoData.json",
        public_base_url="http://testserver",
    )
