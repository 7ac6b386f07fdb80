"""Runtime configuration for the gallery server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .library import DEFAULT_SCAN_INTERVAL_SECONDS
from .search import DEFAULT_SEARCH_TTL_SECONDS
from .time_utils import parse_duration

TAG_WRITE_POLICIES = ("proceed", "fail")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    token = value.strip().lower()
    if token in _TRUE_VALUES:
        return True
    if token in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass
class GalleryConfig:
    """Settings for one gallery server instance.

    ``tag_write_policy`` decides what happens when a tag file cannot be
    written: ``"proceed"`` still patches the index (so the index and the tag
    file disagree until the next full scan), ``"fail"`` rejects the request.
    """

    media_root: Path = Path("videos")
    index_path: Path = Path("videoData.json")
    host: str = "0.0.0.0"
    port: int = 3001
    public_base_url: Optional[str] = None
    scan_interval: float = DEFAULT_SCAN_INTERVAL_SECONDS
    search_ttl: float = DEFAULT_SEARCH_TTL_SECONDS
    tag_write_policy: str = "proceed"
    sort_listings: bool = False
    static_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        self.media_root = Path(self.media_root)
        self.index_path = Path(self.index_path)
        if self.static_dir is not None:
            self.static_dir = Path(self.static_dir)
        if self.tag_write_policy not in TAG_WRITE_POLICIES:
            raise ValueError(
                f"tag_write_policy must be one of {', '.join(TAG_WRITE_POLICIES)}, got {self.tag_write_policy!r}"
            )
        if self.public_base_url is None:
            self.public_base_url = f"http://localhost:{self.port}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GalleryConfig":
        """Build a configuration from ``MEDIA_GALLERY_*`` environment variables."""

        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("MEDIA_GALLERY_ROOT"):
            kwargs["media_root"] = Path(env["MEDIA_GALLERY_ROOT"])
        if env.get("MEDIA_GALLERY_INDEX"):
            kwargs["index_path"] = Path(env["MEDIA_GALLERY_INDEX"])
        if env.get("HOST"):
            kwargs["host"] = env["HOST"]
        if env.get("PORT"):
            kwargs["port"] = int(env["PORT"])
        if env.get("MEDIA_GALLERY_BASE_URL"):
            kwargs["public_base_url"] = env["MEDIA_GALLERY_BASE_URL"]
        if env.get("MEDIA_GALLERY_SCAN_INTERVAL"):
            kwargs["scan_interval"] = parse_duration(env["MEDIA_GALLERY_SCAN_INTERVAL"])
        if env.get("MEDIA_GALLERY_SEARCH_TTL"):
            kwargs["search_ttl"] = parse_duration(env["MEDIA_GALLERY_SEARCH_TTL"])
        if env.get("MEDIA_GALLERY_TAG_WRITE_POLICY"):
            kwargs["tag_write_policy"] = env["MEDIA_GALLERY_TAG_WRITE_POLICY"].strip().lower()
        if "MEDIA_GALLERY_SORT_LISTINGS" in env:
            kwargs["sort_listings"] = _parse_bool("MEDIA_GALLERY_SORT_LISTINGS", env["MEDIA_GALLERY_SORT_LISTINGS"])
        if env.get("MEDIA_GALLERY_STATIC_DIR"):
            kwargs["static_dir"] = Path(env["MEDIA_GALLERY_STATIC_DIR"])
        return cls(**kwargs)
