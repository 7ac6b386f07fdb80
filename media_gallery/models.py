"""Catalog records shared by the scanner, the index and the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CatalogEntry:
    """One indexed media folder.

    ``id`` and ``name`` are both the folder name. ``tags`` mirrors the folder's
    tag file at the time of the last scan or tag update.
    """

    id: str
    name: str
    video_url: str
    cover_url: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "videoUrl": self.video_url,
            "coverUrl": self.cover_url,
            "tags": list(self.tags),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            video_url=data["videoUrl"],
            cover_url=data.get("coverUrl"),
            tags=list(data.get("tags") or []),
            created_at=data.get("createdAt", ""),
        )
