"""Substring search over the catalog with a short-lived result cache."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .models import CatalogEntry

DEFAULT_SEARCH_TTL_SECONDS = 5 * 60  # five minutes


@dataclass
class CachedResults:
    results: List[CatalogEntry]
    timestamp: float


def matches(entry: CatalogEntry, term: str) -> bool:
    """Case-insensitive substring match against the name or any tag.

    ``term`` must already be lowercase.
    """
    if term in entry.name.lower():
        return True
    return any(term in tag.lower() for tag in entry.tags)


class SearchCache:
    """Memoize search results per lowercase term.

    Cached results are served verbatim until ``ttl`` elapses, even if the
    catalog changed in the meantime. Writers must call :meth:`invalidate_all`
    after changing tags.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_SEARCH_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CachedResults] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, term: str) -> bool:
        return term.lower() in self._entries

    def search(self, catalog: List[CatalogEntry], term: Optional[str]) -> List[CatalogEntry]:
        if not term:
            return catalog

        key = term.lower()
        now = self._clock()
        cached = self._entries.get(key)
        if cached is not None:
            if now - cached.timestamp < self.ttl:
                return cached.results
            del self._entries[key]

        results = [entry for entry in catalog if matches(entry, key)]
        self._entries[key] = CachedResults(results=results, timestamp=now)
        return results

    def invalidate_all(self) -> None:
        self._entries.clear()
