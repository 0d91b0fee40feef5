"""Simple in-memory TTL caches for drug summaries and AI translations.

The lookup handler keeps assembled summaries for a few minutes; a second,
shorter cache holds AI translations. Entries expire purely by timestamp
comparison at read time.
"""

from __future__ import annotations

import hashlib
import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """Key -> (value, stored_at) store with a fixed time-to-live.

    The cache performs no locking. Callers on the event loop must not await
    between a ``get`` miss and the matching ``set``.
    """

    def __init__(self, ttl_seconds: float = 300, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = max(ttl_seconds, 0)
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self.hits = 0
        self.misses = 0

    def _is_fresh(self, stored_at: float) -> bool:
        return (self._clock() - stored_at) <= self.ttl_seconds

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is not None and not self._is_fresh(entry[1]):
            del self._entries[key]
            entry = None

        if entry is None:
            self.misses += 1
            return None

        self.hits += 1
        return entry[0]

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock())

    def clear(self) -> int:
        """Remove all entries and return how many were held."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        lookups = self.hits + self.misses
        return {
            "entries": len(self._entries),
            "ttl_seconds": self.ttl_seconds,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups * 100.0, 1) if lookups else 0.0,
        }


def drug_cache_key(drug_name: str, language: str) -> str:
    """Create a stable cache key for a drug lookup."""

    return "|".join([" ".join(drug_name.lower().split()), language])


def translation_cache_key(language: str, text: str) -> str:
    """Translations are addressed by target language and a digest of the whole text."""

    return "|".join([language, hashlib.sha256(text.encode("utf-8")).hexdigest()])
