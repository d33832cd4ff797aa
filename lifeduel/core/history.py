"""Bounded memory of seen grid fingerprints.

Maps each fingerprint to the generation where it was first observed. When the
capacity is exceeded the entries with the smallest generation index are
evicted first, regardless of how recently they were looked up.
"""

import heapq
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


class HistoryTracker:
    """Fingerprint -> first-seen generation map with oldest-first eviction."""

    def __init__(self, capacity: int = 10000):
        """Initialize history tracker.

        Args:
            capacity: Maximum number of fingerprints kept; 0 or less means unbounded
        """
        self.capacity = capacity
        self._seen: Dict[str, int] = {}

        self.evictions = 0

    def observe(self, fingerprint: str, generation: int) -> Optional[int]:
        """Record a fingerprint seen at generation.

        Args:
            fingerprint: Grid fingerprint
            generation: Generation index of the observation

        Returns:
            None if the fingerprint is new, otherwise the generation at which
            it was first seen (the stored entry is left untouched)
        """
        previous = self._seen.get(fingerprint)
        if previous is not None:
            return previous

        self._seen[fingerprint] = generation
        self._evict()
        return None

    def first_seen(self, fingerprint: str) -> Optional[int]:
        """Generation at which fingerprint was first recorded, if still held."""
        return self._seen.get(fingerprint)

    def resize(self, capacity: int) -> None:
        """Change capacity, evicting immediately if the map is now too large."""
        self.capacity = capacity
        self._evict()

    def _evict(self) -> None:
        if self.capacity <= 0 or len(self._seen) <= self.capacity:
            return

        remove_count = len(self._seen) - self.capacity
        oldest = heapq.nsmallest(remove_count, self._seen.items(), key=lambda item: item[1])
        for key, _ in oldest:
            del self._seen[key]

        self.evictions += remove_count
        logger.debug(f"History eviction: dropped {remove_count} oldest fingerprint(s)")

    def clear(self) -> None:
        """Forget every fingerprint."""
        self._seen.clear()
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._seen

    def __repr__(self) -> str:
        return f"HistoryTracker(size={len(self._seen)}, capacity={self.capacity})"
