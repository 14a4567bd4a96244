"""Violation cache keyed by document content.

Each rule owns one ``ViolationCache`` so repeated analysis of the same text
(an editor re-running diagnostics, ``fix`` after ``check``) skips the scan.
"""
import hashlib
import logging
import threading
from typing import Optional

from .models import LintWarning

logger = logging.getLogger(__name__)


def content_hash(content: str) -> str:
    """Hash of the full document content, used as the cache key."""
    return hashlib.blake2b(content.encode("utf-8"), digest_size=16).hexdigest()


class ViolationCache:
    """
    Thread-safe map of content hash -> warnings computed for that content.

    Entries are never invalidated piecemeal: any change to the content yields
    a new key. There is no eviction; long-lived callers can ``clear()``.
    The lock is only held to read or store an entry, never while scanning.
    """

    def __init__(self):
        self._entries: dict[str, tuple[LintWarning, ...]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[tuple[LintWarning, ...]]:
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                self.misses += 1
            else:
                self.hits += 1
            return cached

    def store(self, key: str, warnings: list[LintWarning]) -> tuple[LintWarning, ...]:
        frozen = tuple(warnings)
        with self._lock:
            self._entries[key] = frozen
        return frozen

    def clear(self) -> int:
        """
        Drop every entry.

        Returns:
            Number of entries that were cached
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count > 0:
            logger.debug(f"Cleared {count} cached violation list(s)")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
