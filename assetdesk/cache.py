"""
In-process read-through cache for list endpoints.

Entries expire after ``CACHE_TTL_SECONDS``. Readers use :meth:`TTLCache.get_or_load`
(cache-aside); every write path calls :func:`invalidate` with the keys it touches.
"""
import logging
import threading
import time
from typing import Any, Callable

from assetdesk.config import settings

logger = logging.getLogger(__name__)

_MISSING = object()


class TTLCache:
    def __init__(self, ttl_seconds: int = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default=None):
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return default
            return value

    def set(self, key: str, value, ttl_seconds: int | None = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)

    def delete(self, *keys: str) -> None:
        with self._lock:
            for key in keys:
                self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> tuple[Any, bool]:
        """Return ``(value, cached)``; on a miss ``loader()`` fills the entry."""
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            return value, True
        value = loader()
        self.set(key, value)
        return value, False


cache = TTLCache(settings.CACHE_TTL_SECONDS)


# ── Keys ───────────────────────────────────────────────────────────────────
def activity_key(referenceid: str) -> str:
    return f"activity:referenceid:{referenceid}"


def history_key(referenceid: str) -> str:
    return f"history:referenceid:{referenceid}"


def inventory_key(referenceid: str) -> str:
    return f"inventory:referenceid:{referenceid}"


def invalidate(*keys: str) -> None:
    """Drop cached entries after a write. A cache failure never fails the write."""
    try:
        cache.delete(*keys)
    except Exception:
        logger.warning("Failed to clear cache keys %s", keys, exc_info=True)
