"""In-memory TTL cache for rendered locale pages."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from threading import Lock

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached page rendering with expiration."""

    value: str
    expires_at: float

    def is_expired(self) -> bool:
        """Check if this entry has expired."""
        return time.time() > self.expires_at


@dataclass
class PageCacheConfig:
    """Configuration for page render caching."""

    max_size: int = 100
    ttl_seconds: int = 300
    cleanup_interval_seconds: int = 60

    @classmethod
    def from_settings(cls) -> "PageCacheConfig":
        """Create config from application settings."""
        from src.core.config import get_settings
        settings = get_settings()
        return cls(
            max_size=settings.page_cache_max_size,
            ttl_seconds=settings.page_cache_ttl_seconds,
        )


class PageRenderCache:
    """Thread-safe in-memory cache of rendered pages keyed by path."""

    def __init__(self, config: PageCacheConfig | None = None) -> None:
        """Initialize the page cache.

        Args:
            config: Optional cache configuration.
        """
        self.config = config or PageCacheConfig()
        self._cache: dict[str, CacheEntry] = {}
        self._lock = Lock()
        self._cleanup_task: asyncio.Task | None = None

    async def start_cleanup_task(self) -> None:
        """Start background cleanup task."""
        if self._cleanup_task is None:
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())
            logger.info("Page cache cleanup task started")

    async def stop_cleanup_task(self) -> None:
        """Stop background cleanup task."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None
            logger.info("Page cache cleanup task stopped")

    async def _cleanup_loop(self) -> None:
        """Background loop to cleanup expired entries."""
        while True:
            await asyncio.sleep(self.config.cleanup_interval_seconds)
            count = self.cleanup()
            if count > 0:
                logger.debug("Page cache cleaned up %d expired entries", count)

    @staticmethod
    def _normalize(path: str) -> str:
        """Treat "/en" and "/en/" as the same page."""
        return path.rstrip("/") or "/"

    def get(self, path: str) -> str | None:
        """Get a cached rendering if available and not expired.

        Args:
            path: Request path of the page.

        Returns:
            The rendered HTML or None if not found/expired.
        """
        key = self._normalize(path)

        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if entry.is_expired():
                del self._cache[key]
                return None

            logger.debug("Page cache hit for %s", key)
            return entry.value

    def set(self, path: str, html: str) -> None:
        """Cache a rendering with TTL.

        Args:
            path: Request path of the page.
            html: Rendered HTML.
        """
        key = self._normalize(path)
        expires_at = time.time() + self.config.ttl_seconds

        with self._lock:
            if len(self._cache) >= self.config.max_size and key not in self._cache:
                self._evict_oldest()
            self._cache[key] = CacheEntry(value=html, expires_at=expires_at)

    def invalidate(self, path: str) -> bool:
        """Drop the cached rendering of a page.

        Args:
            path: Request path of the page.

        Returns:
            True if an entry was removed.
        """
        key = self._normalize(path)
        with self._lock:
            removed = self._cache.pop(key, None) is not None
        if removed:
            logger.info("Invalidated cached rendering of %s", key)
        return removed

    def _evict_oldest(self) -> None:
        """Evict entries to make room. Must be called with lock held."""
        expired_keys = [k for k, v in self._cache.items() if v.is_expired()]
        for key in expired_keys:
            del self._cache[key]

        if len(self._cache) >= self.config.max_size:
            oldest = min(self._cache.items(), key=lambda x: x[1].expires_at)[0]
            del self._cache[oldest]

    def cleanup(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            expired_keys = [k for k, v in self._cache.items() if v.is_expired()]
            for key in expired_keys:
                del self._cache[key]
            return len(expired_keys)

    def clear(self) -> int:
        """Clear all cached entries.

        Returns:
            Number of entries cleared.
        """
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            return count

    def get_stats(self) -> dict:
        """Get cache statistics for monitoring."""
        with self._lock:
            valid_count = sum(1 for v in self._cache.values() if not v.is_expired())
            return {
                "total_entries": len(self._cache),
                "valid_entries": valid_count,
                "max_size": self.config.max_size,
                "ttl_seconds": self.config.ttl_seconds,
            }


# Global singleton instance
_page_cache: PageRenderCache | None = None


def get_page_cache() -> PageRenderCache:
    """Get or create the global page cache instance."""
    global _page_cache
    if _page_cache is None:
        _page_cache = PageRenderCache(PageCacheConfig.from_settings())
    return _page_cache


async def init_page_cache() -> PageRenderCache:
    """Initialize page cache with cleanup task. Call at app startup."""
    cache = get_page_cache()
    await cache.start_cleanup_task()
    return cache


async def shutdown_page_cache() -> None:
    """Shutdown page cache cleanup task. Call at app shutdown."""
    global _page_cache
    if _page_cache:
        await _page_cache.stop_cleanup_task()
