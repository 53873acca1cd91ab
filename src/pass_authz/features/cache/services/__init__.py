"""Cache services package."""

from .expiring_cache import CacheEntry, ExpiringCache

__all__ = ["CacheEntry", "ExpiringCache"]
