"""Cache feature for pass-authz.

In-memory expiring cache with single-flight computation, for lookups such as
role resolution that are expensive and safe to reuse for a short time.
"""

from .services import CacheEntry, ExpiringCache

__all__ = ["CacheEntry", "ExpiringCache"]
