"""Cache adapters."""

from postboard.adapters.cache.memory_cache import MemoryCache


__all__ = ["MemoryCache"]
