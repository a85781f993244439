"""
Caching layer for compiled patterns.

Provides:
- Thread-safe LRU cache with TTL
- Pattern fingerprinting for cache keys
- Cache statistics and monitoring
- Invalidation strategies

Compiled patterns are immutable, so one cache entry can back any number
of routes that share the same pattern, conditions and defaults.
"""

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .compiler.compiler import CompiledPattern, PatternCompiler
from .compiler.parser import parse_pattern

logger = logging.getLogger("routeforge.patterns.cache")


@dataclass
class CacheStats:
    """Cache statistics for monitoring."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    errors: int = 0
    total_compile_time: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Export stats as dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "errors": self.errors,
            "total_compile_time": self.total_compile_time,
            "hit_rate": self.hit_rate,
        }


@dataclass
class CacheEntry:
    """Cache entry with metadata."""
    pattern: CompiledPattern
    created_at: float
    last_accessed: float
    access_count: int
    compile_time: float

    def is_expired(self, ttl: Optional[float]) -> bool:
        """Check if entry has expired."""
        if ttl is None:
            return False
        return time.time() - self.created_at > ttl


def _canonical(value: Any) -> Any:
    """JSON-stable form of a condition or default value."""
    if isinstance(value, (set, frozenset)):
        return {"set": sorted(str(v) for v in value)}
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return str(value)


class PatternCache:
    """Thread-safe LRU cache for compiled patterns with TTL support."""

    def __init__(
        self,
        max_size: int = 1000,
        ttl: Optional[float] = None,
        enable_stats: bool = True,
    ):
        """
        Initialize pattern cache.

        Args:
            max_size: Maximum number of patterns to cache
            ttl: Time-to-live in seconds (None = no expiration)
            enable_stats: Enable statistics collection
        """
        self.max_size = max_size
        self.ttl = ttl
        self.enable_stats = enable_stats

        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = CacheStats()
        self._compiler = PatternCompiler()

    def _fingerprint(
        self,
        pattern: str,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Generate cache key from pattern and compilation context.

        Args:
            pattern: Pattern string
            conditions: Per-parameter conditions
            defaults: Per-parameter defaults

        Returns:
            Cache key fingerprint
        """
        cache_input = json.dumps(
            {
                "pattern": pattern,
                "conditions": {k: _canonical(v) for k, v in (conditions or {}).items()},
                "defaults": {k: _canonical(v) for k, v in (defaults or {}).items()},
            },
            sort_keys=True,
        )
        return hashlib.sha256(cache_input.encode()).hexdigest()[:16]

    def get(
        self,
        pattern: str,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> Optional[CompiledPattern]:
        """
        Get compiled pattern from cache.

        Returns:
            Compiled pattern or None if not cached
        """
        key = self._fingerprint(pattern, conditions, defaults)

        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                if self.enable_stats:
                    self._stats.misses += 1
                return None

            if entry.is_expired(self.ttl):
                del self._cache[key]
                logger.debug("Expired cached pattern %r", pattern)
                if self.enable_stats:
                    self._stats.evictions += 1
                    self._stats.misses += 1
                return None

            # Update LRU order
            self._cache.move_to_end(key)
            entry.last_accessed = time.time()
            entry.access_count += 1

            if self.enable_stats:
                self._stats.hits += 1

            return entry.pattern

    def put(
        self,
        pattern: str,
        compiled: CompiledPattern,
        compile_time: float = 0.0,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        """
        Store compiled pattern in cache.

        Args:
            pattern: Pattern string
            compiled: Compiled pattern
            compile_time: Time taken to compile (seconds)
            conditions: Per-parameter conditions used to compile
            defaults: Per-parameter defaults used to compile
        """
        if self.max_size <= 0:
            return

        key = self._fingerprint(pattern, conditions, defaults)
        now = time.time()

        with self._lock:
            if len(self._cache) >= self.max_size and key not in self._cache:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug("Evicted cached pattern %s", evicted)
                if self.enable_stats:
                    self._stats.evictions += 1

            self._cache[key] = CacheEntry(
                pattern=compiled,
                created_at=now,
                last_accessed=now,
                access_count=0,
                compile_time=compile_time,
            )
            self._cache.move_to_end(key)

    def compile_with_cache(
        self,
        pattern: str,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> CompiledPattern:
        """
        Compile pattern with caching.

        This is the main API for cached compilation.

        Returns:
            Compiled pattern (from cache or freshly compiled)

        Raises:
            PatternSyntaxError: Invalid pattern syntax
            PatternSemanticError: Invalid pattern semantics
        """
        cached = self.get(pattern, conditions, defaults)
        if cached is not None:
            logger.debug("Cache hit for pattern %r", pattern)
            return cached

        logger.debug("Cache miss for pattern %r", pattern)
        start_time = time.time()

        try:
            ast = parse_pattern(pattern)
            compiled = self._compiler.compile(ast, conditions, defaults)
        except Exception:
            if self.enable_stats:
                with self._lock:
                    self._stats.errors += 1
            raise

        compile_time = time.time() - start_time
        self.put(pattern, compiled, compile_time, conditions, defaults)

        if self.enable_stats:
            with self._lock:
                self._stats.total_compile_time += compile_time

        return compiled

    def invalidate(
        self,
        pattern: Optional[str] = None,
        conditions: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        """
        Invalidate cache entries.

        Args:
            pattern: Specific pattern to invalidate (None = clear all)
        """
        with self._lock:
            if pattern is None:
                self._cache.clear()
            else:
                self._cache.pop(self._fingerprint(pattern, conditions, defaults), None)

    def get_stats(self) -> CacheStats:
        """Get a snapshot of cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                errors=self._stats.errors,
                total_compile_time=self._stats.total_compile_time,
            )

    def reset_stats(self):
        """Reset statistics counters."""
        with self._lock:
            self._stats = CacheStats()

    @contextmanager
    def disabled(self):
        """Context manager to temporarily disable caching of new entries."""
        old_size = self.max_size
        self.max_size = 0
        try:
            yield
        finally:
            self.max_size = old_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, pattern: str) -> bool:
        """Check if pattern (without conditions or defaults) is cached."""
        key = self._fingerprint(pattern)
        with self._lock:
            return key in self._cache


# Global cache instance
_global_cache: Optional[PatternCache] = None


def get_global_cache() -> PatternCache:
    """Get or create global cache instance."""
    global _global_cache
    if _global_cache is None:
        _global_cache = PatternCache()
    return _global_cache


def set_global_cache(cache: Optional[PatternCache]):
    """Set global cache instance."""
    global _global_cache
    _global_cache = cache


def compile_pattern(
    pattern: str,
    conditions: Optional[Mapping[str, Any]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
    use_cache: bool = True,
) -> CompiledPattern:
    """
    Compile a pattern with optional caching.

    Args:
        pattern: Pattern string
        conditions: Per-parameter conditions
        defaults: Per-parameter defaults
        use_cache: Whether to use the global cache

    Returns:
        Compiled pattern
    """
    if use_cache:
        return get_global_cache().compile_with_cache(pattern, conditions, defaults)
    return PatternCompiler().compile(parse_pattern(pattern), conditions, defaults)
