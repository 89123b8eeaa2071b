"""
In-process LRU cache with per-entry TTL.

Entries expire lazily on read and are swept periodically by a daemon
thread. All state sits behind one lock; a miss is always safe to
recompute.

Dependencies: threading (stdlib), collections.OrderedDict
System role: Shared cache for query embeddings
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

from ragcore.configs.cache import CacheSettings

logger = logging.getLogger(__name__)


class _Miss:
    """Sentinel type returned by ResultCache.get on a miss."""

    _instance: "_Miss | None" = None

    def __new__(cls) -> "_Miss":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISS"

    def __bool__(self) -> bool:
        return False


MISS = _Miss()


@dataclass
class _Entry:
    value: Any
    expires_at: float


class ResultCache:
    """Thread-safe LRU + TTL cache."""

    def __init__(
        self,
        max_entries: int = 100,
        default_ttl: float = 3600.0,
        sweep_interval: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize cache.

        Args:
            max_entries: Capacity before least-recently-used eviction
            default_ttl: Entry lifetime in seconds when set() gets no ttl
            sweep_interval: Seconds between background expiry sweeps
            clock: Monotonic time source (injectable for tests)
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")

        self._max_entries = max_entries
        self._default_ttl = default_ttl
        self._sweep_interval = sweep_interval
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._sweeper: threading.Thread | None = None

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> "ResultCache":
        return cls(
            max_entries=settings.max_entries,
            default_ttl=settings.default_ttl_seconds,
            sweep_interval=settings.sweep_interval_seconds,
        )

    def get(self, key: str) -> Any:
        """Return the cached value or MISS; expired entries are dropped on read."""
        if not key:
            return MISS
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return MISS
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return MISS
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value; evicts the least recently used entry when full."""
        if not key or value is None:
            return
        lifetime = self._default_ttl if ttl is None else ttl
        if lifetime <= 0:
            return

        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"{__name__}:set - Evicted LRU entry {evicted[:8]}")
            self._entries[key] = _Entry(value=value, expires_at=self._clock() + lifetime)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info(f"{__name__}:clear - Cache cleared", extra={"removed": removed})

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not MISS

    def sweep(self) -> int:
        """Remove every expired entry now. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.expires_at <= now]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"{__name__}:sweep - Removed {len(expired)} expired entries")
        return len(expired)

    def start_sweeper(self) -> None:
        """Start the background sweep thread (idempotent)."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop,
            name="ragcore-cache-sweeper",
            daemon=True,
        )
        self._sweeper.start()

    def stop(self) -> None:
        """Stop the sweep thread and wait for it to exit."""
        self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=self._sweep_interval + 1)
            self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self._sweep_interval):
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"{__name__}:_sweep_loop - Sweep failed: {type(e).__name__}: {e}")
