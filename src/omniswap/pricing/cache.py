"""In-memory USD price cache.

Entries are keyed by upper-case token symbol. A price is fresh for
ttl_seconds, still usable (but due for refresh) until stale_ttl_seconds, and
ignored after that.
"""

import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class CachedPrice:
    """A cached USD price and where it came from."""

    price_usd: Decimal
    source: str
    timestamp: float


class PriceCache:
    """Bounded symbol -> price cache with a freshness and a stale window."""

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        stale_ttl_seconds: float = 300.0,
        max_entries: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ):
        if stale_ttl_seconds < ttl_seconds:
            raise ValueError("stale_ttl_seconds must be >= ttl_seconds")
        if max_entries < 1:
            raise ValueError("max_entries must be positive")

        self.ttl_seconds = ttl_seconds
        self.stale_ttl_seconds = stale_ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CachedPrice] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _age(self, entry: CachedPrice) -> float:
        return self._clock() - entry.timestamp

    def get_fresh(self, symbol: str) -> Optional[CachedPrice]:
        """Entry younger than the TTL, if any."""
        entry = self._entries.get(symbol.upper())
        if entry and self._age(entry) < self.ttl_seconds:
            return entry
        return None

    def get_usable(self, symbol: str) -> Optional[CachedPrice]:
        """Entry within the stale window, if any."""
        entry = self._entries.get(symbol.upper())
        if entry and self._age(entry) < self.stale_ttl_seconds:
            return entry
        return None

    def needs_refresh(self, symbol: str) -> bool:
        """True when there is no fresh entry for the symbol."""
        return self.get_fresh(symbol) is None

    def set(self, symbol: str, price_usd: Decimal, source: str) -> CachedPrice:
        """Store a price, purging expired entries and evicting the oldest if full."""
        key = symbol.upper()
        self._purge_expired()

        if key not in self._entries and len(self._entries) >= self.max_entries:
            oldest = min(self._entries, key=lambda k: self._entries[k].timestamp)
            del self._entries[oldest]
            logger.debug(f"Price cache full, evicted {oldest}")

        entry = CachedPrice(price_usd=price_usd, source=source, timestamp=self._clock())
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def _purge_expired(self) -> None:
        expired = [k for k, e in self._entries.items() if self._age(e) >= self.stale_ttl_seconds]
        for key in expired:
            del self._entries[key]
