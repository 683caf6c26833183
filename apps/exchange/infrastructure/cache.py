"""
In-memory cache for historical exchange rates.

Historical rates never change, so the freshness window only bounds how long a
long-running process keeps an entry around. Capacity is enforced by evicting
the earliest inserted entry.
"""

import logging
import threading
from collections import OrderedDict
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable

from apps.exchange.domain.models import CachedRate, RateKey

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_TTL = timedelta(hours=24)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateCache:
    """Size-bounded, time-bounded FIFO cache keyed by (date, source, target)."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[RateKey, CachedRate] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(
        self,
        valuation_date: date,
        source_currency: str,
        exchanged_currency: str,
    ) -> Decimal | None:
        """Return the cached rate, or None when absent or older than the window."""
        key = RateKey(valuation_date, source_currency, exchanged_currency)
        with self._lock:
            entry = self._entries.get(key)

        if entry is None:
            logger.debug("Rate cache miss for %s", key)
            return None

        # A stale entry stays in place until the next fetch overwrites it
        if self._clock() - entry.fetched_at >= self.ttl:
            logger.debug("Rate cache entry for %s is stale", key)
            return None

        logger.debug("Rate cache hit for %s", key)
        return entry.rate_value

    def put(
        self,
        valuation_date: date,
        source_currency: str,
        exchanged_currency: str,
        rate_value: Decimal,
    ) -> None:
        key = RateKey(valuation_date, source_currency, exchanged_currency)
        entry = CachedRate(rate_value=rate_value, fetched_at=self._clock())

        with self._lock:
            if key in self._entries:
                # Re-stamped entries count as newly inserted
                del self._entries[key]
            elif len(self._entries) >= self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Rate cache full, evicted %s", evicted)
            self._entries[key] = entry
