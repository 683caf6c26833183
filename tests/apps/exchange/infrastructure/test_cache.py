import threading
from datetime import date, timedelta
from decimal import Decimal

import pytest

from apps.exchange.infrastructure.cache import RateCache

DAY = date(2024, 3, 1)


@pytest.fixture
def cache(clock):
    return RateCache(max_entries=3, ttl=timedelta(hours=24), clock=clock)


def test_get_missing_entry_returns_none(cache):
    assert cache.get(DAY, "EUR", "USD") is None


def test_put_then_get_returns_rate(cache):
    cache.put(DAY, "EUR", "USD", Decimal("1.0854"))

    assert cache.get(DAY, "EUR", "USD") == Decimal("1.0854")
    assert cache.get(DAY, "USD", "EUR") is None
    assert cache.get(date(2024, 3, 2), "EUR", "USD") is None


def test_entry_is_fresh_until_window_ends(cache, clock):
    cache.put(DAY, "EUR", "USD", Decimal("1.0854"))

    clock.advance(hours=23, minutes=59)
    assert cache.get(DAY, "EUR", "USD") == Decimal("1.0854")

    clock.advance(minutes=1)
    assert cache.get(DAY, "EUR", "USD") is None


def test_stale_entry_stays_present_until_overwritten(cache, clock):
    cache.put(DAY, "EUR", "USD", Decimal("1.0854"))
    clock.advance(hours=25)

    assert cache.get(DAY, "EUR", "USD") is None
    assert len(cache) == 1

    cache.put(DAY, "EUR", "USD", Decimal("1.0854"))

    assert cache.get(DAY, "EUR", "USD") == Decimal("1.0854")
    assert len(cache) == 1


def test_full_cache_evicts_earliest_inserted_entry(cache):
    cache.put(DAY, "EUR", "USD", Decimal("1.08"))
    cache.put(DAY, "GBP", "USD", Decimal("1.27"))
    cache.put(DAY, "CHF", "USD", Decimal("1.13"))

    # Reading does not refresh the position of an entry
    assert cache.get(DAY, "EUR", "USD") == Decimal("1.08")

    cache.put(DAY, "JPY", "USD", Decimal("0.0067"))

    assert len(cache) == 3
    assert cache.get(DAY, "EUR", "USD") is None
    assert cache.get(DAY, "GBP", "USD") == Decimal("1.27")
    assert cache.get(DAY, "CHF", "USD") == Decimal("1.13")
    assert cache.get(DAY, "JPY", "USD") == Decimal("0.0067")


def test_overwriting_existing_key_does_not_evict(cache):
    cache.put(DAY, "EUR", "USD", Decimal("1.08"))
    cache.put(DAY, "GBP", "USD", Decimal("1.27"))
    cache.put(DAY, "CHF", "USD", Decimal("1.13"))

    cache.put(DAY, "EUR", "USD", Decimal("1.08"))

    assert len(cache) == 3
    assert cache.get(DAY, "GBP", "USD") == Decimal("1.27")

    # EUR/USD was re-inserted last, so GBP/USD is now the oldest
    cache.put(DAY, "JPY", "USD", Decimal("0.0067"))
    assert cache.get(DAY, "GBP", "USD") is None
    assert cache.get(DAY, "EUR", "USD") == Decimal("1.08")


def test_invalid_capacity_rejected():
    with pytest.raises(ValueError):
        RateCache(max_entries=0)


def test_non_positive_rate_rejected(cache):
    with pytest.raises(ValueError):
        cache.put(DAY, "EUR", "USD", Decimal("0"))


def test_concurrent_puts_respect_capacity():
    cache = RateCache(max_entries=50)

    def writer(offset):
        for i in range(200):
            cache.put(DAY + timedelta(days=offset * 1000 + i), "EUR", "USD", Decimal("1.08"))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 50
