"""
Domain services - Core business logic.
Fronts a rate provider with the in-process rate cache.
"""

import logging
import threading
from datetime import date, datetime, timedelta
from decimal import Decimal

from django.conf import settings

from apps.exchange.domain.conversion import build_conversion, needs_conversion
from apps.exchange.domain.interfaces import BaseExchangeRateProvider
from apps.exchange.domain.models import ConversionUnit
from apps.exchange.infrastructure.cache import RateCache
from apps.exchange.infrastructure.providers.registry import get_configured_provider

logger = logging.getLogger(__name__)


def parse_valuation_date(value: date | datetime | str) -> date:
    """Accept a date, an ISO YYYY-MM-DD string, or a datetime truncated to its day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


class ExchangeRateService:
    """
    Looks up historical exchange rates.

    Strategy:
    1. Same currency: rate is 1, nothing is cached or fetched
    2. Fresh cache entry: return it
    3. Otherwise ask the provider, cache the answer and return it

    Provider errors propagate unchanged. Concurrent misses on the same key may
    both reach the provider; the results are identical so the last write wins.
    """

    def __init__(self, provider: BaseExchangeRateProvider, cache: RateCache):
        self.provider = provider
        self.cache = cache

    def get_exchange_rate(
        self,
        valuation_date: date | str,
        source_currency: str,
        exchanged_currency: str,
    ) -> Decimal:
        """
        Get the rate converting one unit of source_currency into exchanged_currency.

        Example:
            >>> service.get_exchange_rate("2024-03-01", "EUR", "USD")
            Decimal('1.0854')
        """
        valuation_date = parse_valuation_date(valuation_date)

        if not needs_conversion(source_currency, exchanged_currency):
            return Decimal("1")

        cached = self.cache.get(valuation_date, source_currency, exchanged_currency)
        if cached is not None:
            return cached

        rate_value = self.provider.get_exchange_rate_data(
            source_currency,
            exchanged_currency,
            valuation_date
        )
        self.cache.put(valuation_date, source_currency, exchanged_currency, rate_value)
        logger.info(
            "Cached %s/%s rate %s for %s",
            source_currency, exchanged_currency, rate_value, valuation_date
        )
        return rate_value

    def convert_amount(
        self,
        amount: Decimal,
        source_currency: str,
        exchanged_currency: str,
        valuation_date: date | str,
    ) -> ConversionUnit | None:
        """
        Convert an amount, returning None when the currencies already match.
        No rate is looked up in that case.
        """
        if not needs_conversion(source_currency, exchanged_currency):
            return None

        rate = self.get_exchange_rate(valuation_date, source_currency, exchanged_currency)
        return build_conversion(amount, source_currency, exchanged_currency, rate)

    def list_currencies(self) -> dict[str, str]:
        return self.provider.list_currencies()


_service: ExchangeRateService | None = None
_service_lock = threading.Lock()


def build_exchange_rate_service() -> ExchangeRateService:
    cache = RateCache(
        max_entries=settings.EXCHANGE_RATE_CACHE_MAX_ENTRIES,
        ttl=timedelta(seconds=settings.EXCHANGE_RATE_CACHE_TTL_SECONDS),
    )
    return ExchangeRateService(provider=get_configured_provider(), cache=cache)


def get_exchange_rate_service() -> ExchangeRateService:
    """Return the process-wide service, building it on first use."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = build_exchange_rate_service()
    return _service
