import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from apps.exchange.domain import services
from apps.exchange.domain.exceptions import RateServiceError, RateUnavailableError
from apps.exchange.domain.services import ExchangeRateService, get_exchange_rate_service
from apps.exchange.infrastructure.cache import RateCache
from apps.exchange.infrastructure.providers.mock import MockProvider

RATE_DATE = date(2024, 3, 1)


class TestExchangeRateService:
    """Tests for ExchangeRateService domain service."""

    def test_same_currency_is_one_without_lookup(self, rate_service, stub_provider):
        result = rate_service.get_exchange_rate(RATE_DATE, "USD", "USD")

        assert result == Decimal("1")
        assert stub_provider.calls == []
        assert len(rate_service.cache) == 0

    def test_get_exchange_rate_from_provider(self, rate_service, stub_provider):
        result = rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")

        assert result == Decimal("1.0854")
        assert stub_provider.calls == [("EUR", "USD", RATE_DATE)]

    def test_second_lookup_is_served_from_cache(self, rate_service, stub_provider):
        first = rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")
        second = rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")

        assert first == second == Decimal("1.0854")
        assert len(stub_provider.calls) == 1

    def test_iso_string_and_date_share_cache_entry(self, rate_service, stub_provider):
        rate_service.get_exchange_rate("2024-03-01", "EUR", "USD")
        rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")

        assert len(stub_provider.calls) == 1
        assert stub_provider.calls[0][2] == RATE_DATE

    def test_datetime_is_truncated_to_day(self, rate_service, stub_provider):
        rate_service.get_exchange_rate(datetime(2024, 3, 1, 23, 59), "EUR", "USD")
        rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")

        assert len(stub_provider.calls) == 1
        fetched_date = stub_provider.calls[0][2]
        assert type(fetched_date) is date
        assert fetched_date == RATE_DATE

    def test_invalid_date_string_rejected(self, rate_service):
        with pytest.raises(ValueError):
            rate_service.get_exchange_rate("01/03/2024", "EUR", "USD")

    def test_evicted_entry_is_fetched_again(self, stub_provider, clock):
        stub_provider.rates[("GBP", "USD")] = Decimal("1.2650")
        stub_provider.rates[("CHF", "USD")] = Decimal("1.1320")
        service = ExchangeRateService(stub_provider, RateCache(max_entries=2, clock=clock))

        service.get_exchange_rate(RATE_DATE, "EUR", "USD")
        service.get_exchange_rate(RATE_DATE, "GBP", "USD")
        service.get_exchange_rate(RATE_DATE, "CHF", "USD")
        service.get_exchange_rate(RATE_DATE, "EUR", "USD")

        assert [call[0] for call in stub_provider.calls] == ["EUR", "GBP", "CHF", "EUR"]

    def test_stale_entry_is_fetched_again(self, rate_service, stub_provider, clock):
        rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")
        clock.advance(hours=24)
        rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")
        rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")

        assert len(stub_provider.calls) == 2

    def test_service_error_propagates_and_is_not_cached(self, rate_service, stub_provider):
        stub_provider.error = RateServiceError(503)

        with pytest.raises(RateServiceError) as exc_info:
            rate_service.get_exchange_rate(RATE_DATE, "EUR", "USD")

        assert exc_info.value.status_code == 503
        assert len(rate_service.cache) == 0

    def test_unavailable_currency_propagates(self, rate_service):
        with pytest.raises(RateUnavailableError) as exc_info:
            rate_service.get_exchange_rate(RATE_DATE, "EUR", "XYZ")

        assert exc_info.value.currency == "XYZ"

    def test_convert_amount_success(self, rate_service):
        unit = rate_service.convert_amount(Decimal("100.00"), "EUR", "USD", "2024-03-01")

        assert unit.converted_total == Decimal("108.54")
        assert unit.exchange_rate == Decimal("1.0854")
        assert unit.converted_currency == "USD"

    def test_convert_amount_same_currency(self, rate_service, stub_provider):
        assert rate_service.convert_amount(Decimal("100.00"), "USD", "USD", RATE_DATE) is None
        assert stub_provider.calls == []

    def test_list_currencies(self, rate_service):
        assert rate_service.list_currencies()["EUR"] == "Euro"


class TestProcessWideService:

    def test_built_once_from_settings(self, settings, mocker):
        settings.EXCHANGE_RATE_PROVIDER = "mock"
        settings.EXCHANGE_RATE_CACHE_MAX_ENTRIES = 10
        settings.EXCHANGE_RATE_CACHE_TTL_SECONDS = 60
        mocker.patch.object(services, "_service", None)

        first = get_exchange_rate_service()
        second = get_exchange_rate_service()

        assert first is second
        assert isinstance(first.provider, MockProvider)
        assert first.cache.max_entries == 10
        assert first.cache.ttl == timedelta(seconds=60)
