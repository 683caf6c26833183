from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from apps.exchange.domain.exceptions import RateUnavailableError
from apps.exchange.domain.interfaces import BaseExchangeRateProvider
from apps.exchange.domain.services import ExchangeRateService
from apps.exchange.infrastructure.cache import RateCache


class StubProvider(BaseExchangeRateProvider):
    """Provider answering from a dict and recording every call."""

    def __init__(self, rates=None, error=None):
        self.rates = dict(rates or {})
        self.error = error
        self.calls = []

    def get_exchange_rate_data(self, source_currency, exchanged_currency, valuation_date):
        self.calls.append((source_currency, exchanged_currency, valuation_date))
        if self.error is not None:
            raise self.error
        try:
            return self.rates[(source_currency, exchanged_currency)]
        except KeyError:
            raise RateUnavailableError(exchanged_currency)

    def list_currencies(self):
        return {"EUR": "Euro", "USD": "United States Dollar"}


class FakeClock:

    def __init__(self):
        self.now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stub_provider():
    return StubProvider(rates={("EUR", "USD"): Decimal("1.0854")})


@pytest.fixture
def rate_service(stub_provider, clock):
    return ExchangeRateService(provider=stub_provider, cache=RateCache(clock=clock))


@pytest.fixture
def use_rate_service(mocker, rate_service):
    """Route every caller of the process-wide service to rate_service."""
    mocker.patch("apps.exchange.api.v1.views.get_exchange_rate_service", return_value=rate_service)
    mocker.patch("apps.receipts.domain.services.get_exchange_rate_service", return_value=rate_service)
    return rate_service


@pytest.fixture
def api_client():
    """DRF API client."""
    return APIClient()


@pytest.fixture
def category(db):
    from apps.receipts.infrastructure.persistence.models import Category

    return Category.objects.create(name="Travel", color="#6366f1", is_default=True)


@pytest.fixture
def make_receipt(db, category):
    from apps.receipts.infrastructure.persistence.models import Receipt

    def _make(**overrides):
        values = {
            "vendor_name": "Cafe Central",
            "date": date(2024, 3, 1),
            "total": Decimal("100.00"),
            "original_currency": "USD",
            "category": category,
            "file_name": "receipt.jpg",
            "file_type": "image/jpeg",
            "file_data": b"\xff\xd8\xff",
        }
        values.update(overrides)
        return Receipt.objects.create(**values)

    return _make
