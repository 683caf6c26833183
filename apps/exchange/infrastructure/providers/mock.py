"""
Mock provider for development and tests.
Generates deterministic, realistic exchange rates without network access.
"""

import random
from datetime import date
from decimal import Decimal

from apps.exchange.domain.exceptions import RateUnavailableError
from apps.exchange.domain.interfaces import BaseExchangeRateProvider


class MockProvider(BaseExchangeRateProvider):
    """
    Mock provider that derives cross rates from a fixed USD table.
    Useful for:
    - Running the app offline
    - Tests that should not touch the network
    """

    # Base rates relative to USD (approximate real-world values)
    BASE_RATES = {
        "USD": Decimal("1.0"),
        "EUR": Decimal("0.92"),
        "GBP": Decimal("0.79"),
        "CHF": Decimal("0.88"),
        "CAD": Decimal("1.35"),
        "JPY": Decimal("149.5"),
    }

    NAMES = {
        "USD": "United States Dollar",
        "EUR": "Euro",
        "GBP": "British Pound",
        "CHF": "Swiss Franc",
        "CAD": "Canadian Dollar",
        "JPY": "Japanese Yen",
    }

    def get_exchange_rate_data(
        self,
        source_currency: str,
        exchanged_currency: str,
        valuation_date: date
    ) -> Decimal:
        """
        Generate a mock exchange rate with small variation.

        Args:
            source_currency: Base currency code
            exchanged_currency: Target currency code
            valuation_date: Date for the rate (used for seeding randomness)

        Returns:
            Mock exchange rate as Decimal
        """
        if source_currency == exchanged_currency:
            return Decimal("1")

        source_rate = self.BASE_RATES.get(source_currency)
        if source_rate is None:
            raise RateUnavailableError(source_currency)
        target_rate = self.BASE_RATES.get(exchanged_currency)
        if target_rate is None:
            raise RateUnavailableError(exchanged_currency)

        base_rate = target_rate / source_rate

        # Small variation (±2%) seeded by pair and date for reproducibility
        rng = random.Random(f"{source_currency}{exchanged_currency}{valuation_date.isoformat()}")
        variation = Decimal(str(rng.uniform(0.98, 1.02)))

        return (base_rate * variation).quantize(Decimal("0.000001"))

    def list_currencies(self) -> dict[str, str]:
        return dict(self.NAMES)
