import logging
from datetime import date
from decimal import Decimal, InvalidOperation

import requests
from django.conf import settings

from apps.exchange.domain.exceptions import RateServiceError, RateUnavailableError
from apps.exchange.domain.interfaces import BaseExchangeRateProvider

logger = logging.getLogger(__name__)


class FrankfurterProvider(BaseExchangeRateProvider):
    """
    Frankfurter API provider.
    Uses the /{date} endpoint to fetch the rate published for a specific day.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.FRANKFURTER_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.EXCHANGE_RATE_TIMEOUT
        self._currencies: dict[str, str] | None = None

    def get_exchange_rate_data(
        self,
        source_currency: str,
        exchanged_currency: str,
        valuation_date: date
    ) -> Decimal:
        """
        Fetch a historical exchange rate from Frankfurter.

        Args:
            source_currency: Base currency code (e.g. EUR)
            exchanged_currency: Target currency code (e.g. USD)
            valuation_date: Date for the exchange rate

        Returns:
            Units of exchanged_currency per one unit of source_currency

        Raises:
            RateServiceError: non-success response, timeout or connection failure
            RateUnavailableError: the response has no rate for exchanged_currency
        """
        if source_currency == exchanged_currency:
            return Decimal("1")

        # Format: https://api.frankfurter.dev/v1/2024-03-01?from=EUR&to=USD
        date_str = valuation_date.isoformat()
        url = f"{self.base_url}/{date_str}"
        params = {"from": source_currency, "to": exchanged_currency}

        logger.info("Fetching %s/%s rate for %s", source_currency, exchanged_currency, date_str)
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning("Timeout calling Frankfurter for %s/%s on %s", source_currency, exchanged_currency, date_str)
            raise RateServiceError(None, "Exchange rate API timed out") from e
        except requests.exceptions.RequestException as e:
            logger.warning("Could not reach Frankfurter: %s", e)
            raise RateServiceError(None, f"Exchange rate API unreachable: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning("HTTP %s from Frankfurter for %s/%s on %s", response.status_code, source_currency, exchanged_currency, date_str)
            raise RateServiceError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise RateServiceError(response.status_code, "Invalid response from exchange rate API") from e

        # Response format: {"amount": 1.0, "base": "EUR", "date": "2024-03-01", "rates": {"USD": 1.0854}}
        try:
            rate = (data.get("rates") or {}).get(exchanged_currency)
        except AttributeError as e:
            raise RateServiceError(response.status_code, "Invalid response from exchange rate API") from e

        if rate is None:
            logger.warning("Frankfurter returned no %s rate for %s", exchanged_currency, date_str)
            raise RateUnavailableError(exchanged_currency)

        try:
            rate_value = Decimal(str(rate))
        except InvalidOperation as e:
            raise RateServiceError(response.status_code, f"Invalid rate value from exchange rate API: {rate!r}") from e
        if not rate_value.is_finite() or rate_value <= 0:
            raise RateServiceError(response.status_code, f"Invalid rate value from exchange rate API: {rate!r}")

        return rate_value

    def list_currencies(self) -> dict[str, str]:
        """Return the supported currency codes mapped to their names."""
        if self._currencies is not None:
            return self._currencies

        try:
            response = requests.get(f"{self.base_url}/currencies", timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RateServiceError(None, "Failed to fetch currencies") from e

        if not 200 <= response.status_code < 300:
            raise RateServiceError(response.status_code, "Failed to fetch currencies")

        try:
            currencies = response.json()
        except ValueError as e:
            raise RateServiceError(response.status_code, "Invalid response from exchange rate API") from e
        if not isinstance(currencies, dict):
            raise RateServiceError(response.status_code, "Invalid response from exchange rate API")

        self._currencies = currencies
        return self._currencies
