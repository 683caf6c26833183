from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal


class BaseExchangeRateProvider(ABC):
    """
    A source of historical exchange rates.

    Implementations return the rate or raise RateServiceError /
    RateUnavailableError. They never retry.
    """

    @abstractmethod
    def get_exchange_rate_data(
        self,
        source_currency: str,
        exchanged_currency: str,
        valuation_date: date,
    ) -> Decimal:
        pass

    @abstractmethod
    def list_currencies(self) -> dict[str, str]:
        pass
