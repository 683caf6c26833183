"""
Errors raised while looking up historical exchange rates.
Callers catch ExchangeRateError and fall back to the original currency.
"""


class ExchangeRateError(Exception):
    """Base class for rate lookup failures."""


class RateServiceError(ExchangeRateError):
    """The rate source answered with a non-success status or could not be reached."""

    def __init__(self, status_code: int | None, message: str | None = None):
        self.status_code = status_code
        if message is None:
            message = f"Exchange rate API error: {status_code}"
        super().__init__(message)


class RateUnavailableError(ExchangeRateError):
    """The rate source answered but has no rate for the requested currency."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"No rate found for {currency}")
