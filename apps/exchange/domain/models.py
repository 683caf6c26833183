"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class RateKey:

    valuation_date: date
    source_currency: str
    exchanged_currency: str

    def __str__(self):
        return f"{self.valuation_date.isoformat()}:{self.source_currency}:{self.exchanged_currency}"


@dataclass(frozen=True)
class CachedRate:

    rate_value: Decimal
    fetched_at: datetime

    def __post_init__(self):
        if self.rate_value <= 0:
            raise ValueError(f"rate_value must be positive, got {self.rate_value}")


@dataclass(frozen=True)
class ConversionUnit:
    """
    The three converted fields of a receipt.
    They are written together or not at all.
    """

    converted_total: Decimal
    exchange_rate: Decimal
    converted_currency: str

    def as_fields(self) -> dict:
        return {
            "converted_total": self.converted_total,
            "exchange_rate": self.exchange_rate,
            "converted_currency": self.converted_currency,
        }

    @staticmethod
    def empty_fields() -> dict:
        return {
            "converted_total": None,
            "exchange_rate": None,
            "converted_currency": None,
        }
