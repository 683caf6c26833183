"""
Receipt-side use of the conversion engine.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db import models

from apps.exchange.domain.conversion import needs_conversion
from apps.exchange.domain.exceptions import ExchangeRateError
from apps.exchange.domain.models import ConversionUnit
from apps.exchange.domain.services import ExchangeRateService, get_exchange_rate_service

logger = logging.getLogger(__name__)


class ConversionStatus(models.TextChoices):

    CONVERTED = "converted", "Converted"
    NOT_NEEDED = "not_needed", "Not needed"
    RATE_UNAVAILABLE = "rate_unavailable", "Rate unavailable"


@dataclass(frozen=True)
class ConversionOutcome:

    status: str
    unit: ConversionUnit | None = None
    error: str | None = None

    def as_fields(self) -> dict:
        if self.unit is None:
            return ConversionUnit.empty_fields()
        return self.unit.as_fields()


class ReceiptConversionService:
    """
    Resolves the conversion unit stored on a receipt.

    A failed rate lookup never blocks saving: the receipt keeps its original
    currency only and the outcome says the rate was unavailable.
    """

    @staticmethod
    def resolve(
        total: Decimal,
        original_currency: str,
        valuation_date: date,
        target_currency: str,
        rate_service: ExchangeRateService | None = None,
    ) -> ConversionOutcome:
        if not needs_conversion(original_currency, target_currency):
            return ConversionOutcome(status=ConversionStatus.NOT_NEEDED)

        rate_service = rate_service or get_exchange_rate_service()
        try:
            unit = rate_service.convert_amount(
                total,
                original_currency,
                target_currency,
                valuation_date
            )
        except ExchangeRateError as e:
            logger.warning(
                "Conversion %s->%s on %s unavailable: %s",
                original_currency, target_currency, valuation_date, e
            )
            return ConversionOutcome(status=ConversionStatus.RATE_UNAVAILABLE, error=str(e))

        return ConversionOutcome(status=ConversionStatus.CONVERTED, unit=unit)


def format_invoice_number(prefix: str, number: int) -> str:
    return f"{prefix}{number:04d}"
