"""
Currency conversion rules.

Every place that turns an original amount into a converted total (receipt
save, report aggregation, invoice rendering) goes through convert() so the
rounding is identical everywhere.
"""

from decimal import ROUND_HALF_UP, Decimal

from apps.exchange.domain.models import ConversionUnit

CENT = Decimal("0.01")
# Stored precision of Receipt.exchange_rate
RATE_QUANTUM = Decimal("0.0000000001")


def to_decimal(value) -> Decimal:
    """Coerce ints, floats and strings to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_rate(rate) -> Decimal:
    return to_decimal(rate).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def needs_conversion(source_currency: str, exchanged_currency: str) -> bool:
    # Codes are compared as given; callers are expected to pass uppercase ISO 4217
    return source_currency != exchanged_currency


def convert(amount, rate) -> Decimal:
    """Multiply amount by rate and round half-up to the cent."""
    return round2(to_decimal(amount) * to_decimal(rate))


def build_conversion(
    amount,
    source_currency: str,
    exchanged_currency: str,
    rate,
) -> ConversionUnit | None:
    """
    Apply the composition rule: no conversion needed means no converted
    fields at all, otherwise all three are filled in from the same rate.
    """
    if not needs_conversion(source_currency, exchanged_currency):
        return None

    # The total is computed from the rate exactly as it will be stored
    rate_value = quantize_rate(rate)
    return ConversionUnit(
        converted_total=convert(amount, rate_value),
        exchange_rate=rate_value,
        converted_currency=exchanged_currency,
    )
