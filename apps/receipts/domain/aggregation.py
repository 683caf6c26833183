"""
Totals for reports, dashboards and invoices.

Receipts are summed in one currency. A receipt counts when it was recorded in
that currency, or when its persisted conversion targets that currency.
Anything else is reported as unconverted instead of being guessed at.
"""

from decimal import Decimal
from typing import Iterable

from apps.exchange.domain.conversion import round2
from apps.receipts.application.dto import CategoryTotalDTO, ReceiptLineDTO, ReceiptSummaryDTO
from apps.receipts.domain.constants import UNCATEGORIZED, UNCATEGORIZED_COLOR

ZERO = Decimal("0.00")


def amount_in_currency(receipt, currency: str) -> Decimal | None:
    """Return the receipt's total in currency, or None if it has no such amount."""
    if receipt.original_currency == currency:
        return round2(receipt.total)
    if receipt.converted_total is not None and receipt.converted_currency == currency:
        return round2(receipt.converted_total)
    return None


def summarize_receipts(receipts: Iterable, currency: str) -> ReceiptSummaryDTO:
    lines = []
    categories: dict[str, CategoryTotalDTO] = {}
    unconverted = []
    grand_total = ZERO

    for receipt in receipts:
        category = getattr(receipt, "category", None)
        category_name = category.name if category is not None else UNCATEGORIZED
        category_color = category.color if category is not None else UNCATEGORIZED_COLOR

        amount = amount_in_currency(receipt, currency)
        lines.append(
            ReceiptLineDTO(
                receipt_id=str(receipt.id),
                date=receipt.date,
                vendor_name=receipt.vendor_name,
                category=category_name,
                original_total=round2(receipt.total),
                original_currency=receipt.original_currency,
                amount=amount,
            )
        )

        bucket = categories.setdefault(
            category_name,
            CategoryTotalDTO(name=category_name, color=category_color, total=ZERO, count=0),
        )
        bucket.count += 1

        if amount is None:
            unconverted.append(str(receipt.id))
            continue

        bucket.total += amount
        grand_total += amount

    return ReceiptSummaryDTO(
        currency=currency,
        lines=lines,
        categories=sorted(categories.values(), key=lambda c: c.total, reverse=True),
        grand_total=grand_total,
        unconverted_receipt_ids=unconverted,
    )
