"""
Expense report and client invoice generation.
"""

import logging
from datetime import datetime, timezone

from apps.receipts.application.dto import InvoiceDocumentDTO, InvoiceRequestDTO
from apps.receipts.domain.aggregation import summarize_receipts
from apps.receipts.infrastructure.pdf import render_document
from apps.receipts.infrastructure.persistence.repositories import (
    LedgerSettingsRepository,
    ReceiptRepository,
)

logger = logging.getLogger(__name__)

EXPENSE_REPORT = "expense-report"
CLIENT_INVOICE = "client-invoice"
INVOICE_TYPES = (EXPENSE_REPORT, CLIENT_INVOICE)


class NoReceiptsFound(Exception):
    pass


def generate_invoice(request: InvoiceRequestDTO) -> tuple[str, bytes]:
    """
    Build the PDF for the requested receipts.

    Returns:
        (filename, pdf bytes)

    Raises:
        ValueError: unknown invoice type
        NoReceiptsFound: none of the ids match a receipt
    """
    if request.invoice_type not in INVOICE_TYPES:
        raise ValueError(f"Invalid type: {request.invoice_type}")

    receipts = ReceiptRepository.get_by_ids(request.receipt_ids)
    if not receipts:
        raise NoReceiptsFound("No receipts found")

    ledger_settings = LedgerSettingsRepository.get()
    summary = summarize_receipts(receipts, ledger_settings.default_currency)

    document = InvoiceDocumentDTO(
        invoice_type=request.invoice_type,
        title=request.title or "Expense Report",
        summary=summary,
        business_name=ledger_settings.business_name,
        business_address=ledger_settings.business_address,
        date_range=request.date_range,
        notes=request.notes,
    )

    if request.invoice_type == CLIENT_INVOICE:
        # The number is consumed even if rendering fails afterwards
        document.invoice_number = LedgerSettingsRepository.allocate_invoice_number()
        document.title = request.title or "Invoice"
        document.client_name = request.client_name
        document.client_address = request.client_address
        document.due_date = request.due_date

    logger.info(
        "Rendering %s for %d receipt(s), total %s %s",
        request.invoice_type, len(receipts), summary.grand_total, summary.currency
    )
    pdf_bytes = render_document(document)

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    filename = f"{request.invoice_type}-{document.invoice_number or stamp}.pdf"
    return filename, pdf_bytes
