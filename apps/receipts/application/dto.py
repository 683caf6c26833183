"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from the PDF renderer and API contracts.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional


@dataclass
class ReceiptLineDTO:
    """One receipt expressed in the summary currency."""
    receipt_id: str
    date: date
    vendor_name: str
    category: str
    original_total: Decimal
    original_currency: str
    amount: Optional[Decimal]


@dataclass
class CategoryTotalDTO:
    """Subtotal for one category."""
    name: str
    color: str
    total: Decimal
    count: int


@dataclass
class ReceiptSummaryDTO:
    """Receipts grouped by category with totals in a single currency."""
    currency: str
    lines: List[ReceiptLineDTO]
    categories: List[CategoryTotalDTO]
    grand_total: Decimal
    unconverted_receipt_ids: List[str] = field(default_factory=list)


@dataclass
class InvoiceRequestDTO:
    """Request DTO for PDF generation."""
    invoice_type: str
    receipt_ids: List[str]
    title: Optional[str] = None
    client_name: str = "Client"
    client_address: str = ""
    due_date: Optional[date] = None
    date_range: str = ""
    notes: str = ""


@dataclass
class InvoiceDocumentDTO:
    """Everything the PDF renderer needs for one document."""
    invoice_type: str
    title: str
    summary: ReceiptSummaryDTO
    business_name: str = ""
    business_address: str = ""
    invoice_number: Optional[str] = None
    client_name: str = ""
    client_address: str = ""
    due_date: Optional[date] = None
    date_range: str = ""
    notes: str = ""
