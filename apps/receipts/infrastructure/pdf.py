"""
PDF rendering for expense reports and client invoices.
Amounts come from the aggregation layer; nothing is recomputed here.
"""

from decimal import Decimal
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from apps.receipts.application.dto import InvoiceDocumentDTO

TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f5f5f5")),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("LINEBELOW", (0, 0), (-1, -1), 0.5, colors.HexColor("#e5e5e5")),
    ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
    ("LINEABOVE", (0, -1), (-1, -1), 1, colors.black),
])


def format_money(amount: Decimal | None, currency: str) -> str:
    if amount is None:
        return "rate unavailable"
    return f"{amount:,.2f} {currency}"


def _header(document: InvoiceDocumentDTO, styles) -> list:
    elements = [Paragraph(escape(document.title), styles["Title"])]
    if document.invoice_number:
        elements.append(Paragraph(f"Invoice {document.invoice_number}", styles["Heading2"]))
    if document.business_name:
        elements.append(Paragraph(escape(document.business_name), styles["Heading3"]))
    if document.business_address:
        elements.append(Paragraph(escape(document.business_address).replace("\n", "<br/>"), styles["BodyText"]))
    if document.client_name and document.invoice_number:
        elements.append(Spacer(1, 4 * mm))
        elements.append(Paragraph(f"Bill to: {escape(document.client_name)}", styles["BodyText"]))
        if document.client_address:
            elements.append(Paragraph(escape(document.client_address).replace("\n", "<br/>"), styles["BodyText"]))
    if document.due_date:
        elements.append(Paragraph(f"Due: {document.due_date.isoformat()}", styles["BodyText"]))
    if document.date_range:
        elements.append(Paragraph(f"Period: {escape(document.date_range)}", styles["BodyText"]))
    elements.append(Spacer(1, 6 * mm))
    return elements


def _category_tables(document: InvoiceDocumentDTO, styles) -> list:
    summary = document.summary
    elements = []
    for category in summary.categories:
        rows = [["Date", "Vendor", "Original", f"Amount ({summary.currency})"]]
        for line in summary.lines:
            if line.category != category.name:
                continue
            rows.append([
                line.date.isoformat(),
                line.vendor_name,
                format_money(line.original_total, line.original_currency),
                format_money(line.amount, summary.currency),
            ])
        rows.append(["Subtotal", "", "", format_money(category.total, summary.currency)])

        elements.append(Paragraph(escape(category.name), styles["Heading3"]))
        table = Table(rows, colWidths=[28 * mm, 62 * mm, 40 * mm, 44 * mm])
        table.setStyle(TABLE_STYLE)
        elements.append(table)
        elements.append(Spacer(1, 4 * mm))
    return elements


def render_document(document: InvoiceDocumentDTO) -> bytes:
    """Render an expense report or client invoice to PDF bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=16 * mm,
        rightMargin=16 * mm,
        topMargin=16 * mm,
        bottomMargin=16 * mm,
        title=document.title,
    )
    styles = getSampleStyleSheet()

    elements = _header(document, styles)
    elements.extend(_category_tables(document, styles))
    elements.append(
        Paragraph(
            f"Total: {format_money(document.summary.grand_total, document.summary.currency)}",
            styles["Heading2"],
        )
    )
    if document.summary.unconverted_receipt_ids:
        elements.append(
            Paragraph(
                f"{len(document.summary.unconverted_receipt_ids)} receipt(s) excluded from the total: "
                f"no {document.summary.currency} amount recorded.",
                styles["Italic"],
            )
        )
    if document.notes:
        elements.append(Spacer(1, 4 * mm))
        elements.append(Paragraph(escape(document.notes), styles["BodyText"]))

    doc.build(elements)
    return buffer.getvalue()
