"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

from datetime import date
from typing import List, Optional

from django.db import transaction
from django.db.models import QuerySet

from apps.receipts.domain.constants import DEFAULT_CATEGORIES
from apps.receipts.domain.services import format_invoice_number
from apps.receipts.infrastructure.persistence.models import (
    Category,
    LedgerSettings,
    Receipt,
    Report,
    ReportStatus,
)


class CategoryRepository:
    """Repository for Category aggregate."""

    @staticmethod
    def seed_defaults() -> int:
        """Create any missing default category. Returns how many were created."""
        created = 0
        for entry in DEFAULT_CATEGORIES:
            _, was_created = Category.objects.get_or_create(
                name=entry["name"],
                defaults={"color": entry["color"], "is_default": True},
            )
            created += int(was_created)
        return created


class ReceiptRepository:
    """Repository for Receipt aggregate."""

    @staticmethod
    def filter(
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        report_id: Optional[str] = None,
        unassigned: bool = False,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> QuerySet:
        """Receipts matching the list filters, newest first, without file data."""
        queryset = (
            Receipt.objects
            .select_related("category", "report")
            .prefetch_related("line_items")
            .defer("file_data")
        )
        if search:
            queryset = queryset.filter(vendor_name__icontains=search)
        if category_id:
            queryset = queryset.filter(category_id=category_id)
        if report_id:
            queryset = queryset.filter(report_id=report_id)
        if unassigned:
            queryset = queryset.filter(report__isnull=True)
        if date_from:
            queryset = queryset.filter(date__gte=date_from)
        if date_to:
            queryset = queryset.filter(date__lte=date_to)
        return queryset.order_by("-date", "-created_at")

    @staticmethod
    def get_by_ids(receipt_ids: List[str]) -> List[Receipt]:
        """Get receipts by id with their categories, newest first."""
        return list(
            Receipt.objects
            .filter(id__in=receipt_ids)
            .select_related("category")
            .order_by("-date", "-created_at")
        )

    @staticmethod
    def for_report(report: Report) -> List[Receipt]:
        return list(
            Receipt.objects
            .filter(report=report)
            .select_related("category")
            .prefetch_related("line_items")
            .defer("file_data")
            .order_by("-date", "-created_at")
        )

    @staticmethod
    def all_for_summary() -> List[Receipt]:
        return list(
            Receipt.objects
            .select_related("category")
            .defer("file_data")
        )


class ReportRepository:
    """Repository for Report aggregate."""

    @staticmethod
    def count_drafts() -> int:
        return Report.objects.filter(status=ReportStatus.DRAFT).count()


class LedgerSettingsRepository:
    """Repository for the single LedgerSettings row."""

    @staticmethod
    def get() -> LedgerSettings:
        """Get the settings row, creating it with defaults on first access."""
        settings_row = LedgerSettings.objects.order_by("pk").first()
        if settings_row is None:
            settings_row = LedgerSettings.objects.create()
        return settings_row

    @staticmethod
    def allocate_invoice_number() -> str:
        """Reserve the next invoice number and advance the counter."""
        pk = LedgerSettingsRepository.get().pk
        with transaction.atomic():
            settings_row = LedgerSettings.objects.select_for_update().get(pk=pk)
            number = settings_row.next_invoice_number or 1
            settings_row.next_invoice_number = number + 1
            settings_row.save(update_fields=["next_invoice_number", "updated_at"])
        return format_invoice_number(settings_row.invoice_number_prefix, number)
