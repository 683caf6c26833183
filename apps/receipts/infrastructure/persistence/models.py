"""
Django ORM models for persistence.
Infrastructure layer: technical storage detail.
"""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q


class BaseModel(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Category(BaseModel):

    name = models.CharField(max_length=100, unique=True)
    color = models.CharField(max_length=7, default="#a3a3a3")
    is_default = models.BooleanField(default=False)

    class Meta:
        app_label = "receipts"
        verbose_name_plural = "categories"
        ordering = ["name"]

    def __str__(self):
        return self.name


class ReportStatus(models.TextChoices):

    DRAFT = "draft", "Draft"
    FINALIZED = "finalized", "Finalized"


class Report(BaseModel):

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=20,
        choices=ReportStatus.choices,
        default=ReportStatus.DRAFT,
    )
    date_from = models.DateField(null=True, blank=True)
    date_to = models.DateField(null=True, blank=True)

    class Meta:
        app_label = "receipts"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} ({self.get_status_display()})"


class Receipt(BaseModel):

    vendor_name = models.CharField(max_length=200, db_index=True)
    date = models.DateField(db_index=True)
    subtotal = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    tax = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    total = models.DecimalField(max_digits=14, decimal_places=2)
    original_currency = models.CharField(max_length=3, default="USD")

    # Conversion unit: all three set, or all three null
    converted_currency = models.CharField(max_length=3, null=True, blank=True)
    converted_total = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    exchange_rate = models.DecimalField(max_digits=20, decimal_places=10, null=True, blank=True)

    category = models.ForeignKey(
        Category,
        related_name="receipts",
        on_delete=models.PROTECT,
    )
    report = models.ForeignKey(
        Report,
        related_name="receipts",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    notes = models.TextField(blank=True, default="")
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=100)
    file_data = models.BinaryField()
    drive_file_id = models.CharField(max_length=200, blank=True, default="")
    ai_extracted = models.BooleanField(default=False)

    class Meta:
        app_label = "receipts"
        ordering = ["-date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(converted_currency__isnull=True, converted_total__isnull=True, exchange_rate__isnull=True)
                    | Q(converted_currency__isnull=False, converted_total__isnull=False, exchange_rate__isnull=False)
                ),
                name="receipt_conversion_all_or_none",
            )
        ]

    def __str__(self):
        return f"{self.vendor_name} | {self.date} | {self.total} {self.original_currency}"

    @property
    def is_converted(self) -> bool:
        return self.converted_total is not None


class LineItem(models.Model):

    receipt = models.ForeignKey(
        Receipt,
        related_name="line_items",
        on_delete=models.CASCADE,
    )
    position = models.PositiveSmallIntegerField(default=0)
    description = models.CharField(max_length=500)
    quantity = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    unit_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    amount = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        app_label = "receipts"
        ordering = ["position"]

    def __str__(self):
        return f"{self.description}: {self.amount}"


def default_currency() -> str:
    return settings.DEFAULT_CURRENCY


class LedgerSettings(models.Model):
    """Single row holding the user's invoicing preferences."""

    default_currency = models.CharField(max_length=3, default=default_currency)
    invoice_number_prefix = models.CharField(max_length=20, default="INV-")
    next_invoice_number = models.PositiveIntegerField(default=1)
    business_name = models.CharField(max_length=200, blank=True, default="")
    business_address = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "receipts"
        verbose_name_plural = "ledger settings"

    def __str__(self):
        return f"Settings (default_currency={self.default_currency})"
