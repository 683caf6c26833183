"""
Serializers for the receipts bounded context.
Handles validation and transformation between API and ORM layers.
"""

import base64
import binascii

from django.conf import settings
from django.core.validators import RegexValidator
from rest_framework import serializers

from apps.receipts.application.invoices import INVOICE_TYPES
from apps.receipts.domain.aggregation import summarize_receipts
from apps.receipts.domain.services import ConversionStatus
from apps.receipts.infrastructure.persistence.models import (
    Category,
    LedgerSettings,
    LineItem,
    Receipt,
    Report,
)
from apps.receipts.infrastructure.persistence.repositories import ReceiptRepository

currency_code_validator = RegexValidator(
    r"^[A-Z]{3}$",
    "Currency must be a 3-letter uppercase ISO 4217 code.",
)


class Base64BinaryField(serializers.Field):
    """Binary file content exchanged as a base64 string."""

    default_error_messages = {
        "invalid": "File data must be base64 encoded.",
        "too_large": "File exceeds the {max_size} byte limit.",
    }

    def to_representation(self, value):
        return base64.b64encode(bytes(value)).decode("ascii")

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        try:
            decoded = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            self.fail("invalid")
        if len(decoded) > settings.MAX_RECEIPT_FILE_SIZE:
            self.fail("too_large", max_size=settings.MAX_RECEIPT_FILE_SIZE)
        return decoded


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "color", "is_default", "created_at", "updated_at"]
        read_only_fields = ["id", "is_default", "created_at", "updated_at"]


class LineItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = LineItem
        fields = ["description", "quantity", "unit_price", "amount"]


class ReceiptSerializer(serializers.ModelSerializer):
    line_items = LineItemSerializer(many=True, required=False)
    original_currency = serializers.CharField(
        max_length=3,
        required=False,
        default="USD",
        validators=[currency_code_validator],
    )
    category_name = serializers.CharField(source="category.name", read_only=True)
    file_data = Base64BinaryField(write_only=True, required=False)
    conversion_status = serializers.SerializerMethodField()

    class Meta:
        model = Receipt
        fields = [
            "id",
            "vendor_name",
            "date",
            "line_items",
            "subtotal",
            "tax",
            "total",
            "original_currency",
            "converted_currency",
            "converted_total",
            "exchange_rate",
            "conversion_status",
            "category",
            "category_name",
            "report",
            "notes",
            "file_name",
            "file_type",
            "file_data",
            "drive_file_id",
            "ai_extracted",
            "created_at",
            "updated_at",
        ]
        # The conversion unit is computed server-side, never written by clients
        read_only_fields = [
            "id",
            "converted_currency",
            "converted_total",
            "exchange_rate",
            "drive_file_id",
            "created_at",
            "updated_at",
        ]

    def get_conversion_status(self, obj) -> str:
        if obj.is_converted:
            return ConversionStatus.CONVERTED
        target_currency = self.context.get("default_currency")
        if target_currency is None or obj.original_currency == target_currency:
            return ConversionStatus.NOT_NEEDED
        return ConversionStatus.RATE_UNAVAILABLE

    def validate(self, attrs):
        if self.instance is None and "file_data" not in attrs:
            raise serializers.ValidationError({"file_data": "This field is required."})
        return attrs

    def _write_line_items(self, receipt, items):
        receipt.line_items.all().delete()
        LineItem.objects.bulk_create([
            LineItem(receipt=receipt, position=position, **item)
            for position, item in enumerate(items)
        ])

    def create(self, validated_data):
        items = validated_data.pop("line_items", [])
        receipt = super().create(validated_data)
        self._write_line_items(receipt, items)
        return receipt

    def update(self, instance, validated_data):
        items = validated_data.pop("line_items", None)
        # Uploaded files are immutable
        validated_data.pop("file_data", None)
        receipt = super().update(instance, validated_data)
        if items is not None:
            self._write_line_items(receipt, items)
        return receipt


class ReceiptDetailSerializer(ReceiptSerializer):
    file_data = Base64BinaryField(read_only=True)


class ReceiptFilterSerializer(serializers.Serializer):
    """Query parameters accepted by the receipt list."""

    search = serializers.CharField(required=False, allow_blank=True, help_text="Vendor name contains (case-insensitive)")
    category = serializers.UUIDField(required=False, help_text="Category id")
    report = serializers.UUIDField(required=False, help_text="Report id")
    unassigned = serializers.BooleanField(required=False, default=False, help_text="Only receipts not in a report")
    date_from = serializers.DateField(required=False, help_text="Start date (YYYY-MM-DD)")
    date_to = serializers.DateField(required=False, help_text="End date (YYYY-MM-DD)")


class ReportSerializer(serializers.ModelSerializer):
    class Meta:
        model = Report
        fields = [
            "id",
            "name",
            "description",
            "status",
            "date_from",
            "date_to",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate(self, attrs):
        date_from = attrs.get("date_from", getattr(self.instance, "date_from", None))
        date_to = attrs.get("date_to", getattr(self.instance, "date_to", None))
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError("date_from must be before or equal to date_to")
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        currency = self.context.get("default_currency", settings.DEFAULT_CURRENCY)
        summary = summarize_receipts(ReceiptRepository.for_report(instance), currency)
        data["receipt_count"] = len(summary.lines)
        data["total_amount"] = summary.grand_total
        data["currency"] = summary.currency
        data["unconverted_count"] = len(summary.unconverted_receipt_ids)
        return data


class CategoryTotalSerializer(serializers.Serializer):
    name = serializers.CharField()
    color = serializers.CharField()
    total = serializers.DecimalField(max_digits=16, decimal_places=2)
    count = serializers.IntegerField()


class LedgerSettingsSerializer(serializers.ModelSerializer):
    default_currency = serializers.CharField(max_length=3, validators=[currency_code_validator])
    next_invoice_number = serializers.IntegerField(min_value=1)

    class Meta:
        model = LedgerSettings
        fields = [
            "default_currency",
            "invoice_number_prefix",
            "next_invoice_number",
            "business_name",
            "business_address",
            "updated_at",
        ]
        read_only_fields = ["updated_at"]


class InvoiceConfigSerializer(serializers.Serializer):
    title = serializers.CharField(required=False, allow_blank=True)
    client_name = serializers.CharField(required=False, default="Client")
    client_address = serializers.CharField(required=False, allow_blank=True, default="")
    due_date = serializers.DateField(required=False, allow_null=True, default=None)
    date_range = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class InvoiceRequestSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=INVOICE_TYPES)
    receipt_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)
    config = InvoiceConfigSerializer(required=False)
