import uuid

import django.db.models.deletion
from django.db import migrations, models

import apps.receipts.infrastructure.persistence.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("color", models.CharField(default="#a3a3a3", max_length=7)),
                ("is_default", models.BooleanField(default=False)),
            ],
            options={
                "verbose_name_plural": "categories",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="LedgerSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("default_currency", models.CharField(default=apps.receipts.infrastructure.persistence.models.default_currency, max_length=3)),
                ("invoice_number_prefix", models.CharField(default="INV-", max_length=20)),
                ("next_invoice_number", models.PositiveIntegerField(default=1)),
                ("business_name", models.CharField(blank=True, default="", max_length=200)),
                ("business_address", models.TextField(blank=True, default="")),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "ledger settings",
            },
        ),
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("finalized", "Finalized")], default="draft", max_length=20)),
                ("date_from", models.DateField(blank=True, null=True)),
                ("date_to", models.DateField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Receipt",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("vendor_name", models.CharField(db_index=True, max_length=200)),
                ("date", models.DateField(db_index=True)),
                ("subtotal", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("tax", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("total", models.DecimalField(decimal_places=2, max_digits=14)),
                ("original_currency", models.CharField(default="USD", max_length=3)),
                ("converted_currency", models.CharField(blank=True, max_length=3, null=True)),
                ("converted_total", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("exchange_rate", models.DecimalField(blank=True, decimal_places=6, max_digits=18, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("file_name", models.CharField(max_length=255)),
                ("file_type", models.CharField(max_length=100)),
                ("file_data", models.BinaryField()),
                ("drive_file_id", models.CharField(blank=True, default="", max_length=200)),
                ("ai_extracted", models.BooleanField(default=False)),
                ("category", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="receipts", to="receipts.category")),
                ("report", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="receipts", to="receipts.report")),
            ],
            options={
                "ordering": ["-date", "-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(("converted_currency__isnull", True), ("converted_total__isnull", True), ("exchange_rate__isnull", True))
                            | models.Q(("converted_currency__isnull", False), ("converted_total__isnull", False), ("exchange_rate__isnull", False))
                        ),
                        name="receipt_conversion_all_or_none",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="LineItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveSmallIntegerField(default=0)),
                ("description", models.CharField(max_length=500)),
                ("quantity", models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ("unit_price", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("receipt", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="line_items", to="receipts.receipt")),
            ],
            options={
                "ordering": ["position"],
            },
        ),
    ]
