from datetime import date
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from apps.receipts.domain.constants import DEFAULT_CATEGORIES
from apps.receipts.infrastructure.persistence.models import Category, LedgerSettings, Report, ReportStatus
from apps.receipts.infrastructure.persistence.repositories import (
    CategoryRepository,
    LedgerSettingsRepository,
    ReceiptRepository,
    ReportRepository,
)


@pytest.mark.django_db
class TestCategoryRepository:

    def test_seed_defaults_is_idempotent(self):
        assert CategoryRepository.seed_defaults() == len(DEFAULT_CATEGORIES)
        assert CategoryRepository.seed_defaults() == 0
        assert Category.objects.count() == len(DEFAULT_CATEGORIES)

    def test_seed_keeps_existing(self, category):
        assert CategoryRepository.seed_defaults() == len(DEFAULT_CATEGORIES) - 1


@pytest.mark.django_db
class TestReceiptRepository:

    def test_filter_defers_file_data(self, make_receipt):
        make_receipt()

        receipt = ReceiptRepository.filter().get()

        assert "file_data" in receipt.get_deferred_fields()

    def test_for_report(self, make_receipt):
        report = Report.objects.create(name="Trip")
        inside = make_receipt(report=report)
        make_receipt()

        assert ReceiptRepository.for_report(report) == [inside]

    def test_get_by_ids_newest_first(self, make_receipt):
        older = make_receipt(date=date(2024, 1, 1))
        newer = make_receipt(date=date(2024, 2, 1))

        assert ReceiptRepository.get_by_ids([str(older.id), str(newer.id)]) == [newer, older]


@pytest.mark.django_db
class TestReportRepository:

    def test_count_drafts(self):
        Report.objects.create(name="a")
        Report.objects.create(name="b", status=ReportStatus.FINALIZED)

        assert ReportRepository.count_drafts() == 1


@pytest.mark.django_db
class TestLedgerSettingsRepository:

    def test_get_is_singleton(self):
        first = LedgerSettingsRepository.get()
        second = LedgerSettingsRepository.get()

        assert first.pk == second.pk
        assert LedgerSettings.objects.count() == 1

    def test_default_currency_from_settings(self, settings):
        settings.DEFAULT_CURRENCY = "CHF"

        assert LedgerSettingsRepository.get().default_currency == "CHF"

    def test_allocate_invoice_number(self):
        row = LedgerSettingsRepository.get()
        row.invoice_number_prefix = "ACME-"
        row.next_invoice_number = 41
        row.save()

        assert LedgerSettingsRepository.allocate_invoice_number() == "ACME-0041"
        assert LedgerSettingsRepository.allocate_invoice_number() == "ACME-0042"
        assert LedgerSettingsRepository.get().next_invoice_number == 43


@pytest.mark.django_db
def test_partial_conversion_rejected_by_database(make_receipt):
    with pytest.raises(IntegrityError):
        with transaction.atomic():
            make_receipt(original_currency="EUR", converted_total=Decimal("108.54"))
