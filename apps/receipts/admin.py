"""
Django Admin configuration for the receipts app.
"""

from django.contrib import admin
from django.utils.html import format_html

from apps.receipts.infrastructure.persistence.models import (
    Category,
    LedgerSettings,
    LineItem,
    Receipt,
    Report,
    ReportStatus,
)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin interface for Category model."""

    list_display = ('name', 'get_swatch', 'is_default', 'created_at')
    list_filter = ('is_default',)
    search_fields = ('name',)
    readonly_fields = ('id', 'created_at', 'updated_at')
    ordering = ('name',)

    def get_swatch(self, obj):
        return format_html(
            '<span style="color: {};">●</span> {}', obj.color, obj.color
        )
    get_swatch.short_description = 'Color'


class LineItemInline(admin.TabularInline):
    model = LineItem
    extra = 0


@admin.register(Receipt)
class ReceiptAdmin(admin.ModelAdmin):
    """Admin interface for Receipt model."""

    list_display = (
        'vendor_name',
        'date',
        'get_original_amount',
        'get_converted_amount',
        'category',
        'report',
    )
    list_filter = ('date', 'category', 'original_currency', 'ai_extracted')
    search_fields = ('vendor_name', 'notes')
    date_hierarchy = 'date'
    ordering = ('-date',)
    inlines = [LineItemInline]
    # The conversion unit is only ever written by the API, all three fields together
    readonly_fields = (
        'id',
        'converted_total',
        'exchange_rate',
        'converted_currency',
        'created_at',
        'updated_at',
    )
    exclude = ('file_data',)

    fieldsets = (
        ('Receipt', {
            'fields': ('vendor_name', 'date', 'category', 'report', 'notes')
        }),
        ('Amounts', {
            'fields': ('subtotal', 'tax', 'total', 'original_currency')
        }),
        ('Conversion', {
            'fields': ('converted_total', 'exchange_rate', 'converted_currency')
        }),
        ('File', {
            'fields': ('file_name', 'file_type', 'drive_file_id', 'ai_extracted')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_original_amount(self, obj):
        return f"{obj.total} {obj.original_currency}"
    get_original_amount.short_description = 'Total'
    get_original_amount.admin_order_field = 'total'

    def get_converted_amount(self, obj):
        if not obj.is_converted:
            return "-"
        return f"{obj.converted_total} {obj.converted_currency} @ {obj.exchange_rate}"
    get_converted_amount.short_description = 'Converted'


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    """Admin interface for Report model with status actions."""

    list_display = ('name', 'get_status', 'date_from', 'date_to', 'created_at')
    list_filter = ('status',)
    search_fields = ('name', 'description')
    readonly_fields = ('id', 'created_at', 'updated_at')
    actions = ['finalize_reports', 'reopen_reports']

    def get_status(self, obj):
        """Display status with colored indicator."""
        if obj.status == ReportStatus.FINALIZED:
            return format_html('<span style="color: {}; font-weight: bold;">● {}</span>', "green", "Finalized")
        return format_html('<span style="color: {};">○ {}</span>', "gray", "Draft")
    get_status.short_description = 'Status'

    @admin.action(description='Finalize selected reports')
    def finalize_reports(self, request, queryset):
        updated = queryset.update(status=ReportStatus.FINALIZED)
        self.message_user(request, f'{updated} report(s) finalized.')

    @admin.action(description='Reopen selected reports as drafts')
    def reopen_reports(self, request, queryset):
        updated = queryset.update(status=ReportStatus.DRAFT)
        self.message_user(request, f'{updated} report(s) reopened.')


@admin.register(LedgerSettings)
class LedgerSettingsAdmin(admin.ModelAdmin):
    list_display = ('default_currency', 'invoice_number_prefix', 'next_invoice_number', 'business_name')
