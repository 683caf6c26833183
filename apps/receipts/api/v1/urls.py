from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.receipts.api.v1.views import (
    CategoryViewSet,
    DashboardView,
    InvoiceViewSet,
    LedgerSettingsView,
    ReceiptViewSet,
    ReportViewSet,
)

router = DefaultRouter()
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'receipts', ReceiptViewSet, basename='receipt')
router.register(r'reports', ReportViewSet, basename='report')
router.register(r'invoices', InvoiceViewSet, basename='invoice')

urlpatterns = [
    path('settings/', LedgerSettingsView.as_view(), name='ledger-settings'),
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
    path('', include(router.urls)),
]
