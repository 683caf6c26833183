"""
ViewSets for the receipts API v1.
"""

from django.db.models import ProtectedError
from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.receipts.api.v1.serializers import (
    CategorySerializer,
    CategoryTotalSerializer,
    InvoiceRequestSerializer,
    LedgerSettingsSerializer,
    ReceiptDetailSerializer,
    ReceiptFilterSerializer,
    ReceiptSerializer,
    ReportSerializer,
)
from apps.receipts.application.dto import InvoiceRequestDTO
from apps.receipts.application.invoices import NoReceiptsFound, generate_invoice
from apps.receipts.domain.aggregation import summarize_receipts
from apps.receipts.domain.services import ReceiptConversionService
from apps.receipts.infrastructure.persistence.models import Category, Receipt, Report
from apps.receipts.infrastructure.persistence.repositories import (
    CategoryRepository,
    LedgerSettingsRepository,
    ReceiptRepository,
    ReportRepository,
)

MONEY_FIELDS = {"total", "original_currency", "date"}


class ReceiptPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100


class DefaultCurrencyMixin:
    """Adds the ledger's default currency to the serializer context."""

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["default_currency"] = LedgerSettingsRepository.get().default_currency
        return context


@extend_schema(tags=['Categories'])
class CategoryViewSet(viewsets.ModelViewSet):

    queryset = Category.objects.all()
    serializer_class = CategorySerializer

    def list(self, request, *args, **kwargs):
        CategoryRepository.seed_defaults()
        return super().list(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {"error": "Category is still used by receipts"},
                status=status.HTTP_409_CONFLICT
            )


@extend_schema(tags=['Receipts'])
class ReceiptViewSet(DefaultCurrencyMixin, viewsets.ModelViewSet):

    serializer_class = ReceiptSerializer
    pagination_class = ReceiptPagination

    def get_queryset(self):
        if self.action == "list":
            filters = getattr(self, "list_filters", {})
            return ReceiptRepository.filter(
                search=filters.get("search"),
                category_id=filters.get("category"),
                report_id=filters.get("report"),
                unassigned=filters.get("unassigned", False),
                date_from=filters.get("date_from"),
                date_to=filters.get("date_to"),
            )
        return Receipt.objects.select_related("category", "report").prefetch_related("line_items")

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ReceiptDetailSerializer
        return ReceiptSerializer

    @extend_schema(parameters=[ReceiptFilterSerializer])
    def list(self, request, *args, **kwargs):
        filters = ReceiptFilterSerializer(data=request.query_params)
        if not filters.is_valid():
            return Response(
                {"error": "Invalid filter parameters", "details": filters.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        self.list_filters = filters.validated_data
        return super().list(request, *args, **kwargs)

    def _respond(self, receipt, outcome, status_code):
        data = self.get_serializer(receipt).data
        if outcome is not None and outcome.error:
            data["conversion_error"] = outcome.error
        return Response(data, status=status_code)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        values = serializer.validated_data
        outcome = ReceiptConversionService.resolve(
            values["total"],
            values["original_currency"],
            values["date"],
            serializer.context["default_currency"],
        )
        receipt = serializer.save(**outcome.as_fields())
        return self._respond(receipt, outcome, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        values = serializer.validated_data
        outcome = None
        extra = {}
        if MONEY_FIELDS & set(values):
            outcome = ReceiptConversionService.resolve(
                values.get("total", instance.total),
                values.get("original_currency", instance.original_currency),
                values.get("date", instance.date),
                serializer.context["default_currency"],
            )
            extra = outcome.as_fields()

        receipt = serializer.save(**extra)
        if getattr(receipt, "_prefetched_objects_cache", None):
            # Line items may have been rewritten
            receipt._prefetched_objects_cache = {}
        return self._respond(receipt, outcome, status.HTTP_200_OK)


@extend_schema(tags=['Reports'])
class ReportViewSet(DefaultCurrencyMixin, viewsets.ModelViewSet):

    queryset = Report.objects.all().order_by("-created_at")
    serializer_class = ReportSerializer

    def retrieve(self, request, *args, **kwargs):
        report = self.get_object()
        context = self.get_serializer_context()
        receipts = ReceiptRepository.for_report(report)
        summary = summarize_receipts(receipts, context["default_currency"])

        return Response({
            "report": ReportSerializer(report, context=context).data,
            "receipts": ReceiptSerializer(receipts, many=True, context=context).data,
            "categories": CategoryTotalSerializer(summary.categories, many=True).data,
        })


@extend_schema(tags=['Settings'])
class LedgerSettingsView(generics.RetrieveUpdateAPIView):

    serializer_class = LedgerSettingsSerializer

    def get_object(self):
        return LedgerSettingsRepository.get()


@extend_schema(tags=['Dashboard'])
class DashboardView(APIView):

    def get(self, request):
        CategoryRepository.seed_defaults()
        currency = LedgerSettingsRepository.get().default_currency
        summary = summarize_receipts(ReceiptRepository.all_for_summary(), currency)
        recent = ReceiptRepository.filter()[:5]

        return Response({
            "total_receipts": len(summary.lines),
            "draft_reports": ReportRepository.count_drafts(),
            "recent_receipts": ReceiptSerializer(
                recent, many=True, context={"default_currency": currency}
            ).data,
            "currency": currency,
            "grand_total": summary.grand_total,
            "unconverted_count": len(summary.unconverted_receipt_ids),
            "category_breakdown": CategoryTotalSerializer(summary.categories, many=True).data,
        })


@extend_schema(tags=['Invoices'])
class InvoiceViewSet(viewsets.ViewSet):

    @extend_schema(
        request=InvoiceRequestSerializer,
        responses={(200, "application/pdf"): OpenApiTypes.BINARY},
        description="Render an expense report or a numbered client invoice as PDF"
    )
    @action(detail=False, methods=['post'], url_path='generate')
    def generate(self, request):
        serializer = InvoiceRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Missing or invalid type or receipt_ids", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        config = serializer.validated_data.get("config", {})
        invoice_request = InvoiceRequestDTO(
            invoice_type=serializer.validated_data["type"],
            receipt_ids=[str(receipt_id) for receipt_id in serializer.validated_data["receipt_ids"]],
            title=config.get("title") or None,
            client_name=config.get("client_name", "Client"),
            client_address=config.get("client_address", ""),
            due_date=config.get("due_date"),
            date_range=config.get("date_range", ""),
            notes=config.get("notes", ""),
        )

        try:
            filename, pdf_bytes = generate_invoice(invoice_request)
        except NoReceiptsFound as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)

        response = HttpResponse(pdf_bytes, content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
