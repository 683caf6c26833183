"""
ViewSets for the exchange API v1.
"""

from datetime import datetime

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from apps.exchange.domain.exceptions import RateServiceError, RateUnavailableError
from apps.exchange.domain.services import get_exchange_rate_service


@extend_schema(tags=['Rates'])
class ExchangeRateViewSet(viewsets.ViewSet):

    @extend_schema(
        parameters=[
            OpenApiParameter("date", OpenApiTypes.DATE, required=True, description="Rate date (YYYY-MM-DD)"),
            OpenApiParameter("from", OpenApiTypes.STR, required=True, description="Source currency code (e.g. EUR)"),
            OpenApiParameter("to", OpenApiTypes.STR, required=True, description="Target currency code (e.g. USD)"),
        ],
        description="Historical exchange rate for one currency pair on one day"
    )
    def list(self, request):
        date_str = request.query_params.get('date')
        source_currency_code = request.query_params.get('from')
        exchanged_currency_code = request.query_params.get('to')

        if not all([date_str, source_currency_code, exchanged_currency_code]):
            return Response(
                {"error": "Missing required params: date, from, to"},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            valuation_date = datetime.strptime(date_str, "%Y-%m-%d").date()
        except ValueError:
            return Response(
                {"error": "Invalid date format. Use YYYY-MM-DD"},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            rate = get_exchange_rate_service().get_exchange_rate(
                valuation_date,
                source_currency_code,
                exchanged_currency_code
            )
        except RateServiceError as e:
            return Response(
                {"error": str(e), "upstream_status": e.status_code},
                status=status.HTTP_502_BAD_GATEWAY
            )
        except RateUnavailableError as e:
            return Response(
                {"error": str(e), "currency": e.currency},
                status=status.HTTP_404_NOT_FOUND
            )

        return Response({
            "rate": rate,
            "from": source_currency_code,
            "to": exchanged_currency_code,
            "date": date_str,
        })


@extend_schema(tags=['Currencies'])
class CurrencyViewSet(viewsets.ViewSet):

    @extend_schema(description="Currency codes supported by the rate source, mapped to their names")
    def list(self, request):
        try:
            currencies = get_exchange_rate_service().list_currencies()
        except RateServiceError as e:
            return Response(
                {"error": str(e), "upstream_status": e.status_code},
                status=status.HTTP_502_BAD_GATEWAY
            )
        return Response(currencies)
