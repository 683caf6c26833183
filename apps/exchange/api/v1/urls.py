from django.urls import path, include
from rest_framework.routers import SimpleRouter

from apps.exchange.api.v1.views import CurrencyViewSet, ExchangeRateViewSet

router = SimpleRouter()
router.register(r'exchange-rate', ExchangeRateViewSet, basename='exchange-rate')
router.register(r'currencies', CurrencyViewSet, basename='currency')

urlpatterns = [
    path('', include(router.urls)),
]
