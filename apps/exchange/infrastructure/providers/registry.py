"""
Provider Registry - Maps ProviderName to adapter classes.
The EXCHANGE_RATE_PROVIDER setting picks the adapter a process uses.
"""

import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import models

from apps.exchange.domain.interfaces import BaseExchangeRateProvider
from apps.exchange.infrastructure.providers.frankfurter import FrankfurterProvider
from apps.exchange.infrastructure.providers.mock import MockProvider

logger = logging.getLogger(__name__)


class ProviderName(models.TextChoices):
    """
    Available providers.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseExchangeRateProvider interface
    3. Register it in PROVIDER_REGISTRY
    """

    FRANKFURTER = "frankfurter", "Frankfurter"
    MOCK = "mock", "Mock"


PROVIDER_REGISTRY: dict[str, type[BaseExchangeRateProvider]] = {
    ProviderName.FRANKFURTER: FrankfurterProvider,
    ProviderName.MOCK: MockProvider,
}


def get_provider_instance(provider_name: str) -> BaseExchangeRateProvider | None:
    """
    Get an instance of a provider by its name.

    Returns:
        Instance of the provider adapter, or None if not registered
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        logger.warning("Provider '%s' not found in registry", provider_name)
        return None

    return provider_class()


def get_configured_provider() -> BaseExchangeRateProvider:
    """Instantiate the provider named by settings.EXCHANGE_RATE_PROVIDER."""
    provider = get_provider_instance(settings.EXCHANGE_RATE_PROVIDER)
    if provider is None:
        raise ImproperlyConfigured(
            f"EXCHANGE_RATE_PROVIDER={settings.EXCHANGE_RATE_PROVIDER!r} is not one of "
            f"{', '.join(PROVIDER_REGISTRY)}"
        )
    return provider
