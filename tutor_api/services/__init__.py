"""Services for the application."""

from tutor_api.services.providers import (
    AllProvidersUnavailableError,
    ProviderAPIError,
    ProviderClient,
    ProviderError,
    ProviderManager,
    ProviderResponseError,
    ProviderTransportError,
)

__all__ = [
    "AllProvidersUnavailableError",
    "ProviderAPIError",
    "ProviderClient",
    "ProviderError",
    "ProviderManager",
    "ProviderResponseError",
    "ProviderTransportError",
]
