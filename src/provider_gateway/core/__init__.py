"""
Core gateway components.
"""

from .config import (
    DEFAULT_MODELS,
    FREE_TIER_PRIORITY,
    ProviderConfig,
    Settings,
    load_settings,
    order_enabled_providers,
)
from .errors import (
    GatewayError,
    GatewayNotConfiguredError,
    NoProvidersEnabledError,
    ProviderNotFoundError,
    ProviderRequestError,
    ProviderAuthenticationError,
    ProviderRateLimitError,
    ProviderConnectionError,
    MalformedResponseError,
    AllProvidersFailedError,
    GatewayCancelledError,
    GatewayTimeoutError,
)
from .interface import ProviderAdapter, ProviderRequest
from .registry import AdapterRegistry, build_default_registry
from .router import ProviderRouter

__all__ = [
    "DEFAULT_MODELS",
    "FREE_TIER_PRIORITY",
    "ProviderConfig",
    "Settings",
    "load_settings",
    "order_enabled_providers",
    "GatewayError",
    "GatewayNotConfiguredError",
    "NoProvidersEnabledError",
    "ProviderNotFoundError",
    "ProviderRequestError",
    "ProviderAuthenticationError",
    "ProviderRateLimitError",
    "ProviderConnectionError",
    "MalformedResponseError",
    "AllProvidersFailedError",
    "GatewayCancelledError",
    "GatewayTimeoutError",
    "ProviderAdapter",
    "ProviderRequest",
    "AdapterRegistry",
    "build_default_registry",
    "ProviderRouter",
]
