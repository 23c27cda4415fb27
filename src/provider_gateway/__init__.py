"""
Provider Gateway

Routes provider-agnostic chat requests across heterogeneous LLM backends:
- Unified message, options and response models
- One adapter per backend wire format
- Priority ordering that exhausts free-tier backends first
- Sequential fallback until one backend succeeds
"""

from .core.config import ProviderConfig, Settings, load_settings
from .core.errors import (
    GatewayError,
    NoProvidersEnabledError,
    AllProvidersFailedError,
    GatewayCancelledError,
    GatewayTimeoutError,
)
from .core.interface import ProviderAdapter
from .core.registry import AdapterRegistry, build_default_registry
from .core.router import ProviderRouter
from .models.request import Message, RequestOptions
from .models.response import NormalizedResponse, Usage

__all__ = [
    "ProviderConfig",
    "Settings",
    "load_settings",
    "GatewayError",
    "NoProvidersEnabledError",
    "AllProvidersFailedError",
    "GatewayCancelledError",
    "GatewayTimeoutError",
    "ProviderAdapter",
    "AdapterRegistry",
    "build_default_registry",
    "ProviderRouter",
    "Message",
    "RequestOptions",
    "NormalizedResponse",
    "Usage",
]
