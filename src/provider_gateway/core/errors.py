"""
Provider gateway error types.
"""

from typing import List, Optional, Tuple


class GatewayError(Exception):
    """Base exception for gateway errors."""

    def __init__(self, message: str, provider: str = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class GatewayNotConfiguredError(GatewayError):
    """Raised when a request is made before any settings were installed."""
    pass


class NoProvidersEnabledError(GatewayError):
    """Raised when no provider is both enabled and keyed."""
    pass


class ProviderNotFoundError(GatewayError):
    """Raised when no adapter is registered for a provider name."""
    pass


class ProviderRequestError(GatewayError):
    """Raised when a provider answers with a non-success status."""

    def __init__(self, message: str, provider: str = None, status_code: int = None):
        super().__init__(message, provider)
        self.status_code = status_code


class ProviderAuthenticationError(ProviderRequestError):
    """Raised when a provider rejects the credential."""
    pass


class ProviderRateLimitError(ProviderRequestError):
    """Raised when a provider reports rate limiting."""

    def __init__(
        self,
        message: str,
        provider: str = None,
        status_code: int = 429,
        retry_after: float = None,
    ):
        super().__init__(message, provider, status_code)
        self.retry_after = retry_after


class ProviderConnectionError(GatewayError):
    """Raised when the provider cannot be reached."""
    pass


class MalformedResponseError(GatewayError):
    """Raised when a 2xx body does not match the provider's schema."""
    pass


class AllProvidersFailedError(GatewayError):
    """
    Raised when every candidate in the fallback chain failed.

    Keeps each (provider, error) pair in attempt order.
    """

    def __init__(self, attempts: List[Tuple[str, Exception]]):
        self.attempts = list(attempts)
        names = ", ".join(name for name, _ in self.attempts)
        super().__init__(f"All AI providers failed (tried: {names})")

    @property
    def last_error(self) -> Optional[Exception]:
        if self.attempts:
            return self.attempts[-1][1]
        return None

    @property
    def last_provider(self) -> Optional[str]:
        if self.attempts:
            return self.attempts[-1][0]
        return None


class GatewayCancelledError(GatewayError):
    """Raised when the caller cancels an in-flight request."""
    pass


class GatewayTimeoutError(GatewayError):
    """Raised when the caller's deadline for a request expires."""
    pass
