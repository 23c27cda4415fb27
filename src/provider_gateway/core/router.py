"""
Provider router with sequential fallback.

Routes one provider-agnostic chat request through the enabled backends
in priority order until one of them succeeds.
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import httpx
from opentelemetry import trace

from .config import FREE_TIER_PRIORITY, ProviderConfig, Settings, order_enabled_providers
from .errors import (
    AllProvidersFailedError,
    GatewayCancelledError,
    GatewayNotConfiguredError,
    GatewayTimeoutError,
    NoProvidersEnabledError,
    ProviderNotFoundError,
)
from .interface import ProviderAdapter
from .registry import AdapterRegistry, build_default_registry
from ..models.request import (
    Message,
    MessageLike,
    RequestOptions,
    coerce_messages,
    coerce_options,
)
from ..models.response import NormalizedResponse

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ProviderRouter:
    """
    Multi-provider request router.

    Holds the current settings and an adapter registry. Each call to
    ``make_request`` captures the settings in force when it starts, so
    ``update_settings`` never changes the view of a request in flight.
    """

    def __init__(
        self,
        settings: Union[Settings, Mapping[str, Any], None] = None,
        registry: Optional[AdapterRegistry] = None,
        priority: Sequence[str] = FREE_TIER_PRIORITY,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60.0,
    ):
        """
        Initialize router.

        Args:
            settings: Initial provider settings
            registry: Adapter registry (defaults to every supported backend)
            priority: Provider names tried before all others, in order
            client: Shared HTTP client; one is created on first use if omitted
            timeout: Per-request timeout for the created client and adapters
        """
        self._settings: Optional[Settings] = None
        if registry is None:
            registry = build_default_registry(timeout=timeout)
        self._registry = registry
        self._priority = tuple(priority)
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

        if settings is not None:
            self.update_settings(settings)

    @property
    def settings(self) -> Optional[Settings]:
        return self._settings

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    def update_settings(self, settings: Union[Settings, Mapping[str, Any]]) -> None:
        """
        Replace the current settings wholesale.

        Args:
            settings: New settings, or a plain mapping accepted by
                ``Settings.from_dict``
        """
        if not isinstance(settings, Settings):
            settings = Settings.from_dict(settings)

        self._settings = settings.model_copy(deep=True)
        enabled = self.get_enabled_providers()
        logger.info(
            f"Settings updated: {len(self._settings.providers)} providers configured, "
            f"{len(enabled)} enabled"
        )

    def get_enabled_providers(self, settings: Optional[Settings] = None) -> List[str]:
        """
        Enabled, keyed providers in attempt priority order.

        Args:
            settings: Snapshot to use; defaults to the current settings
        """
        if settings is None:
            settings = self._settings
        return order_enabled_providers(settings, self._priority)

    def get_available_providers(self) -> List[Dict[str, Any]]:
        """
        Diagnostics view of every configured provider.

        Returns:
            List of ``{"name", "enabled", "has_key"}`` dicts
        """
        if self._settings is None:
            return []

        return [
            {
                "name": name,
                "enabled": config.enabled,
                "has_key": config.has_key,
            }
            for name, config in self._settings.providers.items()
        ]

    @staticmethod
    def attempt_order(provider_order: Sequence[str], preferred: Optional[str] = None) -> List[str]:
        """
        Build the fallback chain.

        The preferred provider goes first when it is in ``provider_order``;
        otherwise the first entry leads. Each provider appears once.
        """
        if not provider_order:
            return []

        start = preferred if preferred in provider_order else provider_order[0]
        sequence = [start]
        for name in provider_order:
            if name not in sequence:
                sequence.append(name)
        return sequence

    async def make_request(
        self,
        messages: Sequence[MessageLike],
        options: Union[RequestOptions, Mapping[str, Any], None] = None,
        *,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> NormalizedResponse:
        """
        Route a chat request through the fallback chain.

        Args:
            messages: Conversation in order
            options: Generation options; ``provider`` picks the first candidate
            cancel_event: Setting it aborts the request without falling back
            timeout: Overall deadline in seconds across all attempts

        Returns:
            The first successful normalized response

        Raises:
            GatewayNotConfiguredError: If no settings were installed
            NoProvidersEnabledError: If no provider is enabled and keyed
            AllProvidersFailedError: If every candidate failed
            GatewayCancelledError: If ``cancel_event`` was set
            GatewayTimeoutError: If ``timeout`` elapsed
        """
        settings = self._settings
        if settings is None:
            raise GatewayNotConfiguredError("AI settings not configured")

        messages = coerce_messages(messages)
        options = coerce_options(options)

        provider_order = self.get_enabled_providers(settings)
        if not provider_order:
            raise NoProvidersEnabledError("No AI providers are enabled")

        if options.provider and options.provider not in provider_order:
            logger.warning(
                f"Requested provider {options.provider} is not enabled, "
                f"starting with {provider_order[0]}"
            )

        sequence = self.attempt_order(provider_order, options.provider)

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None

        with tracer.start_as_current_span("gateway.make_request") as span:
            span.set_attribute("message_count", len(messages))
            span.set_attribute("candidates", ",".join(sequence))

            attempts: List[Tuple[str, Exception]] = []

            for name in sequence:
                config = settings.get(name)
                if config is None or not config.enabled:
                    logger.debug(f"Skipping provider {name}: not enabled")
                    continue

                adapter = self._registry.find(name)
                if adapter is None:
                    error = ProviderNotFoundError(f"Unsupported provider: {name}", provider=name)
                    logger.warning(f"Provider {name} failed, trying next: {error}")
                    attempts.append((name, error))
                    continue

                with tracer.start_as_current_span("gateway.attempt") as attempt_span:
                    attempt_span.set_attribute("provider", name)
                    try:
                        result = await self._attempt(
                            adapter, config, messages, options, cancel_event, deadline,
                        )
                    except (GatewayCancelledError, GatewayTimeoutError):
                        attempt_span.set_attribute("outcome", "aborted")
                        span.set_attribute("outcome", "aborted")
                        raise
                    except Exception as e:
                        attempt_span.set_attribute("outcome", "failed")
                        logger.warning(f"Provider {name} failed, trying next: {e}")
                        attempts.append((name, e))
                        continue

                    attempt_span.set_attribute("outcome", "success")

                span.set_attribute("provider", name)
                span.set_attribute("outcome", "success")
                logger.info(f"Request served by {name} after {len(attempts)} failed attempts")
                return result

            span.set_attribute("outcome", "exhausted")
            logger.error(f"All AI providers failed: {[n for n, _ in attempts]}")
            error = AllProvidersFailedError(attempts)
            if attempts:
                raise error from attempts[-1][1]
            raise error

    async def _attempt(
        self,
        adapter: ProviderAdapter,
        config: ProviderConfig,
        messages: List[Message],
        options: RequestOptions,
        cancel_event: Optional[asyncio.Event],
        deadline: Optional[float],
    ) -> NormalizedResponse:
        """Run one adapter call, racing it against cancellation and the deadline."""
        loop = asyncio.get_running_loop()

        if cancel_event is not None and cancel_event.is_set():
            raise GatewayCancelledError("Request cancelled", provider=adapter.name)

        remaining = None
        if deadline is not None:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise GatewayTimeoutError("Request deadline exceeded", provider=adapter.name)

        client = await self._get_client()
        call = asyncio.ensure_future(adapter.adapt(config, messages, options, client=client))
        waiters = {call}

        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=remaining, return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            if not call.done():
                call.cancel()
                await asyncio.gather(call, return_exceptions=True)

        if call in done:
            return call.result()

        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Request cancelled while waiting on {adapter.name}")
            raise GatewayCancelledError("Request cancelled", provider=adapter.name)

        logger.info(f"Request deadline exceeded while waiting on {adapter.name}")
        raise GatewayTimeoutError("Request deadline exceeded", provider=adapter.name)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this router created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ProviderRouter":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
