"""
Provider adapter interface.

Defines the contract every backend adapter implements: translate the
generic message list into one backend's wire format, send it, and
normalize the reply.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

import httpx
from pydantic import ValidationError

from .config import ProviderConfig, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from .errors import (
    MalformedResponseError,
    ProviderAuthenticationError,
    ProviderConnectionError,
    ProviderRateLimitError,
    ProviderRequestError,
)
from ..models.request import Message, RequestOptions
from ..models.response import NormalizedResponse

logger = logging.getLogger(__name__)


@dataclass
class ProviderRequest:
    """A fully built outbound HTTP call."""
    url: str
    json: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


class ProviderAdapter(ABC):
    """
    Abstract base class for provider adapters.

    Subclasses implement ``build_request`` and ``parse_response``;
    ``adapt`` performs the round trip and maps failures onto the
    gateway error types.
    """

    #: Human-readable backend name used in error messages.
    display_name: str = "Provider"

    #: Base URL used when the provider config does not override it.
    default_base_url: str = ""

    def __init__(
        self,
        name: str,
        default_model: str,
        timeout: float = 60.0,
    ):
        """
        Initialize adapter.

        Args:
            name: Provider name this adapter is registered under
            default_model: Model used when neither options nor config name one
            timeout: Per-request timeout in seconds
        """
        self._name = name
        self._default_model = default_model
        self._timeout = timeout

    @property
    def name(self) -> str:
        return self._name

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def timeout(self) -> float:
        return self._timeout

    @abstractmethod
    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        """
        Build the backend-specific HTTP request.

        Args:
            config: Provider configuration (credential, base URL)
            messages: Conversation in order
            options: Generation options

        Returns:
            The request to send
        """
        pass

    @abstractmethod
    def parse_response(self, data: Any) -> NormalizedResponse:
        """
        Parse a successful response body.

        May raise ``pydantic.ValidationError`` when the body contradicts
        the backend schema; absent fields must map to empty values.
        """
        pass

    async def adapt(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: Optional[RequestOptions] = None,
        *,
        client: httpx.AsyncClient,
    ) -> NormalizedResponse:
        """
        Send one request to this backend and normalize the result.

        Raises:
            ProviderConnectionError: On transport failure
            ProviderRequestError: On a non-success status
            MalformedResponseError: On an unparseable success body
        """
        options = options or RequestOptions()
        request = self.build_request(config, messages, options)
        logger.debug(f"Sending {len(messages)} messages to {self._name} at {request.url}")

        try:
            response = await client.post(
                request.url,
                json=request.json,
                headers={"Content-Type": "application/json", **request.headers},
                params=request.params or None,
                timeout=self._timeout,
            )
        except httpx.RequestError as e:
            raise ProviderConnectionError(
                f"{self.display_name} API unreachable: {e}",
                provider=self._name,
            ) from e

        self._check_response_errors(response)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{self.display_name} API returned a non-JSON body",
                provider=self._name,
            ) from e

        try:
            result = self.parse_response(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"{self.display_name} API returned an unexpected body: {e.error_count()} errors",
                provider=self._name,
            ) from e

        result.provider = self._name
        return result

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Check response for errors and raise appropriate exceptions."""
        if response.is_success:
            return

        status = response.status_code
        message = f"{self.display_name} API failed: {status}"

        if status in (401, 403):
            raise ProviderAuthenticationError(message, provider=self._name, status_code=status)

        if status == 429:
            retry_after = response.headers.get("retry-after")
            try:
                retry = float(retry_after) if retry_after else None
            except ValueError:
                retry = None
            raise ProviderRateLimitError(message, provider=self._name, retry_after=retry)

        raise ProviderRequestError(message, provider=self._name, status_code=status)

    def base_url(self, config: ProviderConfig) -> str:
        """Configured base URL, or this backend's fixed one."""
        return (config.base_url or self.default_base_url).rstrip("/")

    def resolve_model(self, config: ProviderConfig, options: RequestOptions) -> str:
        if options.model:
            return options.model
        if config.models:
            return config.models[0]
        return self._default_model

    @staticmethod
    def resolve_temperature(options: RequestOptions) -> float:
        if options.temperature is None:
            return DEFAULT_TEMPERATURE
        return options.temperature

    @staticmethod
    def resolve_max_tokens(options: RequestOptions) -> int:
        if options.max_tokens is None:
            return DEFAULT_MAX_TOKENS
        return options.max_tokens

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, default_model={self.default_model!r})"
