"""
OpenAI-compatible chat adapter.

Covers every backend that accepts the OpenAI ``/chat/completions`` body
unchanged and replies with ``choices[0].message.content``: OpenAI itself,
Groq, Mistral, Together, Fireworks, Perplexity, DeepSeek, and a local
LM Studio server (which takes no credential).
"""

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel

from ..core.config import ProviderConfig
from ..core.interface import ProviderAdapter, ProviderRequest
from ..models.request import Message, RequestOptions, to_chat_messages
from ..models.response import NormalizedResponse, Usage


class _ChoiceMessage(BaseModel):
    content: Optional[str] = None


class _Choice(BaseModel):
    message: Optional[_ChoiceMessage] = None


class _ChatUsage(BaseModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def to_usage(self) -> Usage:
        prompt_tokens = self.prompt_tokens or 0
        completion_tokens = self.completion_tokens or 0
        total_tokens = self.total_tokens
        if total_tokens is None:
            total_tokens = prompt_tokens + completion_tokens
        return Usage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
        )


class ChatCompletionBody(BaseModel):
    """
    The subset of an OpenAI chat completion body the gateway reads.

    ``choices`` is required: a 2xx error envelope without it is malformed.
    """
    model: Optional[str] = None
    choices: List[_Choice]
    usage: Optional[_ChatUsage] = None


class OpenAICompatibleAdapter(ProviderAdapter):
    """
    Bearer-token JSON chat adapter.

    One instance per backend, parameterized by endpoint and default model.
    """

    def __init__(
        self,
        name: str,
        default_model: str,
        base_url: str,
        display_name: Optional[str] = None,
        chat_path: str = "/chat/completions",
        requires_auth: bool = True,
        timeout: float = 60.0,
    ):
        """
        Initialize OpenAI-compatible adapter.

        Args:
            name: Provider name this adapter is registered under
            default_model: Model used when none is requested
            base_url: API base URL (config.base_url overrides it)
            display_name: Backend name used in error messages
            chat_path: Chat completion endpoint path
            requires_auth: Send the Bearer token; False for local servers
            timeout: Request timeout in seconds
        """
        super().__init__(name, default_model, timeout=timeout)
        self.default_base_url = base_url
        self.display_name = display_name or name
        self._chat_path = chat_path
        self._requires_auth = requires_auth

    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        headers = {}
        if self._requires_auth:
            headers["Authorization"] = f"Bearer {config.api_key}"

        return ProviderRequest(
            url=f"{self.base_url(config)}{self._chat_path}",
            headers=headers,
            json={
                "model": self.resolve_model(config, options),
                "messages": to_chat_messages(messages),
                "temperature": self.resolve_temperature(options),
                "max_tokens": self.resolve_max_tokens(options),
            },
        )

    def parse_response(self, data: Any) -> NormalizedResponse:
        body = ChatCompletionBody.model_validate(data)

        content = ""
        if body.choices and body.choices[0].message:
            content = body.choices[0].message.content or ""

        return NormalizedResponse(
            completion=content,
            model=body.model,
            usage=body.usage.to_usage() if body.usage is not None else None,
        )
