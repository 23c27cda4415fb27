"""
Anthropic Messages API adapter.

Anthropic takes the system prompt as a separate ``system`` field and
rejects ``system`` turns inside ``messages``.
"""

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel

from ..core.config import ProviderConfig
from ..core.interface import ProviderAdapter, ProviderRequest
from ..models.request import Message, RequestOptions, split_system
from ..models.response import NormalizedResponse, Usage


class _ContentBlock(BaseModel):
    type: Optional[str] = None
    text: Optional[str] = None


class _AnthropicUsage(BaseModel):
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


class MessagesBody(BaseModel):
    """The subset of an Anthropic message response the gateway reads."""
    model: Optional[str] = None
    content: List[_ContentBlock]
    usage: Optional[_AnthropicUsage] = None


class AnthropicAdapter(ProviderAdapter):
    """Direct Anthropic API adapter."""

    display_name = "Anthropic"
    default_base_url = "https://api.anthropic.com/v1"
    ANTHROPIC_VERSION = "2023-06-01"

    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        system, conversation = split_system(messages)

        body = {
            "model": self.resolve_model(config, options),
            "max_tokens": self.resolve_max_tokens(options),
            "temperature": self.resolve_temperature(options),
            "messages": conversation,
        }
        if system is not None:
            body["system"] = system

        return ProviderRequest(
            url=f"{self.base_url(config)}/messages",
            headers={
                "x-api-key": config.api_key,
                "anthropic-version": self.ANTHROPIC_VERSION,
            },
            json=body,
        )

    def parse_response(self, data: Any) -> NormalizedResponse:
        body = MessagesBody.model_validate(data)

        content = ""
        if body.content:
            content = body.content[0].text or ""

        usage = None
        if body.usage is not None:
            input_tokens = body.usage.input_tokens or 0
            output_tokens = body.usage.output_tokens or 0
            usage = Usage(
                prompt_tokens=input_tokens,
                completion_tokens=output_tokens,
                total_tokens=input_tokens + output_tokens,
            )

        return NormalizedResponse(completion=content, model=body.model, usage=usage)
