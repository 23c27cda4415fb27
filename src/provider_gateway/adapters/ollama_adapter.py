"""
Ollama adapter.

Talks to a local Ollama server over loopback without authentication.
"""

from typing import Any, Dict, Optional, Sequence

from pydantic import BaseModel

from ..core.config import ProviderConfig
from ..core.interface import ProviderAdapter, ProviderRequest
from ..models.request import Message, RequestOptions, to_chat_messages
from ..models.response import NormalizedResponse, Usage


class _OllamaMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class OllamaChatBody(BaseModel):
    model: Optional[str] = None
    message: Optional[_OllamaMessage] = None
    prompt_eval_count: Optional[int] = None
    eval_count: Optional[int] = None


class OllamaAdapter(ProviderAdapter):
    """
    Ollama adapter for local LLM inference.

    No API key is sent; the configured key only marks the provider usable.
    """

    display_name = "Ollama"
    default_base_url = "http://localhost:11434"

    def __init__(self, name: str, default_model: str, timeout: float = 120.0):
        super().__init__(name, default_model, timeout=timeout)

    def _build_options(self, options: RequestOptions) -> Dict[str, Any]:
        """Build Ollama options from request options."""
        return {
            "temperature": self.resolve_temperature(options),
            "num_predict": self.resolve_max_tokens(options),
        }

    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        return ProviderRequest(
            url=f"{self.base_url(config)}/api/chat",
            json={
                "model": self.resolve_model(config, options),
                "messages": to_chat_messages(messages),
                "stream": False,
                "options": self._build_options(options),
            },
        )

    def parse_response(self, data: Any) -> NormalizedResponse:
        body = OllamaChatBody.model_validate(data)

        content = ""
        if body.message is not None:
            content = body.message.content or ""

        # Token counts only arrive on completed, non-streamed replies
        usage = None
        if body.prompt_eval_count is not None or body.eval_count is not None:
            prompt_tokens = body.prompt_eval_count or 0
            completion_tokens = body.eval_count or 0
            usage = Usage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            )

        return NormalizedResponse(completion=content, model=body.model, usage=usage)
