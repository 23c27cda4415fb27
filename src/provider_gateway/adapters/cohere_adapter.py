"""
Cohere generate adapter.

The generate endpoint takes a single prompt string, so the conversation
is flattened into ``role: content`` lines.
"""

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel

from ..core.config import ProviderConfig
from ..core.interface import ProviderAdapter, ProviderRequest
from ..models.request import Message, RequestOptions, flatten_prompt
from ..models.response import NormalizedResponse


class _Generation(BaseModel):
    text: Optional[str] = None


class GenerateBody(BaseModel):
    generations: List[_Generation]


class CohereAdapter(ProviderAdapter):
    """Cohere prompt-completion adapter."""

    display_name = "Cohere"
    default_base_url = "https://api.cohere.ai/v1"

    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        return ProviderRequest(
            url=f"{self.base_url(config)}/generate",
            headers={"Authorization": f"Bearer {config.api_key}"},
            json={
                "model": self.resolve_model(config, options),
                "prompt": flatten_prompt(messages, with_roles=True),
                "max_tokens": self.resolve_max_tokens(options),
                "temperature": self.resolve_temperature(options),
            },
        )

    def parse_response(self, data: Any) -> NormalizedResponse:
        body = GenerateBody.model_validate(data)

        content = ""
        if body.generations:
            content = body.generations[0].text or ""

        return NormalizedResponse(completion=content)
