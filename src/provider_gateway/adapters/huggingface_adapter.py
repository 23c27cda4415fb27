"""
Hugging Face Inference API adapter.

The model is part of the URL; the reply is a bare JSON array of
``{"generated_text": ...}`` objects.
"""

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, TypeAdapter

from ..core.config import ProviderConfig
from ..core.interface import ProviderAdapter, ProviderRequest
from ..models.request import Message, RequestOptions, flatten_prompt
from ..models.response import NormalizedResponse


class _GeneratedText(BaseModel):
    generated_text: Optional[str] = None


InferenceBody = TypeAdapter(List[_GeneratedText])


class HuggingFaceAdapter(ProviderAdapter):
    """Hosted inference adapter for text-generation models."""

    display_name = "Hugging Face"
    default_base_url = "https://api-inference.huggingface.co"

    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        model = self.resolve_model(config, options)

        return ProviderRequest(
            url=f"{self.base_url(config)}/models/{model}",
            headers={"Authorization": f"Bearer {config.api_key}"},
            json={
                "inputs": flatten_prompt(messages),
                "parameters": {
                    "temperature": self.resolve_temperature(options),
                    "max_new_tokens": self.resolve_max_tokens(options),
                },
            },
        )

    def parse_response(self, data: Any) -> NormalizedResponse:
        generations = InferenceBody.validate_python(data)

        content = ""
        if generations:
            content = generations[0].generated_text or ""

        return NormalizedResponse(completion=content)
