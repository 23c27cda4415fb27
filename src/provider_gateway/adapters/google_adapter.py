"""
Google Generative Language (Gemini) adapter.

The credential travels as a ``key`` query parameter rather than a header,
and the conversation is sent as one text part.
"""

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..core.config import ProviderConfig
from ..core.interface import ProviderAdapter, ProviderRequest
from ..models.request import Message, RequestOptions, flatten_prompt
from ..models.response import NormalizedResponse, Usage


class _Part(BaseModel):
    text: Optional[str] = None


class _Content(BaseModel):
    parts: List[_Part] = Field(default_factory=list)


class _Candidate(BaseModel):
    content: Optional[_Content] = None


class _UsageMetadata(BaseModel):
    promptTokenCount: Optional[int] = None
    candidatesTokenCount: Optional[int] = None
    totalTokenCount: Optional[int] = None


class GenerateContentBody(BaseModel):
    candidates: List[_Candidate]
    usageMetadata: Optional[_UsageMetadata] = None
    modelVersion: Optional[str] = None


class GoogleAdapter(ProviderAdapter):
    """Gemini ``generateContent`` adapter."""

    display_name = "Google AI"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"

    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        model = self.resolve_model(config, options)

        return ProviderRequest(
            url=f"{self.base_url(config)}/models/{model}:generateContent",
            params={"key": config.api_key},
            json={
                "contents": [
                    {"parts": [{"text": flatten_prompt(messages)}]},
                ],
                "generationConfig": {
                    "temperature": self.resolve_temperature(options),
                    "maxOutputTokens": self.resolve_max_tokens(options),
                },
            },
        )

    def parse_response(self, data: Any) -> NormalizedResponse:
        body = GenerateContentBody.model_validate(data)

        content = ""
        if body.candidates:
            candidate = body.candidates[0].content
            if candidate is not None and candidate.parts:
                content = candidate.parts[0].text or ""

        usage = None
        if body.usageMetadata is not None:
            meta = body.usageMetadata
            prompt_tokens = meta.promptTokenCount or 0
            completion_tokens = meta.candidatesTokenCount or 0
            total = meta.totalTokenCount
            if total is None:
                total = prompt_tokens + completion_tokens
            usage = Usage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=total,
            )

        return NormalizedResponse(completion=content, model=body.modelVersion, usage=usage)
