"""
Replicate predictions adapter.

Replicate addresses models by version hash and authenticates with a
``Token`` scheme. The prediction output is an array of string fragments.
"""

from typing import Any, List, Optional, Sequence, Union

from pydantic import BaseModel

from ..core.config import ProviderConfig
from ..core.interface import ProviderAdapter, ProviderRequest
from ..models.request import Message, RequestOptions, flatten_prompt
from ..models.response import NormalizedResponse


class PredictionBody(BaseModel):
    version: Optional[str] = None
    output: Optional[Union[List[str], str]] = None


class ReplicateAdapter(ProviderAdapter):
    """Replicate prediction adapter; the model name is the version hash."""

    display_name = "Replicate"
    default_base_url = "https://api.replicate.com/v1"

    def build_request(
        self,
        config: ProviderConfig,
        messages: Sequence[Message],
        options: RequestOptions,
    ) -> ProviderRequest:
        return ProviderRequest(
            url=f"{self.base_url(config)}/predictions",
            headers={"Authorization": f"Token {config.api_key}"},
            json={
                "version": self.resolve_model(config, options),
                "input": {"prompt": flatten_prompt(messages)},
            },
        )

    def parse_response(self, data: Any) -> NormalizedResponse:
        body = PredictionBody.model_validate(data)

        if isinstance(body.output, list):
            content = "".join(body.output)
        else:
            content = body.output or ""

        return NormalizedResponse(completion=content)
