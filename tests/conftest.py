"""
Shared fixtures for provider gateway tests.

Backends are simulated with ``httpx.MockTransport``; no test touches the
network.
"""
import json
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

from provider_gateway import Settings


PROVIDER_HOSTS = {
    "openai": "api.openai.com",
    "anthropic": "api.anthropic.com",
    "huggingface": "api-inference.huggingface.co",
    "groq": "api.groq.com",
    "cohere": "api.cohere.ai",
    "google": "generativelanguage.googleapis.com",
    "mistral": "api.mistral.ai",
    "together": "api.together.xyz",
    "fireworks": "api.fireworks.ai",
    "replicate": "api.replicate.com",
    "perplexity": "api.perplexity.ai",
    "deepseek": "api.deepseek.com",
}

OPENAI_PAYLOAD = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "model": "gpt-3.5-turbo",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello from a chat backend"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
}

ANTHROPIC_PAYLOAD = {
    "id": "msg_123",
    "type": "message",
    "model": "claude-3-haiku-20240307",
    "content": [{"type": "text", "text": "Hello from Claude"}],
    "stop_reason": "end_turn",
    "usage": {"input_tokens": 12, "output_tokens": 4},
}

COHERE_PAYLOAD = {
    "id": "gen-1",
    "generations": [{"id": "g-1", "text": "Hello from Cohere"}],
    "prompt": "user: Hi",
}

GOOGLE_PAYLOAD = {
    "candidates": [
        {
            "content": {"parts": [{"text": "Hello from Gemini"}], "role": "model"},
            "finishReason": "STOP",
        }
    ],
}

HUGGINGFACE_PAYLOAD = [{"generated_text": "Hello from Hugging Face"}]

REPLICATE_PAYLOAD = {
    "id": "pred-1",
    "status": "succeeded",
    "output": ["Hello", " from", " Replicate"],
}

OLLAMA_PAYLOAD = {
    "model": "llama2",
    "created_at": "2024-01-01T00:00:00Z",
    "message": {"role": "assistant", "content": "Hello from Ollama"},
    "done": True,
    "prompt_eval_count": 8,
    "eval_count": 3,
}

PAYLOADS = {
    "openai": OPENAI_PAYLOAD,
    "groq": OPENAI_PAYLOAD,
    "mistral": OPENAI_PAYLOAD,
    "together": OPENAI_PAYLOAD,
    "fireworks": OPENAI_PAYLOAD,
    "perplexity": OPENAI_PAYLOAD,
    "deepseek": OPENAI_PAYLOAD,
    "anthropic": ANTHROPIC_PAYLOAD,
    "cohere": COHERE_PAYLOAD,
    "google": GOOGLE_PAYLOAD,
    "huggingface": HUGGINGFACE_PAYLOAD,
    "replicate": REPLICATE_PAYLOAD,
}


Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackends:
    """
    Records every outbound request and answers per provider.

    Providers without a configured answer reply with their success payload.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._answers: Dict[str, Union[int, Handler]] = {}
        self._hosts = {host: name for name, host in PROVIDER_HOSTS.items()}

    def fail(self, provider: str, status: int = 500) -> None:
        self._answers[provider] = status

    def answer(self, provider: str, handler: Handler) -> None:
        self._answers[provider] = handler

    @property
    def called(self) -> List[str]:
        return [self._hosts.get(r.url.host, r.url.host) for r in self.requests]

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        provider = self._hosts.get(request.url.host)
        answer = self._answers.get(provider)

        if callable(answer):
            return answer(request)
        if isinstance(answer, int):
            return httpx.Response(answer, json={"error": "simulated failure"})
        if provider in PAYLOADS:
            return httpx.Response(200, json=PAYLOADS[provider])
        return httpx.Response(404, json={"error": "unknown host"})


@pytest.fixture
def backends() -> FakeBackends:
    return FakeBackends()


def make_settings(**providers: Dict[str, Any]) -> Settings:
    """Settings from ``name={"apiKey": ..., "enabled": ...}`` keyword pairs."""
    return Settings.from_dict({"providers": providers})


def keyed(key: str = "test-key", **extra: Any) -> Dict[str, Any]:
    return {"apiKey": key, "enabled": True, **extra}
