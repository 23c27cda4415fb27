"""
Adapter registry mapping provider names to adapters.
"""

import logging
from typing import Dict, List, Mapping, Optional

from .config import DEFAULT_MODELS
from .errors import ProviderNotFoundError
from .interface import ProviderAdapter

logger = logging.getLogger(__name__)


# name -> (display name, base URL, requires auth)
OPENAI_COMPATIBLE_BACKENDS = {
    "openai": ("OpenAI", "https://api.openai.com/v1", True),
    "groq": ("Groq", "https://api.groq.com/openai/v1", True),
    "mistral": ("Mistral", "https://api.mistral.ai/v1", True),
    "together": ("Together", "https://api.together.xyz/v1", True),
    "fireworks": ("Fireworks", "https://api.fireworks.ai/inference/v1", True),
    "perplexity": ("Perplexity", "https://api.perplexity.ai", True),
    "deepseek": ("DeepSeek", "https://api.deepseek.com/v1", True),
    "lmstudio": ("LM Studio", "http://localhost:1234/v1", False),
}


class AdapterRegistry:
    """
    Registry of provider adapters.

    Adding a backend means registering one adapter under its provider
    name; the router looks adapters up here and never branches on names.
    """

    def __init__(self):
        """Initialize the registry."""
        self._adapters: Dict[str, ProviderAdapter] = {}

    def register(self, adapter: ProviderAdapter) -> None:
        """
        Register an adapter under its provider name.

        A second registration for the same name replaces the first.

        Args:
            adapter: Adapter to register
        """
        if adapter.name in self._adapters:
            logger.info(f"Replacing adapter for provider: {adapter.name}")
        self._adapters[adapter.name] = adapter
        logger.debug(f"Registered adapter: {adapter!r}")

    def unregister(self, name: str) -> None:
        """Remove the adapter for a provider, if any."""
        self._adapters.pop(name, None)

    def get(self, name: str) -> ProviderAdapter:
        """
        Get the adapter for a provider.

        Args:
            name: Provider name

        Returns:
            Registered adapter

        Raises:
            ProviderNotFoundError: If no adapter is registered
        """
        if name not in self._adapters:
            raise ProviderNotFoundError(f"Unsupported provider: {name}", provider=name)
        return self._adapters[name]

    def find(self, name: str) -> Optional[ProviderAdapter]:
        return self._adapters.get(name)

    def list_providers(self) -> List[str]:
        return sorted(self._adapters)

    def __contains__(self, name: str) -> bool:
        return name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)


def build_default_registry(
    default_models: Optional[Mapping[str, str]] = None,
    timeout: float = 60.0,
) -> AdapterRegistry:
    """
    Build a registry with an adapter for every supported backend.

    Args:
        default_models: Per-provider default model overrides
        timeout: Per-request timeout applied to every adapter

    Returns:
        Populated registry
    """
    # Imported here so adapters can depend on core without a cycle
    from ..adapters import (
        AnthropicAdapter,
        CohereAdapter,
        GoogleAdapter,
        HuggingFaceAdapter,
        OllamaAdapter,
        OpenAICompatibleAdapter,
        ReplicateAdapter,
    )

    models = dict(DEFAULT_MODELS)
    if default_models:
        models.update(default_models)

    registry = AdapterRegistry()

    for name, (display_name, base_url, requires_auth) in OPENAI_COMPATIBLE_BACKENDS.items():
        registry.register(OpenAICompatibleAdapter(
            name=name,
            default_model=models[name],
            base_url=base_url,
            display_name=display_name,
            requires_auth=requires_auth,
            timeout=timeout,
        ))

    registry.register(AnthropicAdapter("anthropic", models["anthropic"], timeout=timeout))
    registry.register(CohereAdapter("cohere", models["cohere"], timeout=timeout))
    registry.register(GoogleAdapter("google", models["google"], timeout=timeout))
    registry.register(HuggingFaceAdapter("huggingface", models["huggingface"], timeout=timeout))
    registry.register(ReplicateAdapter("replicate", models["replicate"], timeout=timeout))
    registry.register(OllamaAdapter("ollama", models["ollama"], timeout=timeout))

    return registry
