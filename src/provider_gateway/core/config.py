"""
Provider settings and routing policy for the gateway.

Settings are supplied by the embedding application. The gateway never
reads credentials from the environment; ``load_settings`` only reads the
path it is given.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# Cost-free or low-cost backends are exhausted before paid ones.
FREE_TIER_PRIORITY: Sequence[str] = (
    "huggingface",
    "groq",
    "cohere",
    "google",
    "mistral",
)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000

DEFAULT_MODELS: Dict[str, str] = {
    "openai": "gpt-3.5-turbo",
    "anthropic": "claude-3-haiku-20240307",
    "huggingface": "microsoft/DialoGPT-medium",
    "groq": "mixtral-8x7b-32768",
    "cohere": "command",
    "google": "gemini-pro",
    "mistral": "mistral-tiny",
    "together": "togethercomputer/RedPajama-INCITE-Chat-3B-v1",
    "fireworks": "accounts/fireworks/models/mixtral-8x7b-instruct",
    "replicate": "13c3cdee13ee059ab779f0291d29054dab00a47dad8261375654de5540165fb0",
    "perplexity": "llama-3.1-sonar-small-128k-online",
    "deepseek": "deepseek-chat",
    "ollama": "llama2",
    "lmstudio": "local-model",
}


class ProviderConfig(BaseModel):
    """Credentials and enablement for one backend."""
    name: str
    api_key: str = ""
    enabled: bool = False
    base_url: Optional[str] = None
    models: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def has_key(self) -> bool:
        return bool(self.api_key)

    @property
    def is_usable(self) -> bool:
        """Enabled and carrying a non-empty credential."""
        return self.enabled and self.has_key


class Settings(BaseModel):
    """Mapping of provider name to its configuration."""
    providers: Dict[str, ProviderConfig] = Field(default_factory=dict)

    class Config:
        frozen = True

    def get(self, name: str) -> Optional[ProviderConfig]:
        return self.providers.get(name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        """
        Build settings from a plain mapping.

        Accepts either ``{"providers": {...}}`` or the provider mapping
        itself. Provider entries may be ``ProviderConfig`` instances, used
        as given, or mappings with camelCase (``apiKey``, ``baseUrl``) or
        snake_case keys.
        """
        providers_data = data.get("providers", data) if data else {}
        providers = {}

        for name, entry in providers_data.items():
            if isinstance(entry, ProviderConfig):
                providers[name] = entry
                continue

            entry = entry or {}
            providers[name] = ProviderConfig(
                name=name,
                api_key=entry.get("api_key", entry.get("apiKey")) or "",
                enabled=bool(entry.get("enabled", False)),
                base_url=entry.get("base_url", entry.get("baseUrl")),
                models=list(entry.get("models") or []),
            )

        return cls(providers=providers)


def load_settings(config_path: str) -> Settings:
    """
    Load provider settings from a YAML file.

    Args:
        config_path: Path to the settings file

    Returns:
        Loaded settings

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not hold a mapping
    """
    path = Path(config_path)
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    settings = Settings.from_dict(data)
    logger.info(f"Loaded settings for {len(settings.providers)} providers from {path}")
    return settings


def order_enabled_providers(
    settings: Optional[Settings],
    priority: Sequence[str] = FREE_TIER_PRIORITY,
) -> List[str]:
    """
    Names of usable providers, priority-list members first.

    Priority members keep the priority list's order; all others follow
    sorted by name so the result is reproducible.
    """
    if settings is None:
        return []

    rank = {name: index for index, name in enumerate(priority)}
    usable = [name for name, config in settings.providers.items() if config.is_usable]

    return sorted(
        usable,
        key=lambda name: (0, rank[name], "") if name in rank else (1, 0, name),
    )
