"""
Provider adapters for the supported backends.
"""

from .openai_adapter import OpenAICompatibleAdapter
from .anthropic_adapter import AnthropicAdapter
from .cohere_adapter import CohereAdapter
from .google_adapter import GoogleAdapter
from .huggingface_adapter import HuggingFaceAdapter
from .replicate_adapter import ReplicateAdapter
from .ollama_adapter import OllamaAdapter

__all__ = [
    "OpenAICompatibleAdapter",
    "AnthropicAdapter",
    "CohereAdapter",
    "GoogleAdapter",
    "HuggingFaceAdapter",
    "ReplicateAdapter",
    "OllamaAdapter",
]
