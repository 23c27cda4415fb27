"""
Integration tests for provider gateway configuration, registry and errors.
"""
import pytest
from pydantic import ValidationError

from provider_gateway import (
    AdapterRegistry,
    Message,
    ProviderConfig,
    RequestOptions,
    Settings,
    build_default_registry,
    load_settings,
)
from provider_gateway.adapters import AnthropicAdapter, OpenAICompatibleAdapter
from provider_gateway.core.config import DEFAULT_MODELS, order_enabled_providers
from provider_gateway.core.errors import (
    AllProvidersFailedError,
    GatewayError,
    ProviderNotFoundError,
    ProviderRateLimitError,
    ProviderRequestError,
)


class TestSettings:
    """Test settings construction."""

    def test_from_dict_camel_case(self):
        """Test the camelCase shape the embedding application persists."""
        settings = Settings.from_dict({
            "providers": {
                "ollama": {
                    "apiKey": "local",
                    "enabled": True,
                    "baseUrl": "http://127.0.0.1:11434",
                    "models": ["llama3"],
                },
            },
        })
        config = settings.get("ollama")
        assert config.name == "ollama"
        assert config.api_key == "local"
        assert config.base_url == "http://127.0.0.1:11434"
        assert config.models == ["llama3"]
        assert config.is_usable

    def test_from_dict_keeps_provider_configs(self):
        """Test ProviderConfig values are used as given."""
        config = ProviderConfig(name="groq", api_key="k", enabled=True, models=["llama3-8b"])
        settings = Settings.from_dict({"groq": config})
        assert settings.get("groq") == config
        assert settings.get("groq").is_usable

    def test_from_dict_snake_case_without_wrapper(self):
        """Test a bare provider mapping with snake_case keys."""
        settings = Settings.from_dict({"groq": {"api_key": "k", "enabled": True}})
        assert settings.get("groq").is_usable

    def test_missing_fields_default_to_disabled(self):
        """Test an empty provider entry is not usable."""
        config = Settings.from_dict({"openai": None}).get("openai")
        assert config.enabled is False
        assert config.has_key is False
        assert not config.is_usable

    def test_provider_config_is_frozen(self):
        """Test provider configs cannot be mutated in place."""
        config = ProviderConfig(name="openai", api_key="k", enabled=True)
        with pytest.raises(ValidationError):
            config.enabled = False

    def test_order_without_settings(self):
        """Test ordering with no settings is empty."""
        assert order_enabled_providers(None) == []

    def test_load_settings_from_yaml(self, tmp_path):
        """Test loading settings from a YAML file."""
        path = tmp_path / "providers.yaml"
        path.write_text(
            "providers:\n"
            "  groq:\n"
            "    apiKey: gsk-test\n"
            "    enabled: true\n"
            "  openai:\n"
            "    apiKey: ''\n"
            "    enabled: true\n"
        )
        settings = load_settings(str(path))
        assert order_enabled_providers(settings) == ["groq"]

    def test_load_settings_rejects_non_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / "providers.yaml"
        path.write_text("- groq\n- openai\n")
        with pytest.raises(ValueError):
            load_settings(str(path))

    def test_load_settings_missing_file(self, tmp_path):
        """Test a missing file raises."""
        with pytest.raises(FileNotFoundError):
            load_settings(str(tmp_path / "absent.yaml"))


class TestRequestModels:
    """Test request model validation."""

    def test_unknown_role_rejected(self):
        """Test only system, user and assistant roles are accepted."""
        with pytest.raises(ValidationError):
            Message(role="tool", content="result")

    def test_options_all_optional(self):
        """Test empty options leave every field unset."""
        options = RequestOptions()
        assert options.provider is None
        assert options.model is None
        assert options.temperature is None
        assert options.max_tokens is None

    def test_options_range_checked(self):
        """Test out-of-range generation options are rejected."""
        with pytest.raises(ValidationError):
            RequestOptions(temperature=5)
        with pytest.raises(ValidationError):
            RequestOptions(max_tokens=0)


class TestAdapterRegistry:
    """Test adapter registry."""

    def test_default_registry_covers_every_backend(self):
        """Test every backend with a default model has an adapter."""
        registry = build_default_registry()
        assert registry.list_providers() == sorted(DEFAULT_MODELS)

    def test_default_model_override(self):
        """Test default models can be swapped per provider."""
        registry = build_default_registry(default_models={"openai": "gpt-4o-mini"})
        assert registry.get("openai").default_model == "gpt-4o-mini"
        assert registry.get("groq").default_model == DEFAULT_MODELS["groq"]

    def test_timeout_applies_to_every_adapter(self):
        """Test the registry timeout reaches remote and local adapters."""
        registry = build_default_registry(timeout=5.0)
        assert registry.get("ollama").timeout == 5.0
        assert registry.get("openai").timeout == 5.0

    def test_register_custom_adapter(self):
        """Test adding a backend is one registration."""
        registry = AdapterRegistry()
        registry.register(OpenAICompatibleAdapter(
            name="openrouter",
            default_model="openrouter/auto",
            base_url="https://openrouter.ai/api/v1",
            display_name="OpenRouter",
        ))
        assert "openrouter" in registry
        assert registry.get("openrouter").display_name == "OpenRouter"

    def test_register_replaces_existing(self):
        """Test re-registering a name replaces the adapter."""
        registry = AdapterRegistry()
        registry.register(AnthropicAdapter("anthropic", "claude-3-haiku-20240307"))
        registry.register(AnthropicAdapter("anthropic", "claude-3-5-sonnet-20240620"))
        assert len(registry) == 1
        assert registry.get("anthropic").default_model == "claude-3-5-sonnet-20240620"

    def test_get_unknown_provider(self):
        """Test looking up an unknown provider raises."""
        registry = AdapterRegistry()
        with pytest.raises(ProviderNotFoundError):
            registry.get("rork")
        assert registry.find("rork") is None

    def test_unregister(self):
        """Test unregistering a provider."""
        registry = build_default_registry()
        registry.unregister("replicate")
        assert "replicate" not in registry


class TestGatewayErrors:
    """Test gateway error types."""

    def test_gateway_error(self):
        """Test base gateway error."""
        error = GatewayError("Test error", provider="openai")
        assert str(error) == "Test error"
        assert error.provider == "openai"

    def test_request_error_is_gateway_error(self):
        """Test request errors carry the status code."""
        error = ProviderRateLimitError("Groq API failed: 429", provider="groq", retry_after=2.0)
        assert isinstance(error, ProviderRequestError)
        assert isinstance(error, GatewayError)
        assert error.status_code == 429
        assert error.retry_after == 2.0

    def test_all_providers_failed_keeps_attempts(self):
        """Test the aggregate error lists every attempt."""
        first = ProviderRequestError("Groq API failed: 500", provider="groq", status_code=500)
        last = ProviderRequestError("OpenAI API failed: 502", provider="openai", status_code=502)
        error = AllProvidersFailedError([("groq", first), ("openai", last)])
        assert error.last_error is last
        assert error.last_provider == "openai"
        assert "groq" in str(error)

    def test_all_providers_failed_empty(self):
        """Test the aggregate error with no attempts."""
        error = AllProvidersFailedError([])
        assert error.last_error is None
        assert error.last_provider is None
