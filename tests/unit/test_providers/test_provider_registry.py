"""Tests for ModelProviderRegistry and provider registration"""

import pytest

from generic_ai.core.config import ProviderSettings
from generic_ai.core.exceptions import ProviderConstructionError, UnknownProviderError
from generic_ai.providers import provider_decorators
from generic_ai.providers.base_provider import BaseModelProvider, ProviderId
from generic_ai.providers.provider_decorators import (
    initialize_providers,
    register_provider,
    scan_and_import_providers,
)
from generic_ai.providers.provider_registry import ModelProviderRegistry

from conftest import FakeProvider, fake_constructors


class TestProviderId:
    """Closed provider enumeration"""

    def test_members(self):
        assert {p.value for p in ProviderId} == {
            "openai", "ollama", "anthropic", "groq", "google",
            "openrouter", "fireworks", "deepinfra", "vertex",
        }

    def test_parse(self):
        assert ProviderId.parse("vertex") is ProviderId.VERTEX
        assert ProviderId.parse("openai") is ProviderId.OPENAI
        assert ProviderId.parse(ProviderId.GROQ) is ProviderId.GROQ

    @pytest.mark.parametrize("value", [" OpenAI ", "OPENAI", "Vertex", "openai "])
    def test_parse_is_exact(self, value):
        with pytest.raises(UnknownProviderError):
            ProviderId.parse(value)

    def test_parse_unknown(self):
        with pytest.raises(UnknownProviderError) as exc_info:
            ProviderId.parse("azure")
        assert exc_info.value.provider == "azure"
        assert "vertex" in str(exc_info.value)

    def test_unknown_provider_is_value_error(self):
        with pytest.raises(ValueError):
            ProviderId.parse(None)


class TestRegistryBuild:
    """Eager, isolated construction"""

    def test_one_entry_per_provider(self):
        registry = ModelProviderRegistry.build(ProviderSettings(), constructors=fake_constructors())

        assert len(registry) == len(ProviderId)
        assert list(registry) == list(ProviderId)
        assert registry.available() == list(ProviderId)
        assert registry.failures() == {}

    def test_clients_receive_settings(self):
        settings = ProviderSettings(openai_api_key="sk-test")
        registry = ModelProviderRegistry.build(settings, constructors=fake_constructors())
        assert registry.get("openai").client["settings"] is settings

    def test_failing_constructor_is_isolated(self):
        def broken(settings):
            raise RuntimeError("bad key")

        constructors = fake_constructors()
        constructors[ProviderId.GROQ] = broken

        registry = ModelProviderRegistry.build(ProviderSettings(), constructors=constructors)

        assert len(registry) == len(ProviderId)
        assert ProviderId.GROQ in registry
        assert ProviderId.GROQ not in registry.available()
        assert isinstance(registry.get(ProviderId.OPENAI), FakeProvider)

        with pytest.raises(ProviderConstructionError, match="bad key") as exc_info:
            registry.get(ProviderId.GROQ)
        assert isinstance(exc_info.value.__cause__, ProviderConstructionError)
        assert isinstance(exc_info.value.__cause__.__cause__, RuntimeError)

    def test_construction_error_kept_as_is(self):
        def unconfigured(settings):
            raise ProviderConstructionError("fireworks", "FIREWORKS_API_KEY is not set")

        constructors = fake_constructors()
        constructors[ProviderId.FIREWORKS] = unconfigured

        registry = ModelProviderRegistry.build(ProviderSettings(), constructors=constructors)

        assert registry.failures()[ProviderId.FIREWORKS].reason == "FIREWORKS_API_KEY is not set"

    def test_missing_constructor_recorded_as_failure(self):
        constructors = fake_constructors()
        del constructors[ProviderId.DEEPINFRA]

        registry = ModelProviderRegistry.build(ProviderSettings(), constructors=constructors)

        assert len(registry) == len(ProviderId)
        with pytest.raises(ProviderConstructionError, match="no provider implementation"):
            registry.get("deepinfra")

    def test_strict_raises_first_failure(self):
        def broken(settings):
            raise RuntimeError("boom")

        constructors = fake_constructors()
        constructors[ProviderId.ANTHROPIC] = broken

        with pytest.raises(ProviderConstructionError, match="boom"):
            ModelProviderRegistry.build(ProviderSettings(), constructors=constructors, strict=True)

    def test_get_unknown_provider(self):
        registry = ModelProviderRegistry.build(ProviderSettings(), constructors=fake_constructors())
        with pytest.raises(UnknownProviderError):
            registry.get("mistral")

    def test_default_build_uses_real_providers(self):
        # No credentials at all: only Ollama can be built
        registry = ModelProviderRegistry.build(ProviderSettings())

        assert len(registry) == len(ProviderId)
        assert registry.available() == [ProviderId.OLLAMA]
        with pytest.raises(ProviderConstructionError, match="OPENAI_API_KEY"):
            registry.get("openai")


class TestProviderRegistration:
    """Class table and decorator registration"""

    @pytest.fixture(autouse=True)
    def isolate_registration(self, monkeypatch):
        monkeypatch.setattr(ModelProviderRegistry, "_providers", {})
        monkeypatch.setattr(provider_decorators, "_decorated_providers", {})

    def test_register_provider_class(self):
        ModelProviderRegistry.register("groq", FakeProvider)
        assert ModelProviderRegistry.get_registered_providers() == {ProviderId.GROQ: FakeProvider}

    def test_register_rejects_non_provider(self):
        with pytest.raises(ValueError, match="must inherit from BaseModelProvider"):
            ModelProviderRegistry.register(ProviderId.GROQ, dict)

    def test_clear(self):
        ModelProviderRegistry.register(ProviderId.GROQ, FakeProvider)
        ModelProviderRegistry.clear()
        assert ModelProviderRegistry.get_registered_providers() == {}

    def test_decorator_sets_provider_id(self):
        @register_provider("fireworks")
        class DecoratedProvider(FakeProvider):
            pass

        assert DecoratedProvider.provider_id is ProviderId.FIREWORKS
        assert provider_decorators._decorated_providers[ProviderId.FIREWORKS] is DecoratedProvider

    def test_decorator_rejects_unknown_provider(self):
        with pytest.raises(UnknownProviderError):
            register_provider("cohere")

    def test_scan_imports_all_implementation_modules(self):
        modules = scan_and_import_providers()
        assert modules == [
            "generic_ai.providers.implementations.anthropic_providers",
            "generic_ai.providers.implementations.google_providers",
            "generic_ai.providers.implementations.openai_providers",
        ]

    def test_initialize_registers_every_provider(self):
        # Modules are already imported, so restore what their decorators recorded
        from generic_ai.providers.implementations import (
            anthropic_providers,
            google_providers,
            openai_providers,
        )
        for module in (anthropic_providers, google_providers, openai_providers):
            for obj in vars(module).values():
                if isinstance(obj, type) and issubclass(obj, BaseModelProvider) and "provider_id" in vars(obj):
                    provider_decorators._decorated_providers[obj.provider_id] = obj

        stats = initialize_providers()

        assert stats["total_providers"] == len(ProviderId)
        assert set(ModelProviderRegistry.get_registered_providers()) == set(ProviderId)
