"""Pytest configuration and shared fixtures"""

from typing import Any, Dict, List, Sequence, Type

import pytest

from generic_ai.core.config import ModelDefaultsSettings, ProviderSettings, Settings, get_settings
from generic_ai.model_resolver import ModelResolver, ResolverConfig, get_resolver
from generic_ai.providers.base_provider import (
    BaseModelProvider,
    ChatModel,
    EmbeddingModel,
    ModelCapabilities,
    ProviderId,
)
from generic_ai.providers.provider_registry import ModelProviderRegistry


TEXT_ONLY_PROVIDERS = {ProviderId.ANTHROPIC, ProviderId.GROQ, ProviderId.OPENROUTER}


class FakeChatModel(ChatModel):
    def generate(self, prompt: str, *, system=None, max_tokens=None, temperature=None) -> str:
        return f"{self.provider.value}/{self.model_id}: {prompt}"


class FakeEmbeddingModel(EmbeddingModel):
    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        return [[float(len(text))] for text in texts]


class FakeProvider(BaseModelProvider):
    """Provider client that records the model names it is called with"""

    capabilities = ModelCapabilities.TEXT_GENERATION | ModelCapabilities.EMBEDDINGS

    def create_client(self, settings: ProviderSettings) -> Any:
        self.calls: List[str] = []
        self.embedding_calls: List[str] = []
        return {"settings": settings}

    def language_model(self, model_id: str) -> ChatModel:
        self.calls.append(model_id)
        return FakeChatModel(self.provider_id, model_id, self.client)

    def text_embedding_model(self, model_id: str) -> EmbeddingModel:
        self.embedding_calls.append(model_id)
        return FakeEmbeddingModel(self.provider_id, model_id, self.client)


def fake_constructors() -> Dict[ProviderId, Type[FakeProvider]]:
    """One FakeProvider subclass per ProviderId, text-only where the real one is"""
    constructors = {}
    for provider_id in ProviderId:
        attrs: Dict[str, Any] = {"provider_id": provider_id}
        if provider_id in TEXT_ONLY_PROVIDERS:
            attrs["capabilities"] = ModelCapabilities.TEXT_GENERATION
        constructors[provider_id] = type(f"Fake{provider_id.name.title()}Provider", (FakeProvider,), attrs)
    return constructors


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate tests from the host environment, .env files and cached settings"""
    env_names = (
        list(ProviderSettings.model_fields)
        + list(ModelDefaultsSettings.model_fields)
        + list(Settings.model_fields)
    )
    for name in env_names:
        monkeypatch.delenv(name.upper(), raising=False)
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    monkeypatch.chdir(tmp_path)

    get_settings.cache_clear()
    get_resolver.cache_clear()
    yield
    get_settings.cache_clear()
    get_resolver.cache_clear()


@pytest.fixture
def fake_registry_build(monkeypatch):
    """Make ModelProviderRegistry.build use fake provider clients"""
    original_build = ModelProviderRegistry.build

    def build(cls, settings, constructors=None, strict=False):
        return original_build(settings, constructors=fake_constructors(), strict=strict)

    monkeypatch.setattr(ModelProviderRegistry, "build", classmethod(build))


@pytest.fixture
def make_resolver():
    """Build a resolver from the current environment with fake provider clients"""
    def _make() -> ModelResolver:
        registry = ModelProviderRegistry.build(ProviderSettings(), constructors=fake_constructors())
        return ModelResolver(ResolverConfig.from_settings(ModelDefaultsSettings()), registry)
    return _make
