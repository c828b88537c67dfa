"""OpenAI and OpenAI-compatible provider implementations

Ollama, Groq, OpenRouter, Fireworks and DeepInfra all expose the OpenAI
chat completions API, so they share one client class with different
endpoints and keys.
"""

from typing import Any, Dict, List, Optional, Sequence

from openai import OpenAI

from ..base_provider import (
    BaseModelProvider,
    ChatModel,
    EmbeddingModel,
    ModelCapabilities,
    ProviderId,
)
from ..provider_decorators import register_provider
from ...core.config import ProviderSettings
from ...core.exceptions import ProviderConstructionError


class OpenAIChatModel(ChatModel):
    """Chat completions model"""

    def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        params: Dict[str, Any] = {"model": self.model_id, "messages": messages}
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if temperature is not None:
            params["temperature"] = temperature

        response = self.client.chat.completions.create(**params)
        return response.choices[0].message.content or ""


class OpenAIEmbeddingModel(EmbeddingModel):
    """Embeddings endpoint model"""

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        response = self.client.embeddings.create(model=self.model_id, input=list(texts))
        return [item.embedding for item in response.data]


class OpenAICompatibleProvider(BaseModelProvider):
    """Provider speaking the OpenAI API at some base URL"""

    capabilities = ModelCapabilities.TEXT_GENERATION | ModelCapabilities.EMBEDDINGS
    api_key_env: str = "OPENAI_API_KEY"
    default_base_url: Optional[str] = None

    def get_api_key(self, settings: ProviderSettings) -> Optional[str]:
        return getattr(settings, self.api_key_env.lower())

    def get_base_url(self, settings: ProviderSettings) -> Optional[str]:
        return self.default_base_url

    def create_client(self, settings: ProviderSettings) -> OpenAI:
        api_key = self.get_api_key(settings)
        # The SDK would otherwise fall back to OPENAI_API_KEY for every endpoint
        if not api_key:
            raise ProviderConstructionError(self.provider_id.value, f"{self.api_key_env} is not set")
        self.base_url = self.get_base_url(settings)
        return OpenAI(api_key=api_key, base_url=self.base_url)

    def language_model(self, model_id: str) -> ChatModel:
        return OpenAIChatModel(self.provider_id, model_id, self.client)

    def text_embedding_model(self, model_id: str) -> EmbeddingModel:
        return OpenAIEmbeddingModel(self.provider_id, model_id, self.client)


@register_provider(ProviderId.OPENAI)
class OpenAIProvider(OpenAICompatibleProvider):
    """OpenAI API, optionally behind OPENAI_BASE_URL"""

    def get_base_url(self, settings: ProviderSettings) -> Optional[str]:
        return settings.openai_base_url


@register_provider(ProviderId.OLLAMA)
class OllamaProvider(OpenAICompatibleProvider):
    """Local Ollama server through its OpenAI-compatible /v1 endpoint"""

    DEFAULT_HOST = "http://localhost:11434"

    def get_api_key(self, settings: ProviderSettings) -> Optional[str]:
        # Required by the SDK, ignored by Ollama
        return "ollama"

    def get_base_url(self, settings: ProviderSettings) -> Optional[str]:
        host = (settings.ollama_base_url or self.DEFAULT_HOST).rstrip("/")
        if host.endswith("/v1"):
            return host
        if host.endswith("/api"):
            host = host[: -len("/api")]
        return f"{host}/v1"


@register_provider(ProviderId.GROQ)
class GroqProvider(OpenAICompatibleProvider):
    capabilities = ModelCapabilities.TEXT_GENERATION
    api_key_env = "GROQ_API_KEY"
    default_base_url = "https://api.groq.com/openai/v1"


@register_provider(ProviderId.OPENROUTER)
class OpenRouterProvider(OpenAICompatibleProvider):
    capabilities = ModelCapabilities.TEXT_GENERATION
    api_key_env = "OPENROUTER_API_KEY"
    default_base_url = "https://openrouter.ai/api/v1"


@register_provider(ProviderId.FIREWORKS)
class FireworksProvider(OpenAICompatibleProvider):
    api_key_env = "FIREWORKS_API_KEY"
    default_base_url = "https://api.fireworks.ai/inference/v1"


@register_provider(ProviderId.DEEPINFRA)
class DeepInfraProvider(OpenAICompatibleProvider):
    api_key_env = "DEEPINFRA_API_KEY"
    default_base_url = "https://api.deepinfra.com/v1/openai"
