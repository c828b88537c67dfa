"""Base provider architecture for multi-backend model resolution"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence
from enum import Flag, auto, Enum

from ..core.config import ProviderSettings
from ..core.exceptions import UnknownProviderError, UnsupportedCapabilityError


class ProviderId(str, Enum):
    """Supported backend providers"""
    OPENAI = "openai"
    OLLAMA = "ollama"
    ANTHROPIC = "anthropic"
    GROQ = "groq"
    GOOGLE = "google"
    OPENROUTER = "openrouter"
    FIREWORKS = "fireworks"
    DEEPINFRA = "deepinfra"
    VERTEX = "vertex"

    @classmethod
    def parse(cls, value: Any) -> "ProviderId":
        """Coerce a string into a ProviderId

        Raises:
            UnknownProviderError: If the value names no supported provider
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownProviderError(value, [p.value for p in cls]) from None


class ModelCapabilities(Flag):
    """Capabilities that a provider client supports"""
    TEXT_GENERATION = auto()
    EMBEDDINGS = auto()


class ChatModel(ABC):
    """Handle to one language model of one provider

    Handles are cheap to create and hold no state besides the shared SDK client.
    """

    def __init__(self, provider: ProviderId, model_id: str, client: Any):
        self.provider = provider
        self.model_id = model_id
        self.client = client

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Generate a completion for a single user prompt"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider.value!r}, model_id={self.model_id!r})"


class EmbeddingModel(ABC):
    """Handle to one text embedding model of one provider"""

    def __init__(self, provider: ProviderId, model_id: str, client: Any):
        self.provider = provider
        self.model_id = model_id
        self.client = client

    @abstractmethod
    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed each text, preserving order"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider.value!r}, model_id={self.model_id!r})"


class BaseModelProvider(ABC):
    """Abstract base class for all provider clients

    A provider client is built once from settings and then called with a
    model name to produce a ChatModel handle. Providers with the EMBEDDINGS
    capability also produce EmbeddingModel handles through ``embedding()``.
    """

    # Set by @register_provider
    provider_id: ProviderId
    capabilities: ModelCapabilities = ModelCapabilities.TEXT_GENERATION

    def __init__(self, settings: ProviderSettings):
        self._client = self.create_client(settings)

    @abstractmethod
    def create_client(self, settings: ProviderSettings) -> Any:
        """Build the underlying SDK client

        Raises:
            ProviderConstructionError: If required configuration is missing
        """

    @abstractmethod
    def language_model(self, model_id: str) -> ChatModel:
        """Create a chat model handle for this provider"""

    def text_embedding_model(self, model_id: str) -> EmbeddingModel:
        """Create an embedding model handle for this provider"""
        raise UnsupportedCapabilityError(self.provider_id.value, "embeddings")

    @property
    def client(self) -> Any:
        return self._client

    def supports_capability(self, capability: ModelCapabilities) -> bool:
        return bool(self.capabilities & capability)

    def __call__(self, model_name: str) -> ChatModel:
        self._require_model_name(model_name)
        return self.language_model(model_name)

    def embedding(self, model_name: str) -> EmbeddingModel:
        if not self.supports_capability(ModelCapabilities.EMBEDDINGS):
            raise UnsupportedCapabilityError(self.provider_id.value, "embeddings")
        self._require_model_name(model_name)
        return self.text_embedding_model(model_name)

    @staticmethod
    def _require_model_name(model_name: str) -> None:
        if not isinstance(model_name, str) or not model_name.strip():
            raise ValueError(f"Model name must be a non-empty string, got {model_name!r}")
