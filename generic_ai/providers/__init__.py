"""Provider clients - one per supported backend"""

from .base_provider import (
    BaseModelProvider,
    ChatModel,
    EmbeddingModel,
    ModelCapabilities,
    ProviderId,
)
from .provider_registry import ModelProviderRegistry
from .provider_decorators import register_provider, initialize_providers

__all__ = [
    'BaseModelProvider',
    'ChatModel',
    'EmbeddingModel',
    'ModelCapabilities',
    'ProviderId',
    'ModelProviderRegistry',
    'register_provider',
    'initialize_providers',
]
