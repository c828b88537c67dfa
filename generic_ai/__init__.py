"""generic-ai - resolve tasks and model names to AI provider model handles"""

from .core.exceptions import (
    GenericAIError,
    UnknownProviderError,
    ProviderConstructionError,
    ProviderInvocationError,
    UnsupportedCapabilityError,
)
from .providers.base_provider import ChatModel, EmbeddingModel, ProviderId
from .model_resolver import (
    ModelResolver,
    ResolverConfig,
    Task,
    TaskDefault,
    get_resolver,
    get_model,
    get_extract_model,
    get_extract_retry_model,
    get_reranker_model,
    get_reranker_retry_model,
    get_smart_scrape_thinking_model,
    get_smart_scrape_tool_model,
    get_embedding_model,
    get_task_default,
)

__version__ = "1.0.0"

__all__ = [
    'GenericAIError',
    'UnknownProviderError',
    'ProviderConstructionError',
    'ProviderInvocationError',
    'UnsupportedCapabilityError',
    'ChatModel',
    'EmbeddingModel',
    'ProviderId',
    'ModelResolver',
    'ResolverConfig',
    'Task',
    'TaskDefault',
    'get_resolver',
    'get_model',
    'get_extract_model',
    'get_extract_retry_model',
    'get_reranker_model',
    'get_reranker_retry_model',
    'get_smart_scrape_thinking_model',
    'get_smart_scrape_tool_model',
    'get_embedding_model',
    'get_task_default',
]
