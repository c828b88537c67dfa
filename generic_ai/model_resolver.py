"""Resolve logical tasks and model names to provider model handles

Defaults are read from settings once, into a ResolverConfig. The process-wide
resolver behind the module-level helpers is built on first use and cached, so
environment changes after that point have no effect.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .core.config import ModelDefaultsSettings, Settings, get_settings
from .core.exceptions import ProviderInvocationError, UnsupportedCapabilityError
from .core.logger import CentralizedLogger
from .core.telemetry import TelemetryManager
from .providers.base_provider import ChatModel, EmbeddingModel, ModelCapabilities, ProviderId
from .providers.provider_registry import ModelProviderRegistry


logger = CentralizedLogger("ModelResolver")

DEFAULT_EXTRACT_MODEL = "gemini-2.5-pro"
DEFAULT_EXTRACT_PROVIDER = ProviderId.VERTEX.value
DEFAULT_EXTRACT_RETRY_MODEL = "gemini-2.5-pro"
DEFAULT_EXTRACT_RETRY_PROVIDER = ProviderId.GOOGLE.value
DEFAULT_SMART_SCRAPE_THINKING_MODEL = "gemini-2.5-pro"
DEFAULT_SMART_SCRAPE_THINKING_PROVIDER = ProviderId.VERTEX.value
DEFAULT_SMART_SCRAPE_TOOL_MODEL = "gemini-2.0-flash"
DEFAULT_SMART_SCRAPE_TOOL_PROVIDER = ProviderId.GOOGLE.value


class Task(str, Enum):
    """Logical use cases with their own default model"""
    EXTRACT = "extract"
    EXTRACT_RETRY = "extract_retry"
    RERANKER = "reranker"
    RERANKER_RETRY = "reranker_retry"
    SMART_SCRAPE_THINKING = "smart_scrape_thinking"
    SMART_SCRAPE_TOOL = "smart_scrape_tool"


@dataclass(frozen=True)
class TaskDefault:
    model: str
    # Kept as configured; unknown names fail when resolved
    provider: str


@dataclass(frozen=True)
class ResolverConfig:
    """Everything the resolver reads from the environment, read once"""

    default_provider: str
    model_override: Optional[str] = None
    embedding_override: Optional[str] = None
    tasks: Mapping[Task, TaskDefault] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, models: ModelDefaultsSettings) -> "ResolverConfig":
        """Apply the fallback chain to the configured model defaults

        Empty values count as unset. Reranker defaults fall back to the
        extraction defaults.
        """
        if models.default_provider:
            default_provider = models.default_provider
        elif models.ollama_base_url:
            default_provider = ProviderId.OLLAMA.value
        else:
            default_provider = ProviderId.OPENAI.value

        extract = TaskDefault(
            model=models.extract_model or DEFAULT_EXTRACT_MODEL,
            provider=models.extract_provider or DEFAULT_EXTRACT_PROVIDER,
        )
        extract_retry = TaskDefault(
            model=models.extract_retry_model or DEFAULT_EXTRACT_RETRY_MODEL,
            provider=models.extract_retry_provider or DEFAULT_EXTRACT_RETRY_PROVIDER,
        )
        tasks = {
            Task.EXTRACT: extract,
            Task.EXTRACT_RETRY: extract_retry,
            Task.RERANKER: TaskDefault(
                model=models.reranker_model or extract.model,
                provider=models.reranker_provider or extract.provider,
            ),
            Task.RERANKER_RETRY: TaskDefault(
                model=models.reranker_retry_model or extract_retry.model,
                provider=models.reranker_retry_provider or extract_retry.provider,
            ),
            Task.SMART_SCRAPE_THINKING: TaskDefault(
                model=models.smart_scrape_thinking_model or DEFAULT_SMART_SCRAPE_THINKING_MODEL,
                provider=models.smart_scrape_thinking_provider or DEFAULT_SMART_SCRAPE_THINKING_PROVIDER,
            ),
            Task.SMART_SCRAPE_TOOL: TaskDefault(
                model=models.smart_scrape_tool_model or DEFAULT_SMART_SCRAPE_TOOL_MODEL,
                provider=models.smart_scrape_tool_provider or DEFAULT_SMART_SCRAPE_TOOL_PROVIDER,
            ),
        }

        return cls(
            default_provider=default_provider,
            model_override=models.model_name or None,
            embedding_override=models.model_embedding_name or None,
            tasks=MappingProxyType(tasks),
        )


class ModelResolver:
    """Maps (model name, provider) pairs and tasks to model handles

    Every call invokes the provider client again; nothing is cached here.
    """

    def __init__(self, config: ResolverConfig, registry: ModelProviderRegistry):
        self.config = config
        self.registry = registry
        self._telemetry = TelemetryManager("generic-ai.resolver")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelResolver":
        registry = ModelProviderRegistry.build(
            settings.providers, strict=settings.strict_provider_construction
        )
        return cls(ResolverConfig.from_settings(settings.models), registry)

    def resolve(self, model_name: str, provider: Optional[Any] = None) -> ChatModel:
        """Create a chat model handle

        Args:
            model_name: Requested model; replaced by MODEL_NAME when set
            provider: ProviderId or its value; defaults to the default provider

        Raises:
            UnknownProviderError: If provider is not a supported provider
            ProviderConstructionError: If the provider client failed to construct
            ProviderInvocationError: If the provider client rejects the call
        """
        provider_id = ProviderId.parse(
            provider if provider is not None else self.config.default_provider
        )
        effective_name = self.config.model_override or model_name

        with self._telemetry.traced_operation(
            "resolve_model", provider=provider_id.value, model=effective_name
        ):
            client = self.registry.get(provider_id)
            try:
                handle = client(effective_name)
            except Exception as e:
                raise ProviderInvocationError(provider_id.value, str(effective_name), str(e)) from e

        logger.debug(
            f"Resolved model {effective_name} on {provider_id.value}",
            extra={"provider": provider_id.value, "model": effective_name},
        )
        return handle

    def resolve_embedding(self, model_name: str, provider: Optional[Any] = None) -> EmbeddingModel:
        """Create an embedding model handle

        Same semantics as resolve(), with MODEL_EMBEDDING_NAME as the override.

        Raises:
            UnsupportedCapabilityError: If the provider has no embedding models
        """
        provider_id = ProviderId.parse(
            provider if provider is not None else self.config.default_provider
        )
        effective_name = self.config.embedding_override or model_name

        with self._telemetry.traced_operation(
            "resolve_embedding_model", provider=provider_id.value, model=effective_name
        ):
            client = self.registry.get(provider_id)
            if not client.supports_capability(ModelCapabilities.EMBEDDINGS):
                raise UnsupportedCapabilityError(provider_id.value, "embeddings")
            try:
                handle = client.embedding(effective_name)
            except Exception as e:
                raise ProviderInvocationError(provider_id.value, str(effective_name), str(e)) from e

        logger.debug(
            f"Resolved embedding model {effective_name} on {provider_id.value}",
            extra={"provider": provider_id.value, "model": effective_name},
        )
        return handle

    def task_default(self, task: Any) -> TaskDefault:
        """Get the configured (model, provider) pair for a task

        Args:
            task: Task or its string value

        Raises:
            ValueError: If task is not a known task name
        """
        return self.config.tasks[Task(task)]

    def resolve_task(self, task: Any) -> ChatModel:
        """Create a chat model handle from a task's default pair

        Args:
            task: Task or its string value

        Raises:
            ValueError: If task is not a known task name
            UnknownProviderError: If the task's provider is not supported
            ProviderInvocationError: If the provider client rejects the call
        """
        default = self.task_default(task)
        return self.resolve(default.model, default.provider)

    def get_extract_model(self) -> ChatModel:
        return self.resolve_task(Task.EXTRACT)

    def get_extract_retry_model(self) -> ChatModel:
        return self.resolve_task(Task.EXTRACT_RETRY)

    def get_reranker_model(self) -> ChatModel:
        return self.resolve_task(Task.RERANKER)

    def get_reranker_retry_model(self) -> ChatModel:
        return self.resolve_task(Task.RERANKER_RETRY)

    def get_smart_scrape_thinking_model(self) -> ChatModel:
        return self.resolve_task(Task.SMART_SCRAPE_THINKING)

    def get_smart_scrape_tool_model(self) -> ChatModel:
        return self.resolve_task(Task.SMART_SCRAPE_TOOL)


@lru_cache()
def get_resolver() -> ModelResolver:
    """Get the cached process-wide resolver"""
    return ModelResolver.from_settings(get_settings())


def get_model(name: str, provider: Optional[Any] = None) -> ChatModel:
    return get_resolver().resolve(name, provider)


def get_extract_model() -> ChatModel:
    return get_resolver().get_extract_model()


def get_extract_retry_model() -> ChatModel:
    return get_resolver().get_extract_retry_model()


def get_reranker_model() -> ChatModel:
    return get_resolver().get_reranker_model()


def get_reranker_retry_model() -> ChatModel:
    return get_resolver().get_reranker_retry_model()


def get_smart_scrape_thinking_model() -> ChatModel:
    return get_resolver().get_smart_scrape_thinking_model()


def get_smart_scrape_tool_model() -> ChatModel:
    return get_resolver().get_smart_scrape_tool_model()


def get_embedding_model(name: str, provider: Optional[Any] = None) -> EmbeddingModel:
    return get_resolver().resolve_embedding(name, provider)


def get_task_default(task: Any) -> TaskDefault:
    return get_resolver().task_default(task)
