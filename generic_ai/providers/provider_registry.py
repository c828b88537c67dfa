"""Registry of provider clients, one per ProviderId"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Type

from ..core.config import ProviderSettings
from ..core.exceptions import ProviderConstructionError, UnknownProviderError
from ..core.logger import CentralizedLogger
from .base_provider import BaseModelProvider, ProviderId


class ModelProviderRegistry:
    """Holds one constructed client (or construction failure) per ProviderId

    The class-level table maps each ProviderId to the class that builds its
    client; ``build()`` turns that table into an immutable registry instance.
    Clients are built eagerly and in isolation: a provider that fails to
    construct is kept as a failure and reported when it is requested.
    """

    _providers: Dict[ProviderId, Type[BaseModelProvider]] = {}
    _logger = CentralizedLogger("ModelProviderRegistry")

    @classmethod
    def register(cls, provider_id: ProviderId, provider_class: Type[BaseModelProvider]):
        """Register the class that constructs a provider's client

        Args:
            provider_id: Provider the class implements
            provider_class: BaseModelProvider subclass
        """
        if not issubclass(provider_class, BaseModelProvider):
            raise ValueError(f"{provider_class} must inherit from BaseModelProvider")

        provider_id = ProviderId.parse(provider_id)
        cls._providers[provider_id] = provider_class
        cls._logger.debug(f"Registered model provider: {provider_id.value}")

    @classmethod
    def get_registered_providers(cls) -> Dict[ProviderId, Type[BaseModelProvider]]:
        return dict(cls._providers)

    @classmethod
    def clear(cls):
        """Clear all registered provider classes (mainly for testing)"""
        cls._providers.clear()

    @classmethod
    def build(
        cls,
        settings: ProviderSettings,
        constructors: Optional[Mapping[ProviderId, Any]] = None,
        strict: bool = False,
    ) -> "ModelProviderRegistry":
        """Construct a client for every ProviderId

        Args:
            settings: Provider credentials and endpoints
            constructors: ProviderId -> callable(settings) table; defaults to
                the registered provider classes
            strict: Raise on the first construction failure

        Returns:
            Registry with exactly one entry per ProviderId

        Raises:
            ProviderConstructionError: Only when strict is set
        """
        if constructors is None:
            from .provider_decorators import initialize_providers
            initialize_providers()
            constructors = cls._providers

        clients: Dict[ProviderId, BaseModelProvider] = {}
        failures: Dict[ProviderId, ProviderConstructionError] = {}

        for provider_id in ProviderId:
            constructor = constructors.get(provider_id)
            if constructor is None:
                error = ProviderConstructionError(
                    provider_id.value, "no provider implementation registered"
                )
            else:
                try:
                    clients[provider_id] = constructor(settings)
                    cls._logger.debug(f"Constructed provider client: {provider_id.value}")
                    continue
                except ProviderConstructionError as e:
                    error = e
                except Exception as e:
                    error = ProviderConstructionError(provider_id.value, str(e))
                    error.__cause__ = e

            if strict:
                raise error
            failures[provider_id] = error
            cls._logger.warning(
                f"Provider '{provider_id.value}' unavailable: {error.reason}",
                extra={"provider": provider_id.value},
            )

        return cls(clients, failures)

    def __init__(
        self,
        clients: Mapping[ProviderId, BaseModelProvider],
        failures: Optional[Mapping[ProviderId, ProviderConstructionError]] = None,
    ):
        self._clients = dict(clients)
        self._failures = dict(failures or {})

    def get(self, provider: Any) -> BaseModelProvider:
        """Look up a provider client

        Args:
            provider: ProviderId or its string value

        Raises:
            UnknownProviderError: If provider is not a supported provider
            ProviderConstructionError: If the client failed to construct
        """
        provider_id = ProviderId.parse(provider)
        if provider_id in self._clients:
            return self._clients[provider_id]
        if provider_id in self._failures:
            failure = self._failures[provider_id]
            raise ProviderConstructionError(provider_id.value, failure.reason) from failure
        raise UnknownProviderError(provider_id.value, [p.value for p in self])

    def available(self) -> List[ProviderId]:
        """Providers whose clients constructed successfully"""
        return [p for p in ProviderId if p in self._clients]

    def failures(self) -> Dict[ProviderId, ProviderConstructionError]:
        return dict(self._failures)

    def __contains__(self, provider: object) -> bool:
        return provider in self._clients or provider in self._failures

    def __iter__(self) -> Iterator[ProviderId]:
        return (p for p in ProviderId if p in self)

    def __len__(self) -> int:
        return len(self._clients) + len(self._failures)
