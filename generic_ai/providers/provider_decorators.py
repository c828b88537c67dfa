"""Decorator-based registration for provider clients"""

import importlib
from pathlib import Path
from typing import Any, Callable, Dict, List, Type

from ..core.logger import CentralizedLogger
from .base_provider import BaseModelProvider, ProviderId
from .provider_registry import ModelProviderRegistry


logger = CentralizedLogger("ProviderDecorators")

# Providers decorated at import time, before registration
_decorated_providers: Dict[ProviderId, Type[BaseModelProvider]] = {}


def register_provider(
    provider_id: Any
) -> Callable[[Type[BaseModelProvider]], Type[BaseModelProvider]]:
    """Decorator to register a provider client class

    Args:
        provider_id: ProviderId (or its string value) the class implements

    Returns:
        Decorator function

    Raises:
        UnknownProviderError: If provider_id is not a supported provider
    """
    provider_id = ProviderId.parse(provider_id)

    def decorator(cls: Type[BaseModelProvider]) -> Type[BaseModelProvider]:
        _decorated_providers[provider_id] = cls
        cls.provider_id = provider_id
        return cls

    return decorator


def auto_register_decorated_providers() -> int:
    """Register all decorated providers with ModelProviderRegistry

    Returns:
        Number of providers registered
    """
    for provider_id, provider_class in _decorated_providers.items():
        ModelProviderRegistry.register(provider_id, provider_class)
    return len(_decorated_providers)


def scan_and_import_providers(
    package_path: str = "generic_ai.providers.implementations"
) -> List[str]:
    """Import every *_providers.py module so its decorators run

    Args:
        package_path: Python package path containing provider modules

    Returns:
        List of imported module names
    """
    imported_modules = []
    base_path = Path(__file__).parent / "implementations"

    if not base_path.exists():
        return imported_modules

    for file_path in sorted(base_path.glob("*_providers.py")):
        full_module_path = f"{package_path}.{file_path.stem}"
        try:
            importlib.import_module(full_module_path)
            imported_modules.append(full_module_path)
        except ImportError as e:
            # Missing SDK: its providers stay unregistered and fail at resolution
            logger.warning(f"Could not import provider module {full_module_path}: {e}")

    return imported_modules


def initialize_providers() -> Dict[str, Any]:
    """Scan provider modules and register everything they decorate

    Returns:
        Dictionary with initialization statistics
    """
    imported_modules = scan_and_import_providers()
    registered_count = auto_register_decorated_providers()

    return {
        "imported_modules": imported_modules,
        "imported_module_count": len(imported_modules),
        "registered_providers": registered_count,
        "total_providers": len(ModelProviderRegistry.get_registered_providers()),
    }
