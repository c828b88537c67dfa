"""Error taxonomy for model resolution

Nothing in this package catches these: they surface to the caller as-is.
"""

from typing import Optional


class GenericAIError(Exception):
    """Base class for all resolution errors"""


class UnknownProviderError(GenericAIError, ValueError):
    """Requested provider identifier is not a supported provider"""

    def __init__(self, provider: object, available: Optional[list] = None):
        self.provider = provider
        message = f"Provider '{provider}' not found."
        if available:
            message += f" Available providers: {', '.join(available)}"
        super().__init__(message)


class ProviderConstructionError(GenericAIError):
    """Provider client could not be built from its configuration"""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"Provider '{provider}' is not configured: {reason}")


class ProviderInvocationError(GenericAIError):
    """Provider client rejected the model name or the call"""

    def __init__(self, provider: str, model_name: str, reason: str):
        self.provider = provider
        self.model_name = model_name
        super().__init__(
            f"Provider '{provider}' failed to create model '{model_name}': {reason}"
        )


class UnsupportedCapabilityError(GenericAIError):
    """Provider client lacks the requested capability (e.g. embeddings)"""

    def __init__(self, provider: str, capability: str):
        self.provider = provider
        self.capability = capability
        super().__init__(f"Provider '{provider}' does not support {capability}")
