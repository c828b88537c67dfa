"""Anthropic provider implementation"""

from typing import Any, Dict, Optional

from anthropic import Anthropic

from ..base_provider import BaseModelProvider, ChatModel, ProviderId
from ..provider_decorators import register_provider
from ...core.config import ProviderSettings
from ...core.exceptions import ProviderConstructionError


class AnthropicChatModel(ChatModel):
    """Claude model through the Messages API"""

    # Messages API requires max_tokens
    DEFAULT_MAX_TOKENS = 4096

    def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        params: Dict[str, Any] = {
            "model": self.model_id,
            "max_tokens": max_tokens or self.DEFAULT_MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            params["system"] = system
        if temperature is not None:
            params["temperature"] = temperature

        response = self.client.messages.create(**params)
        return "".join(block.text for block in response.content if block.type == "text")


@register_provider(ProviderId.ANTHROPIC)
class AnthropicProvider(BaseModelProvider):
    """Claude models; Anthropic has no embeddings endpoint"""

    def create_client(self, settings: ProviderSettings) -> Anthropic:
        if not settings.anthropic_api_key:
            raise ProviderConstructionError(self.provider_id.value, "ANTHROPIC_API_KEY is not set")
        return Anthropic(api_key=settings.anthropic_api_key)

    def language_model(self, model_id: str) -> ChatModel:
        return AnthropicChatModel(self.provider_id, model_id, self.client)
