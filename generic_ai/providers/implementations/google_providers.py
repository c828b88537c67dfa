"""Google Gemini (AI Studio) and Vertex AI provider implementations"""

import base64
import binascii
import json
from typing import List, Optional, Sequence

from google import genai
from google.genai import types
from google.oauth2 import service_account

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


VERTEX_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class GeminiChatModel(ChatModel):
    """Gemini model through google-genai generate_content"""

    def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        response = self.client.models.generate_content(
            model=self.model_id,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system,
                max_output_tokens=max_tokens,
                temperature=temperature,
            ),
        )
        return response.text or ""


class GeminiEmbeddingModel(EmbeddingModel):
    """Gemini text embedding model"""

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        response = self.client.models.embed_content(model=self.model_id, contents=list(texts))
        return [list(embedding.values) for embedding in response.embeddings]


@register_provider(ProviderId.GOOGLE)
class GoogleProvider(BaseModelProvider):
    """Gemini API with an AI Studio key"""

    capabilities = ModelCapabilities.TEXT_GENERATION | ModelCapabilities.EMBEDDINGS

    def create_client(self, settings: ProviderSettings) -> genai.Client:
        if not settings.google_generative_ai_api_key:
            raise ProviderConstructionError(
                self.provider_id.value, "GOOGLE_GENERATIVE_AI_API_KEY is not set"
            )
        return genai.Client(api_key=settings.google_generative_ai_api_key)

    def language_model(self, model_id: str) -> ChatModel:
        return GeminiChatModel(self.provider_id, model_id, self.client)

    def text_embedding_model(self, model_id: str) -> EmbeddingModel:
        return GeminiEmbeddingModel(self.provider_id, model_id, self.client)


def vertex_base_url(settings: ProviderSettings) -> str:
    """Publisher endpoint for the configured project and location"""
    if settings.vertex_base_url:
        return settings.vertex_base_url
    return (
        f"https://aiplatform.googleapis.com/v1/projects/{settings.vertex_project}"
        f"/locations/{settings.vertex_location}/publishers/google"
    )


def vertex_http_base_url(base_url: str) -> str:
    """Part of the endpoint that precedes the API version

    google-genai appends /v1/projects/{project}/locations/{location}/... itself,
    so only the scheme, host and any gateway path prefix are kept.
    """
    prefix, marker, _ = base_url.partition("/v1/projects/")
    if not marker:
        prefix = base_url.rstrip("/")
        if prefix.endswith("/v1"):
            prefix = prefix[: -len("/v1")]
    return prefix.rstrip("/") + "/"


def load_vertex_credentials(settings: ProviderSettings) -> service_account.Credentials:
    """Service account credentials from the inline blob, else the key file

    Raises:
        ProviderConstructionError: If VERTEX_CREDENTIALS is not base64 encoded JSON
    """
    if settings.vertex_credentials:
        try:
            info = json.loads(base64.b64decode(settings.vertex_credentials, validate=True))
        except (binascii.Error, ValueError) as e:
            raise ProviderConstructionError(
                ProviderId.VERTEX.value, "VERTEX_CREDENTIALS is not valid base64 encoded JSON"
            ) from e
        return service_account.Credentials.from_service_account_info(info, scopes=VERTEX_SCOPES)

    return service_account.Credentials.from_service_account_file(
        settings.vertex_key_file, scopes=VERTEX_SCOPES
    )


@register_provider(ProviderId.VERTEX)
class VertexProvider(GoogleProvider):
    """Gemini on Vertex AI with service account credentials"""

    def create_client(self, settings: ProviderSettings) -> genai.Client:
        self.project = settings.vertex_project
        self.location = settings.vertex_location
        self.base_url = vertex_base_url(settings)
        credentials = load_vertex_credentials(settings)

        self.http_base_url = vertex_http_base_url(self.base_url)
        return genai.Client(
            vertexai=True,
            project=self.project,
            location=self.location,
            credentials=credentials,
            http_options=types.HttpOptions(
                base_url=self.http_base_url,
                api_version="v1",
            ),
        )
