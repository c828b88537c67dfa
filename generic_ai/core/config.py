"""Central configuration management for generic-ai"""

import os
from typing import Optional
from pathlib import Path
import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class ProviderSettings(BaseSettings):
    """Credentials and endpoints used to construct provider clients"""

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    ollama_base_url: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    google_generative_ai_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    fireworks_api_key: Optional[str] = None
    deepinfra_api_key: Optional[str] = None

    # Vertex AI
    vertex_project: str = "firecrawl"
    vertex_location: str = "global"
    vertex_base_url: Optional[str] = None
    vertex_credentials: Optional[str] = Field(
        default=None, description="Base64 encoded service account JSON"
    )
    vertex_key_file: str = "./gke-key.json"


class ModelDefaultsSettings(BaseSettings):
    """Default model/provider selection, overrides and per-task defaults"""

    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore", protected_namespaces=()
    )

    default_provider: Optional[str] = None
    ollama_base_url: Optional[str] = None

    # Global overrides
    model_name: Optional[str] = None
    model_embedding_name: Optional[str] = None

    # Extraction
    extract_model: Optional[str] = None
    extract_provider: Optional[str] = None
    extract_retry_model: Optional[str] = None
    extract_retry_provider: Optional[str] = None

    # Reranking (falls back to extraction defaults)
    reranker_model: Optional[str] = None
    reranker_provider: Optional[str] = None
    reranker_retry_model: Optional[str] = None
    reranker_retry_provider: Optional[str] = None

    # Smart scrape thinking/tool models
    smart_scrape_thinking_model: Optional[str] = None
    smart_scrape_thinking_provider: Optional[str] = None
    smart_scrape_tool_model: Optional[str] = None
    smart_scrape_tool_provider: Optional[str] = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    app_name: str = "generic-ai"
    environment: str = "development"
    # Log level is read directly in logger.py, accepted here so it validates
    generic_ai_log_level: Optional[str] = "INFO"
    # Raise on the first provider that fails to construct instead of deferring
    strict_provider_construction: bool = False

    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    models: ModelDefaultsSettings = Field(default_factory=ModelDefaultsSettings)

    @classmethod
    def load_from_yaml(cls, yaml_path: Optional[str] = None) -> "Settings":
        """Load settings from YAML file with environment overrides"""
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
                return cls(**config_data)
        return cls()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    yaml_path = os.getenv("CONFIG_PATH", "./config/settings.yaml")
    return Settings.load_from_yaml(yaml_path)
