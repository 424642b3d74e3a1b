"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- TRIP_LLM_PROVIDER=anthropic
- TRIP_LLM_API_KEY=...
- TRIP_LLM_REQUEST_TIMEOUT_SECONDS=20
- TRIP_PIPELINE_DEADLINE_SECONDS=60
- TRIP_LOG_STRUCTURED=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseSettings):
    """Language model provider configuration.

    Environment variables prefixed with TRIP_LLM_.
    """

    model_config = SettingsConfigDict(env_prefix="TRIP_LLM_")

    provider: Literal["openai", "anthropic", "offline"] = "openai"
    model: str = "gpt-4o-mini"
    api_key: str = ""
    base_url: Optional[str] = None  # OpenAI-compatible endpoints
    temperature: float = 0.7
    max_tokens: int = 2000
    request_timeout_seconds: float = Field(default=30.0, gt=0)


class PipelineConfig(BaseSettings):
    """Planning pipeline configuration.

    Environment variables prefixed with TRIP_PIPELINE_.
    """

    model_config = SettingsConfigDict(env_prefix="TRIP_PIPELINE_")

    deadline_seconds: float = Field(default=90.0, gt=0)
    expose_extended_recommendations: bool = False


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TRIP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TRIP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.llm.provider)
        print(config.pipeline.deadline_seconds)

    Environment variables prefixed with TRIP_.
    """

    model_config = SettingsConfigDict(env_prefix="TRIP_")

    llm: LLMConfig = Field(default_factory=LLMConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
