"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults for tool parameters (chunking, search, filter)

Collaborators:
  - server.py: validates settings before serving
  - container.py: reads settings to build clients and use cases
  - tools.py: reads defaults for tool arguments

Constraints:
  - No business logic, pure configuration
  - EXTERNAL_API_URL is required
  - OPENAI_API_KEY is required unless FAKE_EMBEDDINGS=1

Notes:
  - Singleton via lru_cache
  - Loaded from env vars and an optional .env file
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        external_api_url: Base URL of the chunk store REST API
        external_api_key: Optional bearer token for the chunk store
        openai_api_key: API key for the embedding provider
        embedding_model: Embedding model name (default: text-embedding-3-small)
        embedding_api_url: Embeddings endpoint URL
        embedding_timeout_seconds: Per-request embedding timeout (default: 10s)
        embedding_batch_size: Max texts per embedding request (default: 100)
        store_timeout_seconds: Per-request chunk store timeout (default: 30s)
        default_chunk_size: Tokens per chunk when not given (default: 500)
        default_chunk_overlap: Overlap tokens when not given (default: 50)
        default_search_limit: search_chunks result limit (default: 5)
        default_search_threshold: search_chunks similarity threshold (default: 0.7)
        default_filter_limit: filter_metadata result limit (default: 10)
        metadata_key_style: "snake" (chunk_index/word_count) or "camel"
        fake_embeddings: Use deterministic local embeddings (no API calls)
        log_level: Logging level name (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    # Required (no defaults)
    external_api_url: str
    external_api_key: str = ""

    # Embedding provider
    openai_api_key: str = ""
    embedding_model: str = "text-embedding-3-small"
    embedding_api_url: str = "https://api.openai.com/v1/embeddings"
    embedding_timeout_seconds: float = 10.0
    embedding_batch_size: int = 100

    # Chunk store
    store_timeout_seconds: float = 30.0

    # Tool defaults
    default_chunk_size: int = 500
    default_chunk_overlap: int = 50
    default_search_limit: int = 5
    default_search_threshold: float = 0.7
    default_filter_limit: int = 10

    # Chunk metadata naming
    metadata_key_style: Literal["snake", "camel"] = "snake"

    # Testing/CI
    fake_embeddings: bool = False

    # Observability
    log_level: str = "INFO"

    @field_validator("external_api_url")
    @classmethod
    def external_api_url_must_be_set(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("EXTERNAL_API_URL must not be empty")
        return v

    @field_validator(
        "default_chunk_size",
        "default_search_limit",
        "default_filter_limit",
        "embedding_batch_size",
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("embedding_timeout_seconds", "store_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be greater than 0")
        return v

    @field_validator("default_chunk_overlap")
    @classmethod
    def chunk_overlap_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("default_chunk_overlap must be >= 0")
        return v

    @field_validator("default_search_threshold")
    @classmethod
    def threshold_in_unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("default_search_threshold must be between 0 and 1")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    @model_validator(mode="after")
    def validate_embedding_requirements(self):
        if not self.openai_api_key and not self.fake_embeddings:
            raise ValueError("OPENAI_API_KEY is required unless FAKE_EMBEDDINGS=1")
        return self

    def validate_chunk_params(self) -> None:
        """
        Cross-field validation: overlap must be less than chunk_size.
        Called explicitly after instantiation.
        """
        if self.default_chunk_overlap >= self.default_chunk_size:
            raise ConfigurationError(
                f"default_chunk_overlap ({self.default_chunk_overlap}) must be "
                f"less than default_chunk_size ({self.default_chunk_size})"
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
        ConfigurationError: If default chunk parameters are inconsistent
    """
    settings = Settings()
    settings.validate_chunk_params()
    return settings
