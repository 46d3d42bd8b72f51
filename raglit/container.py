"""
Name: Dependency Injection Container

Responsibilities:
  - Wire up dependencies for the tool server
  - Provide factory functions for use cases
  - Manage singleton instances of the embedding service and chunk store
  - Close HTTP clients on shutdown

Collaborators:
  - infrastructure.repositories: RestApiChunkRepository
  - infrastructure.services: OpenAIEmbeddingService, FakeEmbeddingService
  - infrastructure.text: FixedChunker
  - application.use_cases: ChunkDocument, SearchChunks, FilterMetadata

Constraints:
  - Manual DI (no library like dependency-injector)
  - Singletons via functools.lru_cache
  - Nothing is constructed at import time

Notes:
  - This is the composition root (where dependencies are wired)
  - Use cases don't know about concrete implementations
"""

from functools import lru_cache

from .config import get_settings
from .domain.entities import METADATA_KEY_STYLES, MetadataKeys
from .domain.repositories import ChunkRepository
from .domain.services import EmbeddingService
from .infrastructure.repositories import RestApiChunkRepository
from .infrastructure.services import FakeEmbeddingService, OpenAIEmbeddingService
from .infrastructure.text import FixedChunker
from .application.use_cases import (
    ChunkDocumentUseCase,
    FilterMetadataUseCase,
    SearchChunksUseCase,
)
from .tools import ToolDefaults


@lru_cache
def get_embedding_service() -> EmbeddingService:
    """
    R: Get singleton embedding service.

    Returns:
        FakeEmbeddingService when FAKE_EMBEDDINGS=1, else OpenAIEmbeddingService
    """
    settings = get_settings()
    if settings.fake_embeddings:
        return FakeEmbeddingService()
    return OpenAIEmbeddingService(
        api_key=settings.openai_api_key,
        model=settings.embedding_model,
        url=settings.embedding_api_url,
        timeout_s=settings.embedding_timeout_seconds,
        batch_size=settings.embedding_batch_size,
    )


@lru_cache
def get_chunk_repository() -> ChunkRepository:
    """R: Get singleton chunk store client."""
    settings = get_settings()
    return RestApiChunkRepository(
        settings.external_api_url,
        settings.external_api_key or None,
        timeout_s=settings.store_timeout_seconds,
    )


@lru_cache
def get_metadata_keys() -> MetadataKeys:
    return METADATA_KEY_STYLES[get_settings().metadata_key_style]


@lru_cache
def get_tool_defaults() -> ToolDefaults:
    return ToolDefaults.from_settings(get_settings())


def get_chunk_document_use_case() -> ChunkDocumentUseCase:
    keys = get_metadata_keys()
    return ChunkDocumentUseCase(
        repository=get_chunk_repository(),
        embedding_service=get_embedding_service(),
        chunker_factory=lambda size, overlap: FixedChunker(size, overlap, keys),
    )


def get_search_chunks_use_case() -> SearchChunksUseCase:
    return SearchChunksUseCase(
        repository=get_chunk_repository(),
        embedding_service=get_embedding_service(),
    )


def get_filter_metadata_use_case() -> FilterMetadataUseCase:
    return FilterMetadataUseCase(repository=get_chunk_repository())


def shutdown() -> None:
    """R: Close HTTP clients and drop cached singletons."""
    for factory in (get_embedding_service, get_chunk_repository):
        if factory.cache_info().currsize:
            close = getattr(factory(), "close", None)
            if close is not None:
                close()
        factory.cache_clear()
    get_metadata_keys.cache_clear()
    get_tool_defaults.cache_clear()
