"""
Name: Shared Test Fixtures

Responsibilities:
  - Provide mock collaborators (chunk repository, embedding service)
  - Isolate tests from the process environment and cached singletons
"""

from unittest.mock import Mock

import pytest

from raglit.domain.repositories import ChunkRepository
from raglit.domain.services import EmbeddingService


@pytest.fixture
def mock_repository() -> Mock:
    """R: Create a mock ChunkRepository."""
    mock = Mock(spec=ChunkRepository)
    mock.store_chunk.side_effect = lambda record: f"chunk-{record.chunk_index}"
    mock.search_similar_chunks.return_value = []
    mock.filter_chunks_by_metadata.return_value = []
    return mock


@pytest.fixture
def mock_embedding_service() -> Mock:
    """R: Create a mock EmbeddingService returning 3-dim vectors."""
    mock = Mock(spec=EmbeddingService)
    mock.embed_batch.side_effect = lambda texts: [[0.1, 0.2, 0.3] for _ in texts]
    mock.embed_query.return_value = [0.5, 0.5, 0.5]
    return mock


@pytest.fixture
def base_env(monkeypatch, tmp_path):
    """R: Minimal valid environment for Settings()."""
    for var in (
        "EXTERNAL_API_KEY",
        "EMBEDDING_MODEL",
        "EMBEDDING_API_URL",
        "EMBEDDING_TIMEOUT_SECONDS",
        "EMBEDDING_BATCH_SIZE",
        "STORE_TIMEOUT_SECONDS",
        "DEFAULT_SEARCH_LIMIT",
        "DEFAULT_SEARCH_THRESHOLD",
        "DEFAULT_FILTER_LIMIT",
        "DEFAULT_CHUNK_SIZE",
        "DEFAULT_CHUNK_OVERLAP",
        "METADATA_KEY_STYLE",
        "FAKE_EMBEDDINGS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("EXTERNAL_API_URL", "http://store.test/api")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    # R: Don't let a developer's .env leak into tests
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """R: get_settings() is lru_cached; every test starts from a clean slate."""
    from raglit.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
