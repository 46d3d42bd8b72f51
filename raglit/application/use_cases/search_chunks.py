"""
Name: Search Chunks Use Case

Responsibilities:
  - Orchestrate semantic search (embed query → similarity search)
  - Pass limit, metadata filter and threshold through to the store
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...domain.repositories import ChunkRepository
from ...domain.services import EmbeddingService


@dataclass
class SearchChunksInput:
    query: str
    limit: int = 5
    metadata_filter: Optional[Dict[str, Any]] = None
    threshold: float = 0.7


@dataclass
class SearchChunksOutput:
    results: List[Dict[str, Any]] = field(default_factory=list)


class SearchChunksUseCase:
    """
    R: Use case for semantic search without generation.
    """

    def __init__(
        self,
        repository: ChunkRepository,
        embedding_service: EmbeddingService,
    ):
        self.repository = repository
        self.embedding_service = embedding_service

    def execute(self, input_data: SearchChunksInput) -> SearchChunksOutput:
        query_embedding = self.embedding_service.embed_query(input_data.query)
        results = self.repository.search_similar_chunks(
            embedding=query_embedding,
            limit=input_data.limit,
            metadata_filter=input_data.metadata_filter or {},
            threshold=input_data.threshold,
        )
        return SearchChunksOutput(results=results)
