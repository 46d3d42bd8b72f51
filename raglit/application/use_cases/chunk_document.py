"""
Name: Chunk Document Use Case

Responsibilities:
  - Orchestrate document ingestion: chunk → embed → store
  - Build a FixedChunker for the requested size/overlap
  - Generate embeddings for all chunks in batch
  - Store every chunk with its chunking parameters
  - Return the chunk count and the ids assigned by the store

Collaborators:
  - domain/repositories.ChunkRepository: persistence
  - domain/services.EmbeddingService: batch embedding
  - chunker_factory: builds a TextChunkerService (FixedChunker) per call

Constraints:
  - Invalid size/overlap raise ConfigurationError before any I/O
  - Must NOT call external APIs if chunking returns no chunks
  - Chunks are stored in index order; missing ids are skipped
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ...domain.entities import FIXED_SIZE_STRATEGY, ChunkRecord
from ...domain.repositories import ChunkRepository
from ...domain.services import EmbeddingService, TextChunkerService
from ...logger import logger

ChunkerFactory = Callable[[int, int], TextChunkerService]


@dataclass
class ChunkDocumentInput:
    content: str
    document_id: str
    chunk_size: int = 500
    chunk_overlap: int = 50
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class ChunkDocumentOutput:
    document_id: str
    chunks: int
    chunk_ids: List[str] = field(default_factory=list)


class ChunkDocumentUseCase:
    """
    R: Use case for chunking, embedding and storing one document.
    """

    def __init__(
        self,
        repository: ChunkRepository,
        embedding_service: EmbeddingService,
        chunker_factory: ChunkerFactory,
    ):
        self.repository = repository
        self.embedding_service = embedding_service
        self.chunker_factory = chunker_factory

    def execute(self, input_data: ChunkDocumentInput) -> ChunkDocumentOutput:
        chunker = self.chunker_factory(
            input_data.chunk_size, input_data.chunk_overlap
        )
        chunks = chunker.chunk(input_data.content, input_data.metadata or {})

        if not chunks:
            logger.info(
                "No chunks produced",
                extra={"document_id": input_data.document_id},
            )
            return ChunkDocumentOutput(document_id=input_data.document_id, chunks=0)

        embeddings = self.embedding_service.embed_batch([c.content for c in chunks])

        chunk_ids: List[str] = []
        for chunk, embedding in zip(chunks, embeddings):
            chunk_id = self.repository.store_chunk(
                ChunkRecord(
                    content=chunk.content,
                    embedding=embedding,
                    document_id=input_data.document_id,
                    chunk_index=chunk.index,
                    chunk_size=input_data.chunk_size,
                    chunk_overlap=input_data.chunk_overlap,
                    chunk_strategy=FIXED_SIZE_STRATEGY,
                    metadata=chunk.metadata,
                )
            )
            if chunk_id:
                chunk_ids.append(chunk_id)

        logger.info(
            "Document chunked and stored",
            extra={
                "document_id": input_data.document_id,
                "chunks": len(chunks),
                "stored": len(chunk_ids),
            },
        )
        return ChunkDocumentOutput(
            document_id=input_data.document_id,
            chunks=len(chunks),
            chunk_ids=chunk_ids,
        )
