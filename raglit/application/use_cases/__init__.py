"""Application use cases"""

from .chunk_document import (
    ChunkDocumentInput,
    ChunkDocumentOutput,
    ChunkDocumentUseCase,
)
from .filter_metadata import (
    FilterMetadataInput,
    FilterMetadataOutput,
    FilterMetadataUseCase,
)
from .search_chunks import (
    SearchChunksInput,
    SearchChunksOutput,
    SearchChunksUseCase,
)

__all__ = [
    "ChunkDocumentInput",
    "ChunkDocumentOutput",
    "ChunkDocumentUseCase",
    "FilterMetadataInput",
    "FilterMetadataOutput",
    "FilterMetadataUseCase",
    "SearchChunksInput",
    "SearchChunksOutput",
    "SearchChunksUseCase",
]
