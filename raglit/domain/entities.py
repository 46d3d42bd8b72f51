"""
Name: Domain Entities

Responsibilities:
  - Define the chunk produced by the chunker (Chunk)
  - Define the record handed to the chunk store (ChunkRecord)
  - Define the metadata key naming convention (MetadataKeys)

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Chunk is immutable; it has no identity until the store persists it
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# R: Strategy name persisted with every chunk produced by FixedChunker
FIXED_SIZE_STRATEGY = "fixed-size"


@dataclass(frozen=True)
class MetadataKeys:
    """
    R: Names of the two metadata keys synthesized for every chunk.

    Attributes:
        index: Key holding the chunk's sequence position
        token_count: Key holding the number of tokens in the chunk
    """

    index: str
    token_count: str


SNAKE_CASE_KEYS = MetadataKeys(index="chunk_index", token_count="word_count")
CAMEL_CASE_KEYS = MetadataKeys(index="chunkIndex", token_count="wordCount")

METADATA_KEY_STYLES: Dict[str, MetadataKeys] = {
    "snake": SNAKE_CASE_KEYS,
    "camel": CAMEL_CASE_KEYS,
}


@dataclass(frozen=True)
class Chunk:
    """
    R: One window of a source document's tokens.

    Attributes:
        content: Space-joined tokens of this window, in original order
        index: Position among the chunks of one text (0-based)
        metadata: Caller metadata plus the synthesized index/token-count keys
    """

    content: str
    index: int
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ChunkRecord:
    """
    R: Everything the chunk store needs to persist one chunk.

    Attributes:
        content: Chunk text
        embedding: Vector for content (provider dimensionality)
        document_id: Caller-assigned identifier of the source document
        chunk_index: Position of the chunk in the document (0-based)
        chunk_size: chunk_size the document was split with
        chunk_overlap: chunk_overlap the document was split with
        chunk_strategy: Chunking strategy name (e.g. "fixed-size")
        metadata: Chunk metadata
    """

    content: str
    embedding: List[float]
    document_id: str
    chunk_index: int
    chunk_size: int
    chunk_overlap: int
    chunk_strategy: str = FIXED_SIZE_STRATEGY
    metadata: Optional[Dict[str, Any]] = None
