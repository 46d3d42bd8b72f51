"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define the contract of the chunk store
  - Provide abstraction over storage technology
  - Enable dependency inversion (use cases don't depend on the REST backend)

Collaborators:
  - domain.entities: ChunkRecord
  - Implementations in infrastructure.repositories

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Storage-agnostic (REST backend, PostgREST, in-memory for tests)

Notes:
  - Metadata filters are passed through unchanged; the store decides the
    matching semantics (exact JSON containment for the REST backend)
"""

from typing import Any, Dict, List, Optional, Protocol

from .entities import ChunkRecord


class ChunkRepository(Protocol):
    """
    R: Interface for chunk persistence, similarity search and filtering.
    """

    def store_chunk(self, record: ChunkRecord) -> Optional[str]:
        """
        R: Persist one chunk.

        Returns:
            Identifier assigned by the store, or None if it returned none
        """
        ...

    def search_similar_chunks(
        self,
        embedding: List[float],
        limit: int = 5,
        metadata_filter: Optional[Dict[str, Any]] = None,
        threshold: float = 0.7,
    ) -> List[Dict[str, Any]]:
        """
        R: Search chunks similar to an embedding vector.

        Args:
            embedding: Query vector
            limit: Maximum number of results
            metadata_filter: Optional metadata constraint
            threshold: Minimum similarity (0 to 1)

        Returns:
            Matching chunk records as returned by the store
        """
        ...

    def filter_chunks_by_metadata(
        self,
        metadata_filter: Dict[str, Any],
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """
        R: Return chunks whose metadata contains all given key-value pairs.
        """
        ...
