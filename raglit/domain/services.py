"""
Name: Domain Service Interfaces

Responsibilities:
  - Define contracts for external services (embeddings) and chunking
  - Enable dependency inversion (use cases don't depend on any provider)

Collaborators:
  - Implementations in infrastructure.services and infrastructure.text

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Provider-agnostic (could be OpenAI, a local model, or a fake)

Notes:
  - Using typing.Protocol for structural subtyping
  - Enables testing with mock services
"""

from typing import Any, Dict, List, Optional, Protocol

from .entities import Chunk


class EmbeddingService(Protocol):
    """
    R: Interface for text embedding generation.

    Implementations must provide:
      - Batch embedding for document chunks
      - Single embedding for queries
      - Consistent dimensionality across embed_batch and embed_query
    """

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """
        R: Generate embeddings for multiple texts, in input order.

        Raises:
            EmbeddingError: If the provider fails or times out
        """
        ...

    def embed_query(self, query: str) -> List[float]:
        """
        R: Generate embedding for a single search query.

        Raises:
            EmbeddingError: If the provider fails or times out
        """
        ...


class TextChunkerService(Protocol):
    """
    R: Interface for text chunking.

    Implementations must provide:
      - Deterministic output for same input
      - Never raise for any string input
    """

    def chunk(
        self, text: str, metadata: Optional[Dict[str, Any]] = None
    ) -> List[Chunk]:
        ...
