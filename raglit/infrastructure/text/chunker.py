"""
Name: Fixed-Size Text Chunker

Responsibilities:
  - Split documents into fixed-size windows of whitespace-delimited tokens
  - Repeat `chunk_overlap` trailing tokens at the start of the next window
  - Stamp each chunk with the caller's metadata plus index/token count

Collaborators:
  - domain.entities: Chunk, MetadataKeys

Constraints:
  - Pure function of (text, chunk_size, chunk_overlap, metadata)
  - Invalid parameters fail at construction (ConfigurationError)
  - chunk() never raises; empty/whitespace text yields no chunks

Algorithm:
  - tokens = text.split()  (runs of whitespace, no empty tokens)
  - window [start, min(start + chunk_size, n)), joined by single spaces
  - stop once a window reaches the last token
  - otherwise start += chunk_size - chunk_overlap (always >= 1)

Performance:
  - O(n) tokens; at most ceil(n / (chunk_size - chunk_overlap)) chunks
"""

from typing import Any, Dict, List, Optional

from ...domain.entities import Chunk, MetadataKeys, SNAKE_CASE_KEYS
from ...exceptions import ConfigurationError


def tokenize(text: Optional[str]) -> List[str]:
    """R: Split on runs of whitespace, dropping empty tokens."""
    return (text or "").split()


def _require_int(name: str, value: Any) -> int:
    # R: bool is an int subclass but never a valid size
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


class FixedChunker:
    """
    R: Chunker producing overlapping windows of `chunk_size` tokens.

    Validates parameters on initialization to fail fast.
    """

    def __init__(
        self,
        chunk_size: int,
        chunk_overlap: int,
        metadata_keys: MetadataKeys = SNAKE_CASE_KEYS,
    ):
        """
        Initialize chunker with validated parameters.

        Args:
            chunk_size: Tokens per chunk (must be > 0)
            chunk_overlap: Tokens shared by consecutive chunks
                (must be >= 0 and < chunk_size)
            metadata_keys: Names of the synthesized metadata keys

        Raises:
            ConfigurationError: If parameters are invalid
        """
        chunk_size = _require_int("chunk_size", chunk_size)
        chunk_overlap = _require_int("chunk_overlap", chunk_overlap)

        if chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be > 0, got {chunk_size}")
        if chunk_overlap < 0:
            raise ConfigurationError(
                f"chunk_overlap must be >= 0, got {chunk_overlap}"
            )
        if chunk_overlap >= chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({chunk_overlap}) must be less than "
                f"chunk_size ({chunk_size}) to ensure progression"
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.metadata_keys = metadata_keys

    @property
    def step(self) -> int:
        """R: Tokens the window advances between chunks."""
        return self.chunk_size - self.chunk_overlap

    def chunk(
        self, text: str, metadata: Optional[Dict[str, Any]] = None
    ) -> List[Chunk]:
        """
        R: Split text into fixed-size token windows.

        Args:
            text: Document text (None is treated as empty)
            metadata: Base metadata merged into every chunk (not mutated)

        Returns:
            Chunks in increasing index order

        Examples:
            >>> [c.content for c in FixedChunker(3, 1).chunk("a b c d e")]
            ['a b c', 'c d e']
        """
        tokens = tokenize(text)
        base = dict(metadata or {})
        chunks: List[Chunk] = []

        start = 0
        while start < len(tokens):
            end = min(start + self.chunk_size, len(tokens))
            chunk_metadata = {
                **base,
                self.metadata_keys.index: len(chunks),
                self.metadata_keys.token_count: end - start,
            }
            chunks.append(
                Chunk(
                    content=" ".join(tokens[start:end]),
                    index=len(chunks),
                    metadata=chunk_metadata,
                )
            )
            if end == len(tokens):
                break
            start += self.step

        return chunks
