"""
Name: Fake Embeddings Service (Deterministic)

Responsibilities:
  - Provide deterministic embeddings for local runs and CI
  - Match the dimensionality of text-embedding-3-small (1536)
  - Avoid external dependencies (no API calls)
"""

from __future__ import annotations

import hashlib
import struct
from typing import List

from ...logger import logger

EMBEDDING_DIMENSION = 1536


def _hash_to_float(text: str, index: int) -> float:
    digest = hashlib.sha256(f"{text}|{index}".encode("utf-8")).digest()
    value = struct.unpack(">Q", digest[:8])[0]
    return (value / (2**63)) - 1.0


def _build_embedding(text: str, dimension: int) -> List[float]:
    return [_hash_to_float(text, i) for i in range(dimension)]


class FakeEmbeddingService:
    """R: Deterministic EmbeddingService for tests/CI."""

    def __init__(self, dimension: int = EMBEDDING_DIMENSION) -> None:
        self.dimension = dimension
        logger.info("FakeEmbeddingService initialized")

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        return [_build_embedding(text, self.dimension) for text in texts]

    def embed_query(self, query: str) -> List[float]:
        return _build_embedding(query, self.dimension)
