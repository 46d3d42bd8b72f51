"""
Domain layer: entities and ports (Protocols) for external collaborators.
"""

from .entities import (
    CAMEL_CASE_KEYS,
    FIXED_SIZE_STRATEGY,
    METADATA_KEY_STYLES,
    SNAKE_CASE_KEYS,
    Chunk,
    ChunkRecord,
    MetadataKeys,
)
from .repositories import ChunkRepository
from .services import EmbeddingService, TextChunkerService

__all__ = [
    "CAMEL_CASE_KEYS",
    "FIXED_SIZE_STRATEGY",
    "METADATA_KEY_STYLES",
    "SNAKE_CASE_KEYS",
    "Chunk",
    "ChunkRecord",
    "ChunkRepository",
    "EmbeddingService",
    "MetadataKeys",
    "TextChunkerService",
]
