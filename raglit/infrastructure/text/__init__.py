"""Text utilities (chunking)."""

from .chunker import FixedChunker, tokenize

__all__ = [
    "FixedChunker",
    "tokenize",
]
