"""Infrastructure repositories"""

from .rest_chunk_repository import RestApiChunkRepository

__all__ = ["RestApiChunkRepository"]
