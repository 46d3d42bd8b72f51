"""Infrastructure services"""

from .fake_embedding_service import FakeEmbeddingService
from .openai_embedding_service import OpenAIEmbeddingService

__all__ = [
    "FakeEmbeddingService",
    "OpenAIEmbeddingService",
]
