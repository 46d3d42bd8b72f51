"""
Name: Custom Exceptions and Error Handling

Responsibilities:
  - Define domain-specific exceptions
  - Carry a stable error_code for tool error payloads
  - Generate unique error IDs for log correlation

Collaborators:
  - tool_results.py: converts these exceptions into tool error payloads
  - All modules that can raise errors

Constraints:
  - Every error exposes: error_code, message, error_id
  - ConfigurationError is also a ValueError (invalid arguments)

Notes:
  - error_id is UUID for log correlation
  - Use these exceptions instead of generic Exception
"""

from uuid import uuid4


class RagLitError(Exception):
    """Base exception for the RagLit server."""

    error_code: str = "RAGLIT_ERROR"

    def __init__(self, message: str, error_id: str | None = None):
        self.message = message
        self.error_id = error_id or str(uuid4())
        super().__init__(message)


class ConfigurationError(RagLitError, ValueError):
    """Invalid chunker or settings values (raised at construction time)."""

    error_code: str = "CONFIGURATION_ERROR"


class EmbeddingError(RagLitError):
    """Embedding generation error (provider API)."""

    error_code: str = "EMBEDDING_ERROR"


class EmbeddingTimeoutError(EmbeddingError):
    """Embedding request exceeded the configured timeout."""

    error_code: str = "EMBEDDING_TIMEOUT"


class ChunkStoreError(RagLitError):
    """Chunk store (REST backend) request failed."""

    error_code: str = "CHUNK_STORE_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_id: str | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, error_id=error_id)
