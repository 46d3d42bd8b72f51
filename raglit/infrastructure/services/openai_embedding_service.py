"""
Name: OpenAI Embeddings Service Implementation

Responsibilities:
  - Implement EmbeddingService over the OpenAI /v1/embeddings HTTP API
  - Send batches of chunk texts, restore input order from response indices
  - Bound every request with a timeout and report it as EmbeddingTimeoutError
  - Translate API failures into EmbeddingError with the provider's message

Collaborators:
  - domain.services.EmbeddingService: Interface implementation
  - httpx: HTTP client
  - exceptions: EmbeddingError, EmbeddingTimeoutError

Constraints:
  - No retries: a failed request fails the tool call
  - API key is instance-based (injected by the container)

Notes:
  - The client can be injected (tests use httpx.MockTransport)
"""

from typing import Any, List

import httpx

from ...exceptions import EmbeddingError, EmbeddingTimeoutError
from ...logger import logger

DEFAULT_EMBEDDINGS_URL = "https://api.openai.com/v1/embeddings"
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
DEFAULT_TIMEOUT_SECONDS = 10.0


class OpenAIEmbeddingService:
    """
    R: OpenAI implementation of EmbeddingService.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_EMBEDDING_MODEL,
        url: str = DEFAULT_EMBEDDINGS_URL,
        timeout_s: float = DEFAULT_TIMEOUT_SECONDS,
        batch_size: int = 100,
        client: httpx.Client | None = None,
    ):
        """
        R: Initialize OpenAI Embedding Service.

        Raises:
            EmbeddingError: If API key not configured
        """
        if not api_key:
            logger.error("OpenAIEmbeddingService: OPENAI_API_KEY not configured")
            raise EmbeddingError(
                "OpenAI API key is not configured. "
                "Please set OPENAI_API_KEY in your environment variables."
            )
        if batch_size <= 0:
            raise ValueError(f"batch_size must be > 0, got {batch_size}")

        self.model = model
        self.url = url
        self.timeout_s = timeout_s
        self.batch_size = batch_size
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        self._client = client or httpx.Client(timeout=timeout_s)
        logger.info(
            "OpenAIEmbeddingService initialized", extra={"model": self.model}
        )

    def close(self) -> None:
        self._client.close()

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """
        R: Generate embeddings for multiple texts, preserving input order.

        Raises:
            EmbeddingError: If embedding generation fails
        """
        results: List[List[float]] = []
        for i in range(0, len(texts), self.batch_size):
            batch = texts[i : i + self.batch_size]
            results.extend(self._request(batch, expected=len(batch)))
            logger.info(
                f"OpenAIEmbeddingService: Embedded batch of {len(batch)} texts"
            )
        return results

    def embed_query(self, query: str) -> List[float]:
        """
        R: Generate embedding for a single query.

        Raises:
            EmbeddingError: If embedding generation fails
        """
        return self._request(query, expected=1)[0]

    def _request(self, content: str | List[str], *, expected: int) -> List[List[float]]:
        try:
            response = self._client.post(
                self.url,
                json={"input": content, "model": self.model},
                headers=self._headers,
                timeout=self.timeout_s,
            )
        except httpx.TimeoutException as exc:
            logger.error(
                "OpenAIEmbeddingService: request timed out",
                extra={"timeout_s": self.timeout_s},
            )
            raise EmbeddingTimeoutError(
                f"Embedding request timed out after {int(self.timeout_s * 1000)}ms"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error(f"OpenAIEmbeddingService: request failed: {exc}")
            raise EmbeddingError(f"Failed to generate embeddings: {exc}") from exc

        if response.is_error:
            detail = _error_detail(response)
            logger.error(
                "OpenAIEmbeddingService: API error",
                extra={"status": response.status_code},
            )
            raise EmbeddingError(
                f"OpenAI API error ({response.status_code}): {detail}"
            )

        return _parse_embeddings(response, expected)


def _error_detail(response: httpx.Response) -> str:
    """R: Prefer error.message from the JSON body, then the body, then raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text or "Unknown error"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text


def _parse_embeddings(response: httpx.Response, expected: int) -> List[List[float]]:
    invalid = EmbeddingError("Invalid response structure from OpenAI API.")
    try:
        body: Any = response.json()
    except ValueError as exc:
        raise invalid from exc

    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list) or len(data) != expected:
        raise invalid

    # R: Items carry their input position; don't rely on response order
    items = sorted(
        data,
        key=lambda item: item.get("index", 0) if isinstance(item, dict) else 0,
    )
    embeddings = []
    for item in items:
        embedding = item.get("embedding") if isinstance(item, dict) else None
        if not embedding:
            raise invalid
        embeddings.append(embedding)
    return embeddings
