"""
Name: REST API Chunk Repository

Responsibilities:
  - Implement ChunkRepository against the external chunk store REST API
  - POST /chunks (store), /chunks/search (similarity), /chunks/filter (metadata)
  - Send a bearer token when an API key is configured
  - Translate HTTP/transport failures into ChunkStoreError

Collaborators:
  - domain.repositories.ChunkRepository: Interface implementation
  - domain.entities.ChunkRecord: payload for store_chunk
  - httpx: HTTP client

Constraints:
  - Request bodies use the backend's camelCase field names
  - Empty response bodies are treated as "no payload"
  - No retries (backend resilience is out of scope)

Notes:
  - The client can be injected (tests use httpx.MockTransport)
"""

from typing import Any, Dict, List, Optional

import httpx

from ...domain.entities import ChunkRecord
from ...exceptions import ChunkStoreError
from ...logger import logger

DEFAULT_TIMEOUT_SECONDS = 30.0


def _record_payload(record: ChunkRecord) -> Dict[str, Any]:
    return {
        "content": record.content,
        "embedding": record.embedding,
        "documentId": record.document_id,
        "chunkIndex": record.chunk_index,
        "chunkSize": record.chunk_size,
        "chunkOverlap": record.chunk_overlap,
        "chunkStrategy": record.chunk_strategy,
        "metadata": record.metadata or {},
    }


class RestApiChunkRepository:
    """
    R: ChunkRepository backed by a remote REST API.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ):
        if not base_url:
            raise ValueError("base_url is required for RestApiChunkRepository")
        self.base_url = base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"
        self._timeout = timeout_s
        self._client = client or httpx.Client(timeout=timeout_s)

    def close(self) -> None:
        self._client.close()

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _request(self, method: str, endpoint: str, data: Any = None) -> Any:
        """
        R: Send a JSON request and return the decoded body (None if empty).

        Raises:
            ChunkStoreError: On transport errors, non-2xx status or invalid JSON
        """
        url = self._url(endpoint)
        try:
            response = self._client.request(
                method,
                url,
                json=data,
                headers=self._headers,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            logger.error(
                "RestApiChunkRepository: request failed",
                extra={"method": method, "url": url, "error": str(exc)},
            )
            raise ChunkStoreError(
                f"API request failed targeting {method} {url}: {exc}"
            ) from exc

        if response.is_error:
            logger.error(
                "RestApiChunkRepository: API error",
                extra={"method": method, "url": url, "status": response.status_code},
            )
            raise ChunkStoreError(
                f"API error ({response.status_code}) targeting {method} {url}: "
                f"{response.text}",
                status_code=response.status_code,
            )

        if not response.text:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ChunkStoreError(
                f"Failed to parse JSON response: {response.text}",
                status_code=response.status_code,
            ) from exc

    def store_chunk(self, record: ChunkRecord) -> Optional[str]:
        response = self._request("POST", "/chunks", _record_payload(record))
        if isinstance(response, dict) and response.get("id") is not None:
            return str(response["id"])
        return None

    def search_similar_chunks(
        self,
        embedding: List[float],
        limit: int = 5,
        metadata_filter: Optional[Dict[str, Any]] = None,
        threshold: float = 0.7,
    ) -> List[Dict[str, Any]]:
        response = self._request(
            "POST",
            "/chunks/search",
            {
                "embedding": embedding,
                "limit": limit,
                "metadataFilter": metadata_filter or {},
                "threshold": threshold,
            },
        )
        return _results(response)

    def filter_chunks_by_metadata(
        self,
        metadata_filter: Dict[str, Any],
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        response = self._request(
            "POST",
            "/chunks/filter",
            {"metadataFilter": metadata_filter, "limit": limit},
        )
        return _results(response)


def _results(response: Any) -> List[Dict[str, Any]]:
    if isinstance(response, dict):
        return response.get("results") or []
    return []
