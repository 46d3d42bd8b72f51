"""
Name: OpenAI Embedding Service Unit Tests

Responsibilities:
  - Verify request shape (URL, auth header, body)
  - Verify batching and order restoration
  - Verify error/timeout translation into EmbeddingError

Notes:
  - httpx.MockTransport stands in for the OpenAI API (no network)
"""

import json

import httpx
import pytest

from raglit.exceptions import EmbeddingError, EmbeddingTimeoutError
from raglit.infrastructure.services.openai_embedding_service import (
    OpenAIEmbeddingService,
)

URL = "https://api.openai.test/v1/embeddings"


def _service(handler, **kwargs) -> OpenAIEmbeddingService:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenAIEmbeddingService("sk-test", url=URL, client=client, **kwargs)


def _embedding_response(inputs):
    if isinstance(inputs, str):
        inputs = [inputs]
    data = [
        {"object": "embedding", "index": i, "embedding": [float(len(text)), float(i)]}
        for i, text in enumerate(inputs)
    ]
    return httpx.Response(200, json={"object": "list", "data": data})


@pytest.mark.unit
class TestOpenAIEmbeddingService:
    def test_requires_api_key(self):
        with pytest.raises(EmbeddingError, match="OPENAI_API_KEY"):
            OpenAIEmbeddingService("")

    def test_embed_query_request_shape(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return _embedding_response(seen["body"]["input"])

        service = _service(handler, model="text-embedding-3-small")

        vector = service.embed_query("hello")

        assert vector == [5.0, 0.0]
        assert seen["url"] == URL
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == {"input": "hello", "model": "text-embedding-3-small"}

    def test_embed_batch_splits_and_keeps_order(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            inputs = json.loads(request.content)["input"]
            calls.append(inputs)
            response = _embedding_response(inputs)
            # R: Return items out of order; the service must sort by index
            body = response.json()
            body["data"].reverse()
            return httpx.Response(200, json=body)

        service = _service(handler, batch_size=2)

        vectors = service.embed_batch(["a", "bb", "ccc"])

        assert calls == [["a", "bb"], ["ccc"]]
        assert vectors == [[1.0, 0.0], [2.0, 1.0], [3.0, 0.0]]

    def test_embed_batch_empty(self):
        def handler(request):  # pragma: no cover - must not be called
            raise AssertionError("no request expected")

        assert _service(handler).embed_batch([]) == []

    def test_api_error_uses_provider_message(self):
        def handler(request):
            return httpx.Response(401, json={"error": {"message": "Incorrect API key"}})

        with pytest.raises(EmbeddingError, match=r"OpenAI API error \(401\): Incorrect API key"):
            _service(handler).embed_query("x")

    def test_api_error_with_plain_text_body(self):
        def handler(request):
            return httpx.Response(502, text="bad gateway")

        with pytest.raises(EmbeddingError, match=r"\(502\): bad gateway"):
            _service(handler).embed_query("x")

    def test_invalid_response_structure(self):
        def handler(request):
            return httpx.Response(200, json={"data": []})

        with pytest.raises(EmbeddingError, match="Invalid response structure"):
            _service(handler).embed_query("x")

    def test_missing_embedding_field(self):
        def handler(request):
            return httpx.Response(200, json={"data": [{"index": 0}]})

        with pytest.raises(EmbeddingError, match="Invalid response structure"):
            _service(handler).embed_query("x")

    def test_timeout_raises_timeout_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(EmbeddingTimeoutError, match="timed out after 10000ms"):
            _service(handler).embed_query("x")

    def test_timeout_error_is_embedding_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(EmbeddingError):
            _service(handler, timeout_s=2.5).embed_query("x")

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(EmbeddingError, match="Failed to generate embeddings"):
            _service(handler).embed_query("x")
