"""
Name: REST Chunk Repository Unit Tests

Responsibilities:
  - Verify endpoints, headers and camelCase request bodies
  - Verify response handling (ids, results, empty bodies)
  - Verify HTTP/transport failures raise ChunkStoreError

Notes:
  - httpx.MockTransport stands in for the chunk store (no network)
"""

import json

import httpx
import pytest

from raglit.domain.entities import ChunkRecord
from raglit.exceptions import ChunkStoreError
from raglit.infrastructure.repositories import RestApiChunkRepository


class Recorder:
    """R: MockTransport handler that records requests and replays a response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def body(self):
        return json.loads(self.requests[-1].content)


def _repo(handler, base_url="http://store.test/api", api_key=None):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return RestApiChunkRepository(base_url, api_key, client=client)


def _record() -> ChunkRecord:
    return ChunkRecord(
        content="a b c",
        embedding=[0.1, 0.2],
        document_id="doc-1",
        chunk_index=0,
        chunk_size=3,
        chunk_overlap=1,
        metadata={"chunk_index": 0, "word_count": 3},
    )


@pytest.mark.unit
class TestStoreChunk:
    def test_posts_record_and_returns_id(self):
        recorder = Recorder(httpx.Response(201, json={"id": "abc-123"}))

        chunk_id = _repo(recorder).store_chunk(_record())

        assert chunk_id == "abc-123"
        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://store.test/api/chunks"
        assert request.headers["Content-Type"] == "application/json"
        assert "Authorization" not in request.headers
        assert recorder.body == {
            "content": "a b c",
            "embedding": [0.1, 0.2],
            "documentId": "doc-1",
            "chunkIndex": 0,
            "chunkSize": 3,
            "chunkOverlap": 1,
            "chunkStrategy": "fixed-size",
            "metadata": {"chunk_index": 0, "word_count": 3},
        }

    def test_numeric_id_is_stringified(self):
        recorder = Recorder(httpx.Response(201, json={"id": 42}))

        assert _repo(recorder).store_chunk(_record()) == "42"

    def test_empty_body_returns_none(self):
        recorder = Recorder(httpx.Response(204))

        assert _repo(recorder).store_chunk(_record()) is None

    def test_bearer_token_sent_when_configured(self):
        recorder = Recorder(httpx.Response(201, json={"id": "x"}))

        _repo(recorder, api_key="secret").store_chunk(_record())

        assert recorder.requests[0].headers["Authorization"] == "Bearer secret"

    def test_trailing_slash_in_base_url(self):
        recorder = Recorder(httpx.Response(201, json={"id": "x"}))

        _repo(recorder, base_url="http://store.test/api/").store_chunk(_record())

        assert str(recorder.requests[0].url) == "http://store.test/api/chunks"


@pytest.mark.unit
class TestSearchAndFilter:
    def test_search_body_and_results(self):
        recorder = Recorder(httpx.Response(200, json={"results": [{"id": "c1"}]}))

        results = _repo(recorder).search_similar_chunks(
            [0.3, 0.4], limit=2, metadata_filter={"lang": "en"}, threshold=0.9
        )

        assert results == [{"id": "c1"}]
        assert str(recorder.requests[0].url) == "http://store.test/api/chunks/search"
        assert recorder.body == {
            "embedding": [0.3, 0.4],
            "limit": 2,
            "metadataFilter": {"lang": "en"},
            "threshold": 0.9,
        }

    def test_search_defaults(self):
        recorder = Recorder(httpx.Response(200, json={"results": []}))

        _repo(recorder).search_similar_chunks([0.1])

        assert recorder.body == {
            "embedding": [0.1],
            "limit": 5,
            "metadataFilter": {},
            "threshold": 0.7,
        }

    def test_search_without_results_key(self):
        recorder = Recorder(httpx.Response(200, json={}))

        assert _repo(recorder).search_similar_chunks([0.1]) == []

    def test_filter_body_and_results(self):
        recorder = Recorder(httpx.Response(200, json={"results": [{"id": "c9"}]}))

        results = _repo(recorder).filter_chunks_by_metadata({"author": "ana"})

        assert results == [{"id": "c9"}]
        assert str(recorder.requests[0].url) == "http://store.test/api/chunks/filter"
        assert recorder.body == {"metadataFilter": {"author": "ana"}, "limit": 10}

    def test_filter_empty_body(self):
        recorder = Recorder(httpx.Response(200))

        assert _repo(recorder).filter_chunks_by_metadata({"a": 1}, limit=3) == []


@pytest.mark.unit
class TestErrors:
    def test_http_error_status(self):
        recorder = Recorder(httpx.Response(500, text="db down"))

        with pytest.raises(ChunkStoreError) as exc_info:
            _repo(recorder).store_chunk(_record())

        assert exc_info.value.status_code == 500
        assert "API error (500) targeting POST http://store.test/api/chunks: db down" in str(
            exc_info.value
        )

    def test_invalid_json(self):
        recorder = Recorder(httpx.Response(200, text="<html>"))

        with pytest.raises(ChunkStoreError, match="Failed to parse JSON response"):
            _repo(recorder).filter_chunks_by_metadata({"a": 1})

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ChunkStoreError, match="API request failed"):
            _repo(handler).search_similar_chunks([0.1])

    def test_base_url_required(self):
        with pytest.raises(ValueError):
            RestApiChunkRepository("")
