"""
Name: RagLit Tool Handlers

Responsibilities:
  - Validate tool arguments with Pydantic request models
  - Delegate business logic to application use cases
  - Set the logging context (request_id, tool) for each call
  - Always answer with a ToolResult (never raise)

Collaborators:
  - application.use_cases: ChunkDocument, SearchChunks, FilterMetadata
  - tool_results: success/error envelopes
  - server.py: registers these handlers as MCP tools

Notes:
  - This module stays thin (controllers only)
  - Use cases are injected; the server wires them from the container
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, StrictInt, field_validator

from .application.use_cases import (
    ChunkDocumentInput,
    ChunkDocumentUseCase,
    FilterMetadataInput,
    FilterMetadataUseCase,
    SearchChunksInput,
    SearchChunksUseCase,
)
from .context import clear_context, request_id_var, tool_name_var
from .logger import logger
from .tool_results import ToolResult, error_result, success_result

if TYPE_CHECKING:
    from .config import Settings

CHUNK_DOCUMENT = "chunk_document"
SEARCH_CHUNKS = "search_chunks"
FILTER_METADATA = "filter_metadata"


@dataclass(frozen=True)
class ToolDefaults:
    """R: Values used for optional tool arguments the caller leaves out."""

    chunk_size: int = 500
    chunk_overlap: int = 50
    search_limit: int = 5
    search_threshold: float = 0.7
    filter_limit: int = 10

    @classmethod
    def from_settings(cls, settings: Settings) -> ToolDefaults:
        return cls(
            chunk_size=settings.default_chunk_size,
            chunk_overlap=settings.default_chunk_overlap,
            search_limit=settings.default_search_limit,
            search_threshold=settings.default_search_threshold,
            filter_limit=settings.default_filter_limit,
        )


# =============================================================================
# Request models
# =============================================================================


class ChunkDocumentRequest(BaseModel):
    content: str = Field(..., min_length=1, description="Document text to chunk.")
    document_id: str = Field(..., min_length=1, description="Document identifier.")
    chunk_size: StrictInt = Field(
        500, gt=0, description="Target number of whitespace tokens per chunk."
    )
    chunk_overlap: StrictInt = Field(
        50, ge=0, description="Tokens repeated between consecutive chunks."
    )
    metadata: Optional[Dict[str, Any]] = Field(
        None, description="Metadata attached to every chunk."
    )


class SearchChunksRequest(BaseModel):
    query: str = Field(..., min_length=1, description="The search query string.")
    limit: StrictInt = Field(5, gt=0, description="Maximum number of results.")
    metadata_filter: Optional[Dict[str, Any]] = Field(
        None, description="Optional metadata filter applied to the search."
    )
    threshold: float = Field(
        0.7, ge=0.0, le=1.0, description="Similarity threshold (0 to 1)."
    )


class FilterMetadataRequest(BaseModel):
    metadata_filter: Dict[str, Any] = Field(
        ..., description="Metadata key-value pairs chunks must contain."
    )
    limit: StrictInt = Field(10, gt=0, description="Maximum number of results.")

    @field_validator("metadata_filter")
    @classmethod
    def filter_not_empty(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        if not v:
            raise ValueError("At least one metadata filter key-value pair is required")
        return v


# =============================================================================
# Handlers
# =============================================================================


@contextmanager
def _tool_call(name: str) -> Iterator[None]:
    request_id_var.set(str(uuid4()))
    tool_name_var.set(name)
    try:
        yield
    finally:
        clear_context()


def _with_defaults(arguments: Mapping[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    # R: None means "not provided" for optional arguments
    merged = dict(defaults)
    merged.update({k: v for k, v in arguments.items() if v is not None})
    return merged


def chunk_document(
    arguments: Mapping[str, Any],
    use_case: ChunkDocumentUseCase,
    defaults: ToolDefaults = ToolDefaults(),
) -> ToolResult:
    """R: Split a document into fixed-size chunks, embed and store them."""
    with _tool_call(CHUNK_DOCUMENT):
        document_id = arguments.get("document_id")
        try:
            request = ChunkDocumentRequest.model_validate(
                _with_defaults(
                    arguments,
                    {
                        "chunk_size": defaults.chunk_size,
                        "chunk_overlap": defaults.chunk_overlap,
                    },
                )
            )
            logger.info(
                "chunk_document called",
                extra={
                    "document_id": request.document_id,
                    "chunk_size": request.chunk_size,
                    "chunk_overlap": request.chunk_overlap,
                },
            )
            output = use_case.execute(
                ChunkDocumentInput(
                    content=request.content,
                    document_id=request.document_id,
                    chunk_size=request.chunk_size,
                    chunk_overlap=request.chunk_overlap,
                    metadata=request.metadata,
                )
            )
        except Exception as exc:
            return error_result(exc, documentId=document_id)

        return success_result(
            documentId=output.document_id,
            chunks=output.chunks,
            chunkIds=output.chunk_ids,
        )


def search_chunks(
    arguments: Mapping[str, Any],
    use_case: SearchChunksUseCase,
    defaults: ToolDefaults = ToolDefaults(),
) -> ToolResult:
    """R: Find chunks semantically similar to a query."""
    with _tool_call(SEARCH_CHUNKS):
        try:
            request = SearchChunksRequest.model_validate(
                _with_defaults(
                    arguments,
                    {
                        "limit": defaults.search_limit,
                        "threshold": defaults.search_threshold,
                    },
                )
            )
            logger.info(
                "search_chunks called",
                extra={"limit": request.limit, "threshold": request.threshold},
            )
            output = use_case.execute(
                SearchChunksInput(
                    query=request.query,
                    limit=request.limit,
                    metadata_filter=request.metadata_filter or {},
                    threshold=request.threshold,
                )
            )
        except Exception as exc:
            return error_result(exc)

        return success_result(results=output.results)


def filter_metadata(
    arguments: Mapping[str, Any],
    use_case: FilterMetadataUseCase,
    defaults: ToolDefaults = ToolDefaults(),
) -> ToolResult:
    """R: Return chunks whose metadata matches every given key-value pair."""
    with _tool_call(FILTER_METADATA):
        try:
            request = FilterMetadataRequest.model_validate(
                _with_defaults(arguments, {"limit": defaults.filter_limit})
            )
            logger.info("filter_metadata called", extra={"limit": request.limit})
            output = use_case.execute(
                FilterMetadataInput(
                    metadata_filter=request.metadata_filter,
                    limit=request.limit,
                )
            )
        except Exception as exc:
            return error_result(exc)

        return success_result(results=output.results)
