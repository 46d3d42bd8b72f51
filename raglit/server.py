"""
Name: MCP Server Entry Point

Responsibilities:
  - Build the FastMCP server and register the RagLit tools
  - Validate settings before serving (fail fast, non-zero exit)
  - Serve over stdio until the client disconnects or SIGINT
  - Close HTTP clients on shutdown

Collaborators:
  - mcp.server.fastmcp: MCP SDK (protocol framing, tool schemas)
  - tools.py: tool handlers and request models
  - container.py: use cases and clients
  - config.py / logger.py: settings and structured logging

Constraints:
  - stdout belongs to the protocol; all logs go to stderr
  - Every tool call answers with one text item holding the JSON payload,
    with isError set on failures
  - Tool parameters are untyped here; the request models in tools.py are
    the only argument validator
"""

import sys
from typing import Any, Callable, Mapping

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import ValidationError

from . import __version__, container, tools
from .config import get_settings
from .exceptions import ConfigurationError
from .logger import logger, set_log_level
from .tool_results import ToolResult, error_result

SERVER_NAME = "raglit"
SERVER_INSTRUCTIONS = (
    "RagLit: document chunking, embedding and retrieval for RAG pipelines "
    "backed by a REST chunk store."
)

ToolHandler = Callable[[Mapping[str, Any], Any, tools.ToolDefaults], ToolResult]


def _respond(result: ToolResult) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=result.to_text())],
        isError=result.is_error,
    )


def _dispatch(
    handler: ToolHandler,
    arguments: Mapping[str, Any],
    get_use_case: Callable[[], Any],
) -> CallToolResult:
    # R: Wiring failures must come back as an envelope too, not as an SDK error
    try:
        use_case = get_use_case()
        defaults = container.get_tool_defaults()
    except Exception as exc:
        return _respond(error_result(exc))
    return _respond(handler(arguments, use_case, defaults))


def create_server() -> FastMCP:
    """
    R: Build the MCP server with the three RagLit tools registered.

    Use cases are resolved from the container on each call, so nothing is
    connected until a tool is actually invoked.
    """
    server = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    @server.tool(
        name=tools.CHUNK_DOCUMENT,
        description=(
            "Split a document into fixed-size chunks of whitespace tokens with "
            "overlap, embed each chunk and store it. Requires content and "
            "document_id."
        ),
    )
    def chunk_document(
        content: Any = None,
        document_id: Any = None,
        chunk_size: Any = None,
        chunk_overlap: Any = None,
        metadata: Any = None,
    ) -> CallToolResult:
        return _dispatch(
            tools.chunk_document,
            {
                "content": content,
                "document_id": document_id,
                "chunk_size": chunk_size,
                "chunk_overlap": chunk_overlap,
                "metadata": metadata,
            },
            container.get_chunk_document_use_case,
        )

    @server.tool(
        name=tools.SEARCH_CHUNKS,
        description=(
            "Search stored chunks semantically similar to a query. "
            "Requires query."
        ),
    )
    def search_chunks(
        query: Any = None,
        limit: Any = None,
        metadata_filter: Any = None,
        threshold: Any = None,
    ) -> CallToolResult:
        return _dispatch(
            tools.search_chunks,
            {
                "query": query,
                "limit": limit,
                "metadata_filter": metadata_filter,
                "threshold": threshold,
            },
            container.get_search_chunks_use_case,
        )

    @server.tool(
        name=tools.FILTER_METADATA,
        description=(
            "Return stored chunks whose metadata contains every given "
            "key-value pair. Requires metadata_filter."
        ),
    )
    def filter_metadata(
        metadata_filter: Any = None,
        limit: Any = None,
    ) -> CallToolResult:
        return _dispatch(
            tools.filter_metadata,
            {"metadata_filter": metadata_filter, "limit": limit},
            container.get_filter_metadata_use_case,
        )

    return server


def main() -> int:
    """R: Console entry point (`raglit`)."""
    try:
        settings = get_settings()
    except (ValidationError, ConfigurationError) as exc:
        logger.error("Invalid configuration", extra={"error_message": str(exc)})
        return 1

    set_log_level(settings.log_level)
    logger.info(
        "Initializing RagLit MCP server...", extra={"version": __version__}
    )
    server = create_server()
    try:
        logger.info("RagLit MCP server is running and ready to accept requests.")
        server.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Shutting down RagLit MCP server...")
    finally:
        container.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
