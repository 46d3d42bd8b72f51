"""RagLit: MCP tools for fixed-size chunking, embedding and retrieval."""

__version__ = "1.0.0"
