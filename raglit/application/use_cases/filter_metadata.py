"""
Name: Filter Metadata Use Case

Responsibilities:
  - Return stored chunks whose metadata contains the given key-value pairs
  - Reject empty filters (would match everything)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ...domain.repositories import ChunkRepository


@dataclass
class FilterMetadataInput:
    metadata_filter: Dict[str, Any]
    limit: int = 10


@dataclass
class FilterMetadataOutput:
    results: List[Dict[str, Any]] = field(default_factory=list)


class FilterMetadataUseCase:
    """
    R: Use case for exact metadata filtering.
    """

    def __init__(self, repository: ChunkRepository):
        self.repository = repository

    def execute(self, input_data: FilterMetadataInput) -> FilterMetadataOutput:
        if not input_data.metadata_filter:
            raise ValueError("At least one metadata filter key-value pair is required")
        results = self.repository.filter_chunks_by_metadata(
            input_data.metadata_filter, limit=input_data.limit
        )
        return FilterMetadataOutput(results=results)
