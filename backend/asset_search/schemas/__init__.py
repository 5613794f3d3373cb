"""Convenience exports for API schemas.

Re-exports the pydantic models used across the backend so consumers can import from one module.
"""

from .catalog import (
    AgencyCreateRequest,
    AgencyResource,
    AssetCreateRequest,
    AssetCreatedResponse,
    AssetResource,
    CreatorCreateRequest,
    CreatorResource,
)
from .search import SearchRequest, SearchResponse, SearchResult

__all__ = [
    "AgencyCreateRequest",
    "AgencyResource",
    "CreatorCreateRequest",
    "CreatorResource",
    "AssetCreateRequest",
    "AssetCreatedResponse",
    "AssetResource",
    "SearchRequest",
    "SearchResult",
    "SearchResponse",
]
