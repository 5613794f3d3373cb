"""Search request and response payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class SearchRequest(BaseModel):
    # scope and limit are checked by SearchService so a missing value reports as invalid input
    query: Optional[str] = None
    agency_id: Optional[int] = None
    creator_id: Optional[int] = None
    category: Optional[str] = None
    limit: Optional[int] = None

    @field_validator("category")
    @classmethod
    def blank_category_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value


class SearchResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    price: float
    category: str
    media_type: Optional[str] = None
    distance: float


class SearchResponse(BaseModel):
    results: list[SearchResult]
