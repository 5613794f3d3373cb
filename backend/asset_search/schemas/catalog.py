"""Pydantic schemas for the agency, creator and asset catalog.

Classes:
    AgencyCreateRequest, AgencyResource: Agency creation payload and response.
    CreatorCreateRequest, CreatorResource: Creator creation payload and response.
    AssetCreateRequest, AssetCreatedResponse, AssetResource: Asset ingestion and listing payloads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("must not be blank")
    return text


class AgencyCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def trim_name(cls, value: str) -> str:
        return _strip_required(value)


class AgencyResource(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    agency_id: int
    name: str
    created_at: datetime


class CreatorCreateRequest(BaseModel):
    agency_id: int = Field(ge=1)
    stage_name: str = Field(min_length=1, max_length=200)
    categories: list[str] = Field(default_factory=list)

    @field_validator("stage_name")
    @classmethod
    def trim_stage_name(cls, value: str) -> str:
        return _strip_required(value)

    @field_validator("categories", mode="before")
    @classmethod
    def split_categories(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            cleaned: list[str] = []
            for item in value:
                if not isinstance(item, str):
                    raise ValueError("categories must be strings")
                text = item.strip()
                if text and text not in cleaned:
                    cleaned.append(text)
            return cleaned
        return value


class CreatorResource(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    creator_id: int
    agency_id: int
    stage_name: str
    categories: list[str]
    created_at: datetime


class AssetCreateRequest(BaseModel):
    description: str = Field(min_length=1, max_length=8000)
    price: float = Field(gt=0)
    category: str = Field(min_length=1, max_length=200)
    media_type: Optional[str] = Field(default=None, max_length=100)
    agency_id: int = Field(ge=1)
    creator_id: int = Field(ge=1)

    @field_validator("description", "category")
    @classmethod
    def require_text(cls, value: str) -> str:
        return _strip_required(value)

    @field_validator("media_type")
    @classmethod
    def normalise_media_type(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        text = value.strip()
        return text or None


class AssetCreatedResponse(BaseModel):
    id: int


class AssetResource(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    price: float
    category: str
    media_type: Optional[str] = None
    agency_id: int
    creator_id: int
    created_at: datetime
