"""Asset ORM model.

Classes:
    Asset: A priced media item with the embedding vector derived from its description.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Index, LargeBinary
from sqlmodel import Field, SQLModel


class Asset(SQLModel, table=True):
    __tablename__ = "assets"
    __table_args__ = (
        Index("ix_assets_scope_category", "agency_id", "creator_id", "category"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    description: str
    price: float
    category: str
    media_type: Optional[str] = None
    agency_id: int = Field(foreign_key="agency.agency_id")
    creator_id: int = Field(foreign_key="creator.creator_id")
    # float32 vector, written once at creation
    embedding: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    embedding_dim: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
