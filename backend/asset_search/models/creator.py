"""Creator ORM model.

Classes:
    Creator: A stage persona belonging to one agency, with the asset categories it sells.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Creator(SQLModel, table=True):
    __tablename__ = "creator"

    creator_id: Optional[int] = Field(default=None, primary_key=True)
    agency_id: int = Field(foreign_key="agency.agency_id", index=True)
    stage_name: str
    categories: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
