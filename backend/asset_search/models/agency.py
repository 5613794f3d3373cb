"""Agency ORM model.

Classes:
    Agency: Tenancy anchor that owns creators and assets.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Agency(SQLModel, table=True):
    __tablename__ = "agency"

    agency_id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
