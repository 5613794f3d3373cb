"""Creator endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from asset_search.db.session import get_session
from asset_search.schemas import CreatorCreateRequest, CreatorResource
from asset_search.services import CatalogService

router = APIRouter(prefix="/creator", tags=["creator"])


@router.get("", response_model=list[CreatorResource])
async def list_creators(
    agency_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> list[CreatorResource]:
    creators = await CatalogService(session).list_creators(agency_id=agency_id)
    return [CreatorResource.model_validate(creator) for creator in creators]


@router.post("", response_model=CreatorResource, status_code=status.HTTP_201_CREATED)
async def create_creator(
    payload: CreatorCreateRequest,
    session: AsyncSession = Depends(get_session),
) -> CreatorResource:
    creator = await CatalogService(session).create_creator(payload)
    return CreatorResource.model_validate(creator)
