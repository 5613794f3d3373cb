"""Asset ingestion and listing endpoints.

Creating an asset embeds its description synchronously; the record is only
written once the vector is available.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from asset_search.api.deps import get_embedder
from asset_search.db.session import get_session
from asset_search.schemas import AssetCreateRequest, AssetCreatedResponse, AssetResource
from asset_search.services import CatalogService, Embedder

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("", response_model=list[AssetResource])
async def list_assets(
    agency_id: Optional[int] = None,
    creator_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> list[AssetResource]:
    assets = await CatalogService(session).list_assets(agency_id=agency_id, creator_id=creator_id)
    return [AssetResource.model_validate(asset) for asset in assets]


@router.post("", response_model=AssetCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    payload: AssetCreateRequest,
    session: AsyncSession = Depends(get_session),
    embedder: Embedder = Depends(get_embedder),
) -> AssetCreatedResponse:
    asset = await CatalogService(session, embedder=embedder).create_asset(payload)
    return AssetCreatedResponse(id=asset.id)  # type: ignore[arg-type]
