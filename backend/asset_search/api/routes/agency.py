"""Agency endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from asset_search.db.session import get_session
from asset_search.schemas import AgencyCreateRequest, AgencyResource
from asset_search.services import CatalogService

router = APIRouter(prefix="/agency", tags=["agency"])


@router.get("", response_model=list[AgencyResource])
async def list_agencies(session: AsyncSession = Depends(get_session)) -> list[AgencyResource]:
    agencies = await CatalogService(session).list_agencies()
    return [AgencyResource.model_validate(agency) for agency in agencies]


@router.post("", response_model=AgencyResource, status_code=status.HTTP_201_CREATED)
async def create_agency(
    payload: AgencyCreateRequest,
    session: AsyncSession = Depends(get_session),
) -> AgencyResource:
    agency = await CatalogService(session).create_agency(payload)
    return AgencyResource.model_validate(agency)
