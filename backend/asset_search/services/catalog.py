"""Catalog persistence for agencies, creators and assets.

Classes:
    CatalogService: Create and list catalog records; embeds asset descriptions on ingestion.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from asset_search.core.exceptions import InvalidInputError, NotFoundError, StorageError
from asset_search.models import Agency, Asset, Creator
from asset_search.schemas import AgencyCreateRequest, AssetCreateRequest, CreatorCreateRequest
from asset_search.services.embedder import TextEmbedder
from asset_search.services.ranking import vector_to_bytes

_LOGGER = logging.getLogger(__name__)


class CatalogService:
    """Insert-and-read access to the catalog; records are never updated or deleted."""

    def __init__(self, session: AsyncSession, embedder: Optional[TextEmbedder] = None) -> None:
        self._session = session
        self._embedder = embedder

    async def create_agency(self, payload: AgencyCreateRequest) -> Agency:
        agency = Agency(name=payload.name)
        await self._insert(agency)
        _LOGGER.info("Created agency %s", agency.agency_id)
        return agency

    async def list_agencies(self) -> list[Agency]:
        statement = select(Agency).order_by(Agency.agency_id)
        return await self._fetch(statement)

    async def create_creator(self, payload: CreatorCreateRequest) -> Creator:
        await self._require_agency(payload.agency_id)
        creator = Creator(
            agency_id=payload.agency_id,
            stage_name=payload.stage_name,
            categories=list(payload.categories),
        )
        await self._insert(creator)
        _LOGGER.info("Created creator %s for agency %s", creator.creator_id, creator.agency_id)
        return creator

    async def list_creators(self, agency_id: Optional[int] = None) -> list[Creator]:
        statement = select(Creator).order_by(Creator.creator_id)
        if agency_id is not None:
            statement = statement.where(Creator.agency_id == agency_id)
        return await self._fetch(statement)

    async def create_asset(self, payload: AssetCreateRequest) -> Asset:
        if self._embedder is None:
            raise RuntimeError("CatalogService needs an embedder to create assets")

        await self._require_agency(payload.agency_id)
        creator = await self._get(Creator, payload.creator_id)
        if creator is None:
            raise NotFoundError(f"Creator {payload.creator_id} not found")
        if creator.agency_id != payload.agency_id:
            raise InvalidInputError(
                f"Creator {payload.creator_id} does not belong to agency {payload.agency_id}"
            )

        # an embedding failure propagates here, before anything is written
        vector = await self._embedder.embed(payload.description)

        asset = Asset(
            description=payload.description,
            price=payload.price,
            category=payload.category,
            media_type=payload.media_type,
            agency_id=payload.agency_id,
            creator_id=payload.creator_id,
            embedding=vector_to_bytes(vector),
            embedding_dim=len(vector),
        )
        await self._insert(asset)
        _LOGGER.info(
            "Created asset %s for agency %s creator %s (dim=%d)",
            asset.id,
            asset.agency_id,
            asset.creator_id,
            asset.embedding_dim,
        )
        return asset

    async def list_assets(
        self,
        agency_id: Optional[int] = None,
        creator_id: Optional[int] = None,
    ) -> list[Asset]:
        statement = select(Asset).order_by(Asset.id.desc())  # type: ignore[union-attr]
        if agency_id is not None:
            statement = statement.where(Asset.agency_id == agency_id)
        if creator_id is not None:
            statement = statement.where(Asset.creator_id == creator_id)
        return await self._fetch(statement)

    async def _require_agency(self, agency_id: int) -> Agency:
        agency = await self._get(Agency, agency_id)
        if agency is None:
            raise NotFoundError(f"Agency {agency_id} not found")
        return agency

    async def _get(self, model, key: int):
        try:
            return await self._session.get(model, key)
        except SQLAlchemyError as exc:
            raise StorageError("Catalog storage unavailable") from exc

    async def _fetch(self, statement) -> list:
        try:
            result = await self._session.exec(statement)
            return list(result.all())
        except SQLAlchemyError as exc:
            _LOGGER.error("Catalog query failed: %s", exc)
            raise StorageError("Catalog storage unavailable") from exc

    async def _insert(self, record) -> None:
        self._session.add(record)
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            _LOGGER.error("Insert of %s failed: %s", type(record).__name__, exc)
            raise StorageError(f"Could not save {type(record).__name__.lower()}") from exc
        await self._session.refresh(record)
