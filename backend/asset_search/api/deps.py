"""FastAPI dependencies for the shared embedder and per-request ranker."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from asset_search.db.session import get_session
from asset_search.services import CosineRanker, Embedder, SimilarityRanker


def get_embedder(request: Request) -> Embedder:
    embedder = getattr(request.app.state, "embedder", None)
    if embedder is None:
        raise RuntimeError("Embedder not initialised; the application lifespan did not run")
    return embedder


def get_ranker(session: AsyncSession = Depends(get_session)) -> SimilarityRanker:
    return CosineRanker(session)
