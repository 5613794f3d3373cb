"""Semantic search endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from asset_search.api.deps import get_embedder, get_ranker
from asset_search.schemas import SearchRequest, SearchResponse
from asset_search.services import Embedder, SearchService, SimilarityRanker

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search_assets(
    payload: SearchRequest,
    embedder: Embedder = Depends(get_embedder),
    ranker: SimilarityRanker = Depends(get_ranker),
) -> SearchResponse:
    service = SearchService(embedder, ranker)
    results = await service.search(
        payload.query,
        agency_id=payload.agency_id,
        creator_id=payload.creator_id,
        category=payload.category,
        limit=payload.limit,
    )
    return SearchResponse(results=results)
