"""Semantic asset search: validate, embed the query, rank within scope."""

from __future__ import annotations

import logging
import time
from typing import Optional

from asset_search.core.config import get_settings
from asset_search.core.exceptions import InvalidInputError
from asset_search.schemas import SearchResult
from asset_search.services.embedder import TextEmbedder
from asset_search.services.ranking import SimilarityRanker, validate_scope

_LOGGER = logging.getLogger(__name__)


class SearchService:
    def __init__(
        self,
        embedder: TextEmbedder,
        ranker: SimilarityRanker,
        *,
        default_limit: Optional[int] = None,
    ) -> None:
        self._embedder = embedder
        self._ranker = ranker
        self._default_limit = default_limit if default_limit is not None else get_settings().search_default_limit

    async def search(
        self,
        query: Optional[str],
        *,
        agency_id: Optional[int],
        creator_id: Optional[int],
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[SearchResult]:
        if query is None or not query.strip():
            raise InvalidInputError("agency_id, creator_id, query required")
        resolved_limit = validate_scope(
            agency_id,
            creator_id,
            self._default_limit if limit is None else limit,
        )
        if category is not None and not category.strip():
            category = None

        started = time.perf_counter()
        query_vector = await self._embedder.embed(query)
        results = await self._ranker.search(
            query_vector,
            agency_id=agency_id,  # type: ignore[arg-type]
            creator_id=creator_id,  # type: ignore[arg-type]
            category=category,
            limit=resolved_limit,
        )
        _LOGGER.info(
            "Search agency=%s creator=%s category=%s limit=%d query_chars=%d returned %d results in %.1f ms",
            agency_id,
            creator_id,
            category,
            resolved_limit,
            len(query),
            len(results),
            (time.perf_counter() - started) * 1000.0,
        )
        return results
