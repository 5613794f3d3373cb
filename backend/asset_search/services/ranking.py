"""Nearest-neighbour ranking of catalog assets.

Classes:
    SimilarityRanker: Protocol for strategies that turn a query vector plus scope into ranked results.
    CosineRanker: Loads the scoped candidates from the relational store and ranks them in process.

Functions:
    vector_to_bytes(vector): Serialise an embedding for the ``assets.embedding`` column.
    vector_from_bytes(blob, dim): Inverse of ``vector_to_bytes``.
    cosine_distances(query, matrix): Cosine distance of ``query`` to every row of ``matrix``.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

import numpy as np
from numpy.typing import NDArray
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from asset_search.core.exceptions import DimensionMismatchError, InvalidInputError, RankingBackendError
from asset_search.models import Asset
from asset_search.schemas import SearchResult

_LOGGER = logging.getLogger(__name__)

DEFAULT_LIMIT = 60

# little-endian so stored vectors read back the same on any host
_VECTOR_DTYPE = np.dtype("<f4")
_EPS = 1e-12


def vector_to_bytes(vector: Sequence[float]) -> bytes:
    return np.asarray(vector, dtype=_VECTOR_DTYPE).tobytes()


def vector_from_bytes(blob: bytes, dim: Optional[int] = None) -> NDArray[np.float32]:
    array = np.frombuffer(blob, dtype=_VECTOR_DTYPE)
    if dim is not None and array.shape[0] != dim:
        raise ValueError(f"Stored vector has {array.shape[0]} values, expected {dim}")
    return array.astype(np.float32)


def cosine_distances(query: NDArray[np.floating], matrix: NDArray[np.floating]) -> NDArray[np.float64]:
    """Return ``1 - cos(query, row)`` for each row, in ``[0, 2]``.

    A zero-norm vector on either side counts as orthogonal (distance 1).
    """

    query64 = np.asarray(query, dtype=np.float64)
    matrix64 = np.atleast_2d(np.asarray(matrix, dtype=np.float64))
    query_norm = float(np.linalg.norm(query64))
    row_norms = np.linalg.norm(matrix64, axis=1)
    denom = row_norms * query_norm
    dots = matrix64 @ query64
    similarity = np.zeros_like(dots)
    valid = denom > _EPS
    similarity[valid] = dots[valid] / denom[valid]
    return 1.0 - np.clip(similarity, -1.0, 1.0)


def validate_scope(agency_id: Optional[int], creator_id: Optional[int], limit: object) -> int:
    if agency_id is None or creator_id is None:
        raise InvalidInputError("agency_id, creator_id required")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidInputError("limit must be a positive integer")
    return limit


class SimilarityRanker(Protocol):
    async def search(
        self,
        query_vector: Sequence[float],
        *,
        agency_id: int,
        creator_id: int,
        category: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        ...


class CosineRanker:
    """Exact cosine ranking over one creator's assets.

    Scope and category are pushed into the SQL filter; scoring, ordering
    (distance ascending, then id ascending) and truncation happen here, so the
    limit always applies to the fully ranked candidate list.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(
        self,
        query_vector: Sequence[float],
        *,
        agency_id: int,
        creator_id: int,
        category: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        limit = validate_scope(agency_id, creator_id, limit)
        try:
            query = np.asarray(query_vector, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("query vector must be a sequence of numbers") from exc
        if query.ndim != 1 or query.shape[0] == 0:
            raise InvalidInputError("query vector must be a non-empty sequence of numbers")
        if not np.all(np.isfinite(query)):
            raise InvalidInputError("query vector contains non-finite values")

        candidates = await self._load_candidates(agency_id, creator_id, category)
        _LOGGER.debug(
            "Ranking %d candidates for agency=%s creator=%s category=%s",
            len(candidates),
            agency_id,
            creator_id,
            category,
        )
        if not candidates:
            return []

        dim = int(query.shape[0])
        for asset in candidates:
            if asset.embedding_dim != dim:
                raise DimensionMismatchError(expected=asset.embedding_dim, received=dim)

        matrix = np.vstack([vector_from_bytes(asset.embedding, asset.embedding_dim) for asset in candidates])
        # score at storage precision so an asset matches its own description exactly
        distances = cosine_distances(query.astype(_VECTOR_DTYPE), matrix)
        ids = np.asarray([asset.id for asset in candidates], dtype=np.int64)
        # lexsort orders by the last key first
        order = np.lexsort((ids, distances))[:limit]

        return [_to_result(candidates[idx], float(distances[idx])) for idx in order]

    async def _load_candidates(
        self,
        agency_id: int,
        creator_id: int,
        category: Optional[str],
    ) -> list[Asset]:
        statement = select(Asset).where(Asset.agency_id == agency_id, Asset.creator_id == creator_id)
        if category is not None:
            statement = statement.where(Asset.category == category)
        try:
            result = await self._session.exec(statement)
            return list(result.all())
        except SQLAlchemyError as exc:
            _LOGGER.error("Candidate scan failed for agency=%s creator=%s: %s", agency_id, creator_id, exc)
            raise RankingBackendError("Search backend unavailable") from exc


def _to_result(asset: Asset, distance: float) -> SearchResult:
    return SearchResult(
        id=asset.id,  # type: ignore[arg-type]
        description=asset.description,
        price=asset.price,
        category=asset.category,
        media_type=asset.media_type,
        distance=distance,
    )
