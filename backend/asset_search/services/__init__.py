"""Service layer exports.

Expose the embedder, ranking, search and catalog services for easy importing.
"""

from .embedder import Embedder, TextEmbedder
from .ranking import CosineRanker, SimilarityRanker
from .search import SearchService
from .catalog import CatalogService

__all__ = ["Embedder", "TextEmbedder", "CosineRanker", "SimilarityRanker", "SearchService", "CatalogService"]
