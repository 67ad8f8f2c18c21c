"""Article relevance graph for club sports news.

This package provides:
- Relationship detection between articles from their extracted metadata
- An in-memory article graph with one aggregated edge per related pair
- Weighted (Dijkstra) and hop-count (BFS) distance queries
- A relevance facade for storage and API layers to call
"""

from .errors import DuplicateIdError, DuplicateTitleError, GraphError, NotFoundError
from .memory_store import InMemoryGraphStore
from .models import Article, ArticleMetadata, Club, Match, Relationship, RelationshipType
from .pipeline import GraphIngestor
from .query_engine import DistanceMode, GraphQueryEngine
from .relationships import MetadataRelationshipDetector
from .service import RelevanceService

__version__ = "0.1.0"

__all__ = [
    "Article",
    "ArticleMetadata",
    "Club",
    "DistanceMode",
    "DuplicateIdError",
    "DuplicateTitleError",
    "GraphError",
    "GraphIngestor",
    "GraphQueryEngine",
    "InMemoryGraphStore",
    "Match",
    "MetadataRelationshipDetector",
    "NotFoundError",
    "Relationship",
    "RelationshipType",
    "RelevanceService",
]
