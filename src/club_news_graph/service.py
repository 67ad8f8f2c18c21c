"""Relevance facade.

The one entry point external collaborators (article storage, an API layer)
are expected to call. Composes the graph store and the distance engine.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable

from .errors import NotFoundError
from .memory_store import InMemoryGraphStore
from .models import Article, DistanceResult, GraphExport, GraphStats, Neighbor, RelatedArticle
from .query_engine import DistanceMode, GraphQueryEngine
from .settings import settings

logger = logging.getLogger(__name__)

_ROUNDING: dict[str, Callable[[float], int]] = {
    "ceil": math.ceil,
    "floor": math.floor,
    # half-up, so every .5 distance moves to the next level
    "round": lambda d: math.floor(d + 0.5),
}


@dataclass(slots=True)
class ArticleWithConnections:
    article: Article
    connections: list[Neighbor]

    def to_dict(self) -> dict[str, Any]:
        return {**self.article.to_dict(), "connections": [n.to_dict() for n in self.connections]}


class RelevanceService:
    def __init__(
        self,
        store: InMemoryGraphStore | None = None,
        *,
        bucket_rounding: str | None = None,
    ):
        self.store = store or InMemoryGraphStore()
        self.engine = GraphQueryEngine(self.store)
        rounding = bucket_rounding or settings.bucket_rounding
        if rounding not in _ROUNDING:
            raise ValueError(f"bucket_rounding must be one of {sorted(_ROUNDING)}, got {rounding!r}")
        self.bucket_rounding = rounding

    def add_article(self, article: Article, *, unique_title: bool = False) -> ArticleWithConnections:
        """Insert an article; returns it with the articles it connected to."""
        connected = self.store.insert(article, unique_title=unique_title)
        return ArticleWithConnections(article=article, connections=connected)

    def remove_article(self, article_id: str) -> None:
        self.store.remove(article_id)

    def get_article_with_connections(self, article_id: str) -> ArticleWithConnections:
        snap = self.store.snapshot()
        return ArticleWithConnections(article=snap.get(article_id), connections=snap.neighbors(article_id))

    def related_within(
        self,
        article_id: str,
        max_distance: float | None = None,
        mode: DistanceMode | str | None = None,
    ) -> dict[int, list[RelatedArticle]]:
        """Related articles bucketed by integer distance level 1..floor(max_distance).

        Fractional weighted distances are mapped to a level with the configured
        rounding (ceil by default, so 1.1 lands in level 2). Every level is
        present, possibly empty.
        """
        max_distance = max_distance if max_distance is not None else settings.default_max_distance
        mode = mode or self._default_mode()
        to_level = _ROUNDING[self.bucket_rounding]

        levels = math.floor(max_distance)
        buckets: dict[int, list[RelatedArticle]] = {level: [] for level in range(1, levels + 1)}
        # with ceil, anything past max_distance can't land in a bucket; floor/round can reach further
        reach = max_distance if self.bucket_rounding == "ceil" else levels + 1
        for dist, related in self.engine.within_distance(article_id, reach, mode).items():
            level = max(1, to_level(dist))
            if level in buckets:
                buckets[level].extend(related)
        return buckets

    def distance(
        self, from_id: str, to_id: str, mode: DistanceMode | str | None = None
    ) -> DistanceResult:
        return self.engine.distance(from_id, to_id, mode or self._default_mode())

    def relevance_score(self, from_id: str, to_id: str) -> float:
        """1 / (1 + weighted distance); 0.0 when unreachable or either id is unknown."""
        try:
            result = self.engine.distance(from_id, to_id, DistanceMode.WEIGHTED)
        except NotFoundError as e:
            logger.debug("relevance_score: %s", e)
            return 0.0
        if not result.reachable:
            return 0.0
        return 1.0 / (1.0 + result.distance)

    def stats(self) -> GraphStats:
        return self.store.stats()

    def export(self) -> GraphExport:
        return self.store.export()

    def all_articles(self) -> list[Article]:
        return self.store.all_nodes()

    def article_count(self) -> int:
        return self.store.node_count()

    def articles_by_club(self, name: str) -> list[Article]:
        return self.store.by_club(name)

    def articles_by_county(self, county: str) -> list[Article]:
        return self.store.by_county(county)

    def articles_by_league(self, league: str) -> list[Article]:
        return self.store.by_league(league)

    def clear(self) -> None:
        self.store.clear()

    @staticmethod
    def _default_mode() -> DistanceMode:
        return DistanceMode.WEIGHTED if settings.default_weighted else DistanceMode.UNWEIGHTED
