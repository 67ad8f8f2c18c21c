from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .errors import DuplicateIdError, DuplicateTitleError, NotFoundError
from .models import Article, Edge, GraphExport, GraphStats, MostConnected, Neighbor, normalize_name
from .relationships import MetadataRelationshipDetector, RelationshipDetector, edge_weight

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphSnapshot:
    """Immutable point-in-time view of the graph.

    Distance queries run against a snapshot so a concurrent insert or
    remove can never be observed half-applied.
    """

    nodes: Mapping[str, Article]
    adjacency: Mapping[str, Mapping[str, Edge]]

    def has(self, article_id: str) -> bool:
        return article_id in self.nodes

    def get(self, article_id: str) -> Article:
        try:
            return self.nodes[article_id]
        except KeyError:
            raise NotFoundError(article_id) from None

    def neighbors(self, article_id: str) -> list[Neighbor]:
        if article_id not in self.nodes:
            raise NotFoundError(article_id)
        return [
            Neighbor(id=other, title=self.nodes[other].title, edge=edge)
            for other, edge in self.adjacency.get(article_id, {}).items()
        ]

    def edge(self, a: str, b: str) -> Edge | None:
        return self.adjacency.get(a, {}).get(b)

    def all_nodes(self) -> list[Article]:
        return list(self.nodes.values())


class InMemoryGraphStore:
    """In-process article graph.

    Undirected and simple: at most one edge per pair, no self-loops. Every
    edge is the result of relationship detection between its endpoints; there
    is no way to add or edit an edge directly.

    A single re-entrant lock serializes writers against each other and
    against readers. Insertion computes every relationship before touching
    any state, so a failing detector leaves the graph unchanged.
    """

    def __init__(self, detector: RelationshipDetector | None = None):
        self.detector = detector or MetadataRelationshipDetector()
        self._lock = threading.RLock()
        self._nodes: dict[str, Article] = {}
        self._adj: dict[str, dict[str, Edge]] = {}
        self._edges: dict[frozenset[str], Edge] = {}
        self._snapshot: GraphSnapshot | None = None

    # -- Mutation ----------------------------------------------------------

    def insert(self, article: Article, *, unique_title: bool = False) -> list[Neighbor]:
        """Add an article and install an edge to every related existing article.

        With `unique_title`, an article whose title matches a stored one
        (ignoring case) is rejected in the same locked step as the insert.
        Returns the new article's neighbors.
        """
        with self._lock:
            if article.id in self._nodes:
                raise DuplicateIdError(article.id)
            if unique_title:
                existing_title = self.find_by_title(article.title)
                if existing_title is not None:
                    raise DuplicateTitleError(article.title, existing_title.id)

            new_edges: list[Edge] = []
            for existing_id, existing in self._nodes.items():
                rels = self.detector.detect(article.metadata, existing.metadata)
                if rels:
                    new_edges.append(
                        Edge(
                            source=article.id,
                            target=existing_id,
                            relationships=tuple(rels),
                            weight=edge_weight(rels),
                        )
                    )

            self._nodes[article.id] = article
            self._adj[article.id] = {}
            for e in new_edges:
                self._adj[e.source][e.target] = e
                self._adj[e.target][e.source] = e
                self._edges[frozenset((e.source, e.target))] = e
            self._snapshot = None
            connected = [Neighbor(id=e.target, title=self._nodes[e.target].title, edge=e) for e in new_edges]

        logger.info("Inserted article %s with %d edge(s)", article.id, len(new_edges))
        return connected

    def remove(self, article_id: str) -> None:
        with self._lock:
            if article_id not in self._nodes:
                raise NotFoundError(article_id)
            incident = self._adj.pop(article_id)
            for other in incident:
                del self._adj[other][article_id]
                del self._edges[frozenset((article_id, other))]
            del self._nodes[article_id]
            self._snapshot = None
        logger.info("Removed article %s and %d edge(s)", article_id, len(incident))

    def clear(self) -> None:
        with self._lock:
            self._nodes.clear()
            self._adj.clear()
            self._edges.clear()
            self._snapshot = None
        logger.info("Graph cleared")

    # -- Reads -------------------------------------------------------------

    def snapshot(self) -> GraphSnapshot:
        with self._lock:
            if self._snapshot is None:
                self._snapshot = GraphSnapshot(
                    nodes=MappingProxyType(dict(self._nodes)),
                    adjacency=MappingProxyType(
                        {nid: MappingProxyType(dict(adj)) for nid, adj in self._adj.items()}
                    ),
                )
            return self._snapshot

    def has(self, article_id: str) -> bool:
        with self._lock:
            return article_id in self._nodes

    def get(self, article_id: str) -> Article:
        with self._lock:
            try:
                return self._nodes[article_id]
            except KeyError:
                raise NotFoundError(article_id) from None

    def neighbors(self, article_id: str) -> list[Neighbor]:
        return self.snapshot().neighbors(article_id)

    def edge(self, a: str, b: str) -> Edge | None:
        with self._lock:
            return self._edges.get(frozenset((a, b)))

    def all_nodes(self) -> list[Article]:
        with self._lock:
            return list(self._nodes.values())

    def node_count(self) -> int:
        with self._lock:
            return len(self._nodes)

    def edge_count(self) -> int:
        with self._lock:
            return len(self._edges)

    def find_by_title(self, title: str) -> Article | None:
        key = normalize_name(title)
        for article in self.all_nodes():
            if normalize_name(article.title) == key:
                return article
        return None

    def by_club(self, name: str) -> list[Article]:
        key = normalize_name(name)
        return [a for a in self.all_nodes() if any(normalize_name(c.name) == key for c in a.metadata.clubs)]

    def by_county(self, county: str) -> list[Article]:
        key = normalize_name(county)
        return [a for a in self.all_nodes() if normalize_name(a.metadata.primary_county) == key]

    def by_league(self, league: str) -> list[Article]:
        key = normalize_name(league)
        return [a for a in self.all_nodes() if any(normalize_name(lg) == key for lg in a.metadata.leagues)]

    # -- Aggregates --------------------------------------------------------

    def stats(self) -> GraphStats:
        snap = self.snapshot()
        total_nodes = len(snap.nodes)
        total_edges = sum(len(adj) for adj in snap.adjacency.values()) // 2

        most: MostConnected | None = None
        for nid, article in snap.nodes.items():
            degree = len(snap.adjacency.get(nid, {}))
            if degree > (most.connections if most else 0):
                most = MostConnected(id=nid, title=article.title, connections=degree)

        counties: set[str] = set()
        leagues: set[str] = set()
        for article in snap.nodes.values():
            counties.add(article.metadata.primary_county)
            leagues.update(article.metadata.leagues)

        return GraphStats(
            total_articles=total_nodes,
            total_connections=total_edges,
            avg_connections_per_article=(2 * total_edges / total_nodes) if total_nodes else 0.0,
            most_connected_article=most,
            counties=sorted(counties),
            leagues=sorted(leagues),
        )

    def export(self) -> GraphExport:
        with self._lock:
            return GraphExport(nodes=list(self._nodes.values()), edges=list(self._edges.values()))

    @classmethod
    def from_export(
        cls,
        data: Mapping[str, Any] | GraphExport,
        detector: RelationshipDetector | None = None,
    ) -> InMemoryGraphStore:
        """Rebuild a store from an export.

        Edges are recomputed by detection; the exported edge list is not
        trusted, since the edge set is a function of node metadata.
        """
        store = cls(detector=detector)
        for article in _export_nodes(data):
            store.insert(article)
        return store


def _export_nodes(data: Mapping[str, Any] | GraphExport) -> Iterable[Article]:
    if isinstance(data, GraphExport):
        return data.nodes
    return [Article.model_validate(n) for n in data.get("nodes", [])]
