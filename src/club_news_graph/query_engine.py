from __future__ import annotations

import heapq
import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from .errors import GraphError, NotFoundError
from .models import DistanceResult, Edge, PathStep, RelatedArticle
from .settings import settings
from .store import GraphReader, GraphStore

logger = logging.getLogger(__name__)

INF = float("inf")


class DistanceMode(str, Enum):
    WEIGHTED = "weighted"
    UNWEIGHTED = "unweighted"


# node id -> (distance from source, predecessor id or None for the source)
ShortestPathTree = dict[str, tuple[float, "str | None"]]


def _tree_edge(graph: GraphReader, a: str, b: str) -> Edge:
    edge = graph.edge(a, b)
    if edge is None:
        raise GraphError(f"No edge between {a} and {b} in the graph being searched")
    return edge


@dataclass(slots=True)
class GraphQueryEngine:
    """Shortest-path queries over the article graph.

    Weighted mode runs Dijkstra with an edge cost of ``1 / max(weight, floor)``
    so strong relationships are cheap to cross and the shortest path follows
    the strongest chain of evidence. Unweighted mode is a BFS hop count.

    Every query runs against one store snapshot.
    """

    store: GraphStore
    min_edge_weight: float = field(default_factory=lambda: settings.min_edge_weight)

    def edge_cost(self, edge: Edge) -> float:
        return 1.0 / max(edge.weight, self.min_edge_weight)

    def shortest_path_tree(
        self,
        source_id: str,
        mode: DistanceMode | str = DistanceMode.WEIGHTED,
        *,
        max_distance: float = INF,
        target_id: str | None = None,
        graph: GraphReader | None = None,
    ) -> ShortestPathTree:
        """Distances and predecessors for every node reachable from `source_id`.

        Nodes farther than `max_distance` are left out. With `target_id` the
        search stops as soon as the target is settled.
        """
        graph = graph or self.store.snapshot()
        if not graph.has(source_id):
            raise NotFoundError(source_id, role="Source article")
        if DistanceMode(mode) is DistanceMode.UNWEIGHTED:
            return self._bfs(graph, source_id, max_distance, target_id)
        return self._dijkstra(graph, source_id, max_distance, target_id)

    def _dijkstra(
        self, graph: GraphReader, source_id: str, max_distance: float, target_id: str | None
    ) -> ShortestPathTree:
        settled: ShortestPathTree = {}
        best: dict[str, float] = {source_id: 0.0}
        tie = itertools.count()
        heap: list[tuple[float, int, str, str | None]] = [(0.0, next(tie), source_id, None)]

        while heap:
            dist, _, node, pred = heapq.heappop(heap)
            if node in settled:
                continue
            if dist > max_distance:
                break
            settled[node] = (dist, pred)
            if node == target_id:
                break
            for nb in graph.neighbors(node):
                if nb.id in settled:
                    continue
                cand = dist + self.edge_cost(nb.edge)
                if cand < best.get(nb.id, INF):
                    best[nb.id] = cand
                    heapq.heappush(heap, (cand, next(tie), nb.id, node))
        return settled

    @staticmethod
    def _bfs(
        graph: GraphReader, source_id: str, max_distance: float, target_id: str | None
    ) -> ShortestPathTree:
        tree: ShortestPathTree = {source_id: (0, None)}
        queue: deque[str] = deque([source_id])
        while queue:
            node = queue.popleft()
            if node == target_id:
                break
            hops = tree[node][0]
            if hops >= max_distance:
                continue
            for nb in graph.neighbors(node):
                if nb.id not in tree:
                    tree[nb.id] = (hops + 1, node)
                    queue.append(nb.id)
        return tree

    def distance(
        self, from_id: str, to_id: str, mode: DistanceMode | str = DistanceMode.WEIGHTED
    ) -> DistanceResult:
        graph = self.store.snapshot()
        if not graph.has(from_id):
            raise NotFoundError(from_id, role="Source article")
        if not graph.has(to_id):
            raise NotFoundError(to_id, role="Target article")

        if from_id == to_id:
            return DistanceResult(distance=0, path=[PathStep(article=graph.get(from_id))])

        tree = self.shortest_path_tree(from_id, mode, target_id=to_id, graph=graph)
        if to_id not in tree:
            logger.debug("%s unreachable from %s", to_id, from_id)
            return DistanceResult(distance=INF, path=[])

        return DistanceResult(distance=tree[to_id][0], path=self._reconstruct(graph, tree, to_id))

    @staticmethod
    def _reconstruct(graph: GraphReader, tree: ShortestPathTree, to_id: str) -> list[PathStep]:
        ids: list[str] = []
        node: str | None = to_id
        while node is not None:
            ids.append(node)
            node = tree[node][1]
        ids.reverse()

        steps: list[PathStep] = []
        for idx, nid in enumerate(ids):
            article = graph.get(nid)
            if idx == len(ids) - 1:
                steps.append(PathStep(article=article))
                continue
            edge = _tree_edge(graph, nid, ids[idx + 1])
            steps.append(PathStep(article=article, relationships=edge.relationships, edge_weight=edge.weight))
        return steps

    def within_distance(
        self,
        source_id: str,
        max_distance: float,
        mode: DistanceMode | str = DistanceMode.WEIGHTED,
    ) -> dict[float, list[RelatedArticle]]:
        """Every other article within `max_distance` of `source_id`, grouped by distance.

        One shortest-path-tree pass. Each entry carries the edge of the last
        hop on its shortest path. Groups are ordered by increasing distance.
        """
        graph = self.store.snapshot()
        tree = self.shortest_path_tree(source_id, mode, max_distance=max_distance, graph=graph)

        grouped: dict[float, list[RelatedArticle]] = {}
        for nid, (dist, pred) in sorted(tree.items(), key=lambda kv: kv[1][0]):
            if pred is None or dist > max_distance:
                continue
            edge = _tree_edge(graph, pred, nid)
            grouped.setdefault(dist, []).append(
                RelatedArticle(
                    id=nid,
                    title=graph.get(nid).title,
                    distance=dist,
                    relationships=edge.relationships,
                    weight=edge.weight,
                )
            )
        return grouped
