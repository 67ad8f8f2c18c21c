from __future__ import annotations

from typing import Protocol

from .models import Article, Edge, GraphExport, GraphStats, Neighbor


class GraphReader(Protocol):
    """Read interface over a consistent view of the article graph."""

    def has(self, article_id: str) -> bool: ...

    def get(self, article_id: str) -> Article: ...

    def neighbors(self, article_id: str) -> list[Neighbor]: ...

    def edge(self, a: str, b: str) -> Edge | None: ...

    def all_nodes(self) -> list[Article]: ...


class GraphStore(GraphReader, Protocol):
    """Abstraction for the backing article graph."""

    def insert(self, article: Article, *, unique_title: bool = False) -> list[Neighbor]: ...

    def remove(self, article_id: str) -> None: ...

    def clear(self) -> None: ...

    def snapshot(self) -> GraphReader: ...

    def stats(self) -> GraphStats: ...

    def export(self) -> GraphExport: ...
