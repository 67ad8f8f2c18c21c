from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .errors import DuplicateIdError, DuplicateTitleError
from .models import Article, GraphExport
from .service import RelevanceService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestStats:
    inserted: int
    skipped: int
    edges_created: int
    elapsed_ms: float


class GraphIngestor:
    """Bulk loader for already-analyzed articles.

    Duplicates (same id, or same title ignoring case) are skipped with a
    warning instead of failing the whole batch.
    """

    def __init__(self, service: RelevanceService):
        self.service = service

    def ingest_articles(self, articles: Iterable[Article | Mapping[str, Any]]) -> IngestStats:
        t0 = time.perf_counter()
        inserted = skipped = edges = 0
        for raw in articles:
            article = raw if isinstance(raw, Article) else Article.model_validate(raw)
            try:
                added = self.service.add_article(article, unique_title=True)
            except (DuplicateIdError, DuplicateTitleError) as e:
                logger.warning("Skipping %s: %s", article.id, e)
                skipped += 1
                continue
            inserted += 1
            edges += len(added.connections)
        t1 = time.perf_counter()
        return IngestStats(inserted=inserted, skipped=skipped, edges_created=edges, elapsed_ms=(t1 - t0) * 1000.0)

    def ingest_export(self, data: Mapping[str, Any] | GraphExport) -> IngestStats:
        """Restore articles from an export snapshot; edges are recomputed on insert."""
        if isinstance(data, GraphExport):
            return self.ingest_articles(data.nodes)
        return self.ingest_articles(data.get("nodes", []))
