from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .counties import UNKNOWN_COUNTY, canonical_county
from .settings import settings


def normalize_name(value: str) -> str:
    """Matching key for club, team and league names."""
    return value.strip().lower()


# --- Inbound article records ---------------------------------------------


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Club(_Frozen):
    name: str = Field(min_length=1)
    county: str = UNKNOWN_COUNTY
    league: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _trim_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("county", mode="before")
    @classmethod
    def _canonical_county(cls, v: Any) -> str:
        return canonical_county(v)

    @field_validator("league", mode="before")
    @classmethod
    def _trim_league(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v


class Match(_Frozen):
    home_team: str = Field(alias="homeTeam", min_length=1)
    away_team: str = Field(alias="awayTeam", min_length=1)
    result: str | None = None

    @field_validator("home_team", "away_team", "result", mode="before")
    @classmethod
    def _trim(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    def teams(self) -> list[str]:
        return [self.home_team, self.away_team]


class ArticleMetadata(_Frozen):
    """Structured facts extracted upstream from an article body."""

    clubs: list[Club] = Field(default_factory=list)
    matches: list[Match] = Field(default_factory=list)
    primary_county: str = Field(default=UNKNOWN_COUNTY, alias="primaryCounty")
    leagues: list[str] = Field(default_factory=list)
    sport: str | None = None

    @field_validator("primary_county", mode="before")
    @classmethod
    def _canonical_county(cls, v: Any) -> str:
        return canonical_county(v)

    @field_validator("leagues", mode="before")
    @classmethod
    def _dedupe_leagues(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str) or not isinstance(v, (list, tuple, set, frozenset)):
            return v
        out: list[str] = []
        seen: set[str] = set()
        for league in v:
            if not isinstance(league, str):
                return v  # let pydantic report the type error
            trimmed = league.strip()
            key = trimmed.lower()
            if not trimmed or key in seen:
                continue
            seen.add(key)
            out.append(trimmed)
        return out

    @model_validator(mode="after")
    def _check_clubs(self) -> ArticleMetadata:
        if settings.require_clubs and not self.clubs:
            raise ValueError("At least one club must be mentioned")
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Article(_Frozen):
    id: str = Field(min_length=1)
    title: str
    metadata: ArticleMetadata = Field(default_factory=ArticleMetadata)

    # Optional body/provenance carried through untouched
    content: str | None = None
    url: str | None = None
    published_date: date | None = Field(default=None, alias="publishedDate")

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "metadata": self.metadata.to_dict()}


# --- Graph facts -----------------------------------------------------------


class RelationshipType(str, Enum):
    SAME_CLUB = "SAME_CLUB"
    PROXIMITY = "PROXIMITY"
    MATCH_PLAYED = "MATCH_PLAYED"
    SAME_LEAGUE = "SAME_LEAGUE"


@dataclass(frozen=True, slots=True)
class Relationship:
    """A typed, weighted signal connecting two articles.

    `evidence` lists the matched entity names in their original casing.
    """

    type: RelationshipType
    weight: float
    evidence: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "weight": self.weight, "evidence": list(self.evidence)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Relationship:
        return cls(
            type=RelationshipType(data["type"]),
            weight=float(data["weight"]),
            evidence=tuple(data.get("evidence") or ()),
        )


@dataclass(frozen=True, slots=True)
class Edge:
    """Undirected edge; `source` is the later-inserted endpoint."""

    source: str
    target: str
    relationships: tuple[Relationship, ...]
    weight: float

    def other(self, node_id: str) -> str:
        return self.target if node_id == self.source else self.source

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "relationships": [r.to_dict() for r in self.relationships],
            "weight": self.weight,
        }


@dataclass(frozen=True, slots=True)
class Neighbor:
    id: str
    title: str
    edge: Edge

    @property
    def weight(self) -> float:
        return self.edge.weight

    @property
    def relationships(self) -> tuple[Relationship, ...]:
        return self.edge.relationships

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "relationships": [r.to_dict() for r in self.edge.relationships],
            "weight": self.edge.weight,
        }


@dataclass(frozen=True, slots=True)
class PathStep:
    """One node on a reconstructed path.

    Every step but the last carries the edge leading to the next step.
    """

    article: Article
    relationships: tuple[Relationship, ...] = ()
    edge_weight: float | None = None

    @property
    def id(self) -> str:
        return self.article.id

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.article.id, "title": self.article.title}
        if self.edge_weight is not None:
            d["relationships"] = [r.to_dict() for r in self.relationships]
            d["edgeWeight"] = self.edge_weight
        return d


@dataclass(slots=True)
class DistanceResult:
    distance: float
    path: list[PathStep] = field(default_factory=list)

    @property
    def reachable(self) -> bool:
        return self.distance != float("inf")

    def to_dict(self) -> dict[str, Any]:
        return {"distance": self.distance, "path": [s.to_dict() for s in self.path]}


@dataclass(frozen=True, slots=True)
class RelatedArticle:
    """An article found within a distance bound of some source article.

    `relationships`/`weight` describe the edge on the shortest path that
    reaches this article (its last hop).
    """

    id: str
    title: str
    distance: float
    relationships: tuple[Relationship, ...]
    weight: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "distance": self.distance,
            "relationships": [r.to_dict() for r in self.relationships],
            "weight": self.weight,
        }


@dataclass(slots=True)
class MostConnected:
    id: str
    title: str
    connections: int


@dataclass(slots=True)
class GraphStats:
    total_articles: int
    total_connections: int
    avg_connections_per_article: float
    most_connected_article: MostConnected | None
    counties: list[str]
    leagues: list[str]

    def to_dict(self) -> dict[str, Any]:
        mc = self.most_connected_article
        return {
            "totalArticles": self.total_articles,
            "totalConnections": self.total_connections,
            "avgConnectionsPerArticle": self.avg_connections_per_article,
            "mostConnectedArticle": (
                {"id": mc.id, "title": mc.title, "connections": mc.connections} if mc else None
            ),
            "counties": list(self.counties),
            "leagues": list(self.leagues),
        }


@dataclass(slots=True)
class GraphExport:
    nodes: list[Article]
    edges: list[Edge]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [a.to_dict() for a in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
