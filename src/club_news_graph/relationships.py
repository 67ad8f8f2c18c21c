from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from .counties import are_neighbors
from .models import ArticleMetadata, Relationship, RelationshipType, normalize_name

logger = logging.getLogger(__name__)


class RelationshipDetector(Protocol):
    def detect(self, a: ArticleMetadata, b: ArticleMetadata) -> list[Relationship]: ...


def _shared_names(names_a: Iterable[str], names_b: Iterable[str]) -> list[str]:
    """Names from `names_a` that also appear in `names_b`, as cased in `names_a`.

    Matching is trimmed and case-insensitive; the first casing seen wins.
    """
    keys_b = {normalize_name(n) for n in names_b}
    out: list[str] = []
    seen: set[str] = set()
    for name in names_a:
        key = normalize_name(name)
        if key in keys_b and key not in seen:
            seen.add(key)
            out.append(name.strip())
    return out


def edge_weight(relationships: Iterable[Relationship]) -> float:
    return max((r.weight for r in relationships), default=0.0)


@dataclass(slots=True)
class MetadataRelationshipDetector:
    """Detects relationships between two articles from their extracted metadata.

    Checks (each fires independently):
    - SAME_CLUB: a club name appears in both articles
    - PROXIMITY: primary counties differ and border each other
    - MATCH_PLAYED: a match in one article shares a team with a match in the other
    - SAME_LEAGUE: a league appears in both articles

    Deterministic and side-effect free.
    """

    same_club_weight: float = 1.0
    proximity_weight: float = 0.4
    match_played_weight: float = 0.9
    same_league_weight: float = 0.5

    def detect(self, a: ArticleMetadata, b: ArticleMetadata) -> list[Relationship]:
        found = [
            self.same_club(a, b),
            self.proximity(a, b),
            self.match_played(a, b),
            self.same_league(a, b),
        ]
        rels = [r for r in found if r is not None]
        if rels:
            logger.debug("detected %s", ", ".join(r.type.value for r in rels))
        return rels

    def same_club(self, a: ArticleMetadata, b: ArticleMetadata) -> Relationship | None:
        shared = _shared_names((c.name for c in a.clubs), (c.name for c in b.clubs))
        if not shared:
            return None
        return Relationship(RelationshipType.SAME_CLUB, self.same_club_weight, tuple(shared))

    def proximity(self, a: ArticleMetadata, b: ArticleMetadata) -> Relationship | None:
        # Equal counties never qualify: are_neighbors() is False for a == b.
        county_a, county_b = a.primary_county, b.primary_county
        if not are_neighbors(county_a, county_b):
            return None
        return Relationship(RelationshipType.PROXIMITY, self.proximity_weight, (county_a, county_b))

    def match_played(self, a: ArticleMetadata, b: ArticleMetadata) -> Relationship | None:
        evidence: list[str] = []
        for match_a in a.matches:
            teams_a = {normalize_name(t): t for t in match_a.teams()}
            for match_b in b.matches:
                teams_b = {normalize_name(t): t for t in match_b.teams()}
                if not teams_a.keys() & teams_b.keys():
                    continue
                # union of both fixtures' teams, first casing wins
                union = dict(teams_a)
                for key, team in teams_b.items():
                    union.setdefault(key, team)
                label = " vs ".join(union.values())
                if label not in evidence:
                    evidence.append(label)
        if not evidence:
            return None
        return Relationship(RelationshipType.MATCH_PLAYED, self.match_played_weight, tuple(evidence))

    def same_league(self, a: ArticleMetadata, b: ArticleMetadata) -> Relationship | None:
        shared = _shared_names(a.leagues, b.leagues)
        if not shared:
            return None
        return Relationship(RelationshipType.SAME_LEAGUE, self.same_league_weight, tuple(shared))
