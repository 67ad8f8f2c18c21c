"""
Tests for models.py - inbound validation, normalization and serialization.
"""

import pytest
from pydantic import ValidationError

from club_news_graph.models import Article, ArticleMetadata, Club, Match, Relationship, RelationshipType


class TestNormalization:
    def test_names_are_trimmed(self):
        club = Club(name="  Dublin GAA  ", county=" dublin ", league="  Division 1 ")
        assert club.name == "Dublin GAA"
        assert club.county == "Dublin"
        assert club.league == "Division 1"

    def test_missing_county_becomes_unknown(self):
        assert Club(name="St Brigid's", county=None).county == "Unknown"
        assert ArticleMetadata(primaryCounty="").primary_county == "Unknown"

    def test_leagues_deduplicated_first_casing_wins(self):
        meta = ArticleMetadata(leagues=["Division 1", " division 1", "Munster SFC", ""])
        assert meta.leagues == ["Division 1", "Munster SFC"]

    def test_match_accepts_camel_case_and_snake_case(self):
        a = Match(homeTeam=" Cork ", awayTeam="Kerry")
        b = Match(home_team="Cork", away_team="Kerry")
        assert a == b
        assert a.teams() == ["Cork", "Kerry"]


class TestValidation:
    def test_empty_club_name_rejected(self):
        with pytest.raises(ValidationError):
            Club(name="   ")

    def test_empty_team_rejected(self):
        with pytest.raises(ValidationError):
            Match(homeTeam="Cork", awayTeam="")

    def test_article_requires_id(self):
        with pytest.raises(ValidationError):
            Article(id="", title="x")

    def test_article_is_frozen(self):
        article = Article(id="a1", title="Final preview")
        with pytest.raises(ValidationError):
            article.title = "changed"


class TestSerialization:
    def test_metadata_round_trips_camel_case(self):
        meta = ArticleMetadata.model_validate(
            {
                "clubs": [{"name": "Corofin", "county": "galway"}],
                "matches": [{"homeTeam": "Corofin", "awayTeam": "Kilcoo", "result": "1-12 to 0-10"}],
                "primaryCounty": "galway",
                "leagues": ["All-Ireland Club SFC"],
                "sport": "football",
            }
        )
        d = meta.to_dict()
        assert d["primaryCounty"] == "Galway"
        assert d["matches"][0]["homeTeam"] == "Corofin"
        assert "league" not in d["clubs"][0]
        assert ArticleMetadata.model_validate(d) == meta

    def test_relationship_to_and_from_dict(self):
        rel = Relationship(RelationshipType.SAME_CLUB, 1.0, ("Corofin",))
        assert rel.to_dict() == {"type": "SAME_CLUB", "weight": 1.0, "evidence": ["Corofin"]}
        assert Relationship.from_dict(rel.to_dict()) == rel

    def test_require_clubs_setting(self, monkeypatch):
        from club_news_graph.settings import settings

        monkeypatch.setattr(settings, "require_clubs", True)
        with pytest.raises(ValidationError):
            ArticleMetadata(primaryCounty="Cork")
        assert ArticleMetadata(clubs=[Club(name="Nemo Rangers")]).clubs[0].name == "Nemo Rangers"
