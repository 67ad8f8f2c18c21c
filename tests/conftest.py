import pytest

from club_news_graph import Article, RelevanceService


def make_article(article_id, *, clubs=(), county="Unknown", leagues=(), matches=(), title=None):
    """Build an Article from terse test inputs.

    `matches` is a sequence of (home, away) tuples.
    """
    return Article.model_validate(
        {
            "id": article_id,
            "title": title or f"Article {article_id}",
            "metadata": {
                "clubs": [{"name": c, "county": county} for c in clubs],
                "matches": [{"homeTeam": h, "awayTeam": a} for h, a in matches],
                "primaryCounty": county,
                "leagues": list(leagues),
            },
        }
    )


@pytest.fixture
def service():
    return RelevanceService()


@pytest.fixture
def chain_service():
    """A - B share a club (weight 1.0); B - C are in bordering counties (weight 0.4)."""
    svc = RelevanceService()
    svc.add_article(make_article("A", clubs=["Nemo Rangers"], county="Cork"))
    svc.add_article(make_article("B", clubs=["Nemo Rangers"], county="Dublin"))
    svc.add_article(make_article("C", clubs=["Navan O'Mahonys"], county="Meath"))
    return svc
