"""
Tests for counties.py - gazetteer lookup and adjacency.
"""

from club_news_graph import counties


class TestAdjacency:
    def test_declared_neighbors(self):
        assert counties.are_neighbors("Dublin", "Meath")
        assert counties.are_neighbors("Meath", "Dublin")

    def test_case_and_whitespace_insensitive(self):
        assert counties.are_neighbors(" dublin ", "MEATH")

    def test_same_county_is_not_a_neighbor(self):
        assert not counties.are_neighbors("Dublin", "Dublin")
        assert not counties.are_neighbors("Dublin", "dublin")

    def test_distant_counties(self):
        assert not counties.are_neighbors("Dublin", "Kerry")

    def test_unknown_county(self):
        assert not counties.are_neighbors("Unknown", "Dublin")
        assert counties.neighboring_counties("Atlantis") == []

    def test_one_sided_entry_is_symmetric(self):
        """Derry lists Tyrone but Tyrone does not list Derry."""
        assert "Derry" not in counties.COUNTY_ADJACENCY["Tyrone"]
        assert counties.are_neighbors("Tyrone", "Derry")
        assert "Derry" in counties.neighboring_counties("Tyrone")

    def test_neighboring_counties_sorted(self):
        assert counties.neighboring_counties("Dublin") == ["Kildare", "Meath", "Wicklow"]


class TestGazetteer:
    def test_all_counties(self):
        names = counties.all_counties()
        assert len(names) == 32
        assert names == sorted(names)

    def test_canonical_county(self):
        assert counties.canonical_county("  dublin ") == "Dublin"
        assert counties.canonical_county("CORK") == "Cork"

    def test_canonical_county_unknown_values(self):
        assert counties.canonical_county(None) == "Unknown"
        assert counties.canonical_county("   ") == "Unknown"
        assert counties.canonical_county(" London ") == "London"
