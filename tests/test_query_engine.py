"""
Tests for query_engine.py - weighted and hop-count shortest paths.
"""

import math

import pytest

from club_news_graph import DistanceMode, GraphError, GraphQueryEngine, InMemoryGraphStore, NotFoundError
from club_news_graph.models import Edge, RelationshipType

from conftest import make_article


@pytest.fixture
def chain():
    """A - B weight 1.0 (shared club), B - C weight 0.4 (bordering counties)."""
    store = InMemoryGraphStore()
    store.insert(make_article("A", clubs=["Nemo Rangers"], county="Cork"))
    store.insert(make_article("B", clubs=["Nemo Rangers"], county="Dublin"))
    store.insert(make_article("C", clubs=["Navan O'Mahonys"], county="Meath"))
    return GraphQueryEngine(store)


@pytest.fixture
def diamond():
    """A - D direct but weak (0.4); A - B - D two strong hops (1.0 each)."""
    store = InMemoryGraphStore()
    store.insert(make_article("A", clubs=["Kilmacud Crokes"], county="Dublin"))
    store.insert(make_article("B", clubs=["Kilmacud Crokes", "Summerhill"], county="Cork"))
    store.insert(make_article("D", clubs=["Summerhill"], county="Meath"))
    return GraphQueryEngine(store)


class TestDistance:
    def test_weighted_chain(self, chain):
        result = chain.distance("A", "C", DistanceMode.WEIGHTED)
        assert result.distance == pytest.approx(3.5)
        assert [s.id for s in result.path] == ["A", "B", "C"]

    def test_unweighted_chain(self, chain):
        result = chain.distance("A", "C", "unweighted")
        assert result.distance == 2
        assert isinstance(result.distance, int)
        assert [s.id for s in result.path] == ["A", "B", "C"]

    def test_path_steps_carry_outgoing_edge(self, chain):
        first, middle, last = chain.distance("A", "C").path
        assert first.edge_weight == 1.0
        assert [r.type for r in first.relationships] == [RelationshipType.SAME_CLUB]
        assert first.relationships[0].evidence == ("Nemo Rangers",)
        assert middle.edge_weight == pytest.approx(0.4)
        assert [r.type for r in middle.relationships] == [RelationshipType.PROXIMITY]
        assert last.edge_weight is None and last.relationships == ()
        assert "edgeWeight" not in last.to_dict()

    def test_same_node(self, chain):
        for mode in DistanceMode:
            result = chain.distance("B", "B", mode)
            assert result.distance == 0
            assert [s.id for s in result.path] == ["B"]

    def test_unreachable(self, chain):
        chain.store.insert(make_article("Z", clubs=["Corofin"], county="Galway"))
        result = chain.distance("A", "Z")
        assert math.isinf(result.distance)
        assert result.path == []
        assert not result.reachable

    def test_unknown_ids(self, chain):
        with pytest.raises(NotFoundError):
            chain.distance("missing", "A")
        with pytest.raises(NotFoundError):
            chain.distance("A", "missing")

    def test_weighted_prefers_strong_chain(self, diamond):
        weighted = diamond.distance("A", "D", DistanceMode.WEIGHTED)
        assert weighted.distance == pytest.approx(2.0)
        assert [s.id for s in weighted.path] == ["A", "B", "D"]

        hops = diamond.distance("A", "D", DistanceMode.UNWEIGHTED)
        assert hops.distance == 1
        assert [s.id for s in hops.path] == ["A", "D"]

    def test_invalid_mode(self, chain):
        with pytest.raises(ValueError):
            chain.distance("A", "C", "bogus")


class TestEdgeCost:
    def test_cost_is_inverse_weight(self, chain):
        assert chain.edge_cost(Edge("a", "b", (), 1.0)) == 1.0
        assert chain.edge_cost(Edge("a", "b", (), 0.4)) == pytest.approx(2.5)

    def test_cost_floor(self, chain):
        assert chain.edge_cost(Edge("a", "b", (), 0.01)) == pytest.approx(10.0)
        engine = GraphQueryEngine(chain.store, min_edge_weight=0.5)
        assert engine.edge_cost(Edge("a", "b", (), 0.4)) == pytest.approx(2.0)


class TestWithinDistance:
    def test_weighted_bound_excludes_far_nodes(self, chain):
        grouped = chain.within_distance("A", 2, DistanceMode.WEIGHTED)
        assert list(grouped) == [1.0]
        (b,) = grouped[1.0]
        assert b.id == "B" and b.weight == 1.0

    def test_weighted_includes_fractional_distance(self, chain):
        grouped = chain.within_distance("A", 4, DistanceMode.WEIGHTED)
        assert [k for k in grouped] == [1.0, pytest.approx(3.5)]
        (c,) = grouped[list(grouped)[1]]
        assert c.id == "C"
        # evidence of the last hop on the shortest path
        assert c.weight == pytest.approx(0.4)
        assert [r.type for r in c.relationships] == [RelationshipType.PROXIMITY]

    def test_unweighted_groups_by_hops(self, chain):
        grouped = chain.within_distance("A", 2, DistanceMode.UNWEIGHTED)
        assert {k: [r.id for r in v] for k, v in grouped.items()} == {1: ["B"], 2: ["C"]}

    def test_source_excluded(self, chain):
        grouped = chain.within_distance("B", 10, DistanceMode.UNWEIGHTED)
        ids = [r.id for rs in grouped.values() for r in rs]
        assert sorted(ids) == ["A", "C"]

    def test_unknown_source(self, chain):
        with pytest.raises(NotFoundError):
            chain.within_distance("missing", 2)

    def test_isolated_source(self, chain):
        chain.store.insert(make_article("Z", clubs=["Corofin"], county="Galway"))
        assert chain.within_distance("Z", 5) == {}


class TestShortestPathTree:
    def test_tree_has_predecessors(self, chain):
        tree = chain.shortest_path_tree("A", DistanceMode.WEIGHTED)
        assert tree["A"] == (0.0, None)
        assert tree["B"] == (1.0, "A")
        assert tree["C"][1] == "B"


class TestInconsistentGraph:
    """A reader whose adjacency and edge lookup disagree is reported, not masked."""

    class _NoEdgeLookup:
        def __init__(self, inner):
            self._inner = inner

        def __getattr__(self, name):
            return getattr(self._inner, name)

        def edge(self, a, b):
            return None

    class _Store:
        def __init__(self, reader):
            self._reader = reader

        def snapshot(self):
            return self._reader

    @pytest.fixture
    def broken(self, chain):
        return GraphQueryEngine(self._Store(self._NoEdgeLookup(chain.store.snapshot())))

    def test_distance_raises_graph_error(self, broken):
        with pytest.raises(GraphError) as exc:
            broken.distance("A", "C")
        assert not isinstance(exc.value, NotFoundError)
        assert "No edge between A and B" in str(exc.value)

    def test_within_distance_raises_graph_error(self, broken):
        with pytest.raises(GraphError):
            broken.within_distance("A", 5)
