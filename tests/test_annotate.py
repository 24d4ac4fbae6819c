"""
Tests for Graph Annotation
==========================
"""

import networkx as nx
import pytest

from rollway.core.schema import ClassifierConfig, PriorityBand
from rollway.graph.annotate import (
    ACCESS_ATTR,
    BLOCKED_ATTR,
    PRIORITY_ATTR,
    RELATION_BONUS_ATTR,
    SPEED_ATTR,
    annotate_graph,
    tags_from_data,
)
from rollway.profile.relation import RelationBonusLedger
from rollway.profile.wheelchair import WheelchairProfile


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def osm_graph() -> nx.MultiDiGraph:
    """
    A small OSMnx-shaped graph:

        1 --residential-- 2 --steps-- 3
        |                 |
      footway           ferry
        |                 |
        4                 5 (ford node)
    """
    G = nx.MultiDiGraph()
    G.add_node(1, x=0.0, y=1.0)
    G.add_node(2, x=1.0, y=1.0, barrier="gate")
    G.add_node(3, x=2.0, y=1.0, barrier="fence")
    G.add_node(4, x=0.0, y=0.0, highway="crossing")
    G.add_node(5, x=1.0, y=0.0, ford="yes")

    G.add_edge(1, 2, osmid=10, highway="residential", length=100.0)
    G.add_edge(2, 3, osmid=11, highway="steps", length=10.0)
    G.add_edge(1, 4, osmid=[12, 13], highway="footway", footway="crossing", length=20.0)
    G.add_edge(2, 5, osmid=14, route="ferry", length=500.0)
    return G


# =============================================================================
# Tests
# =============================================================================

class TestTagsFromData:
    def test_drops_graph_attributes(self):
        tags = tags_from_data({"osmid": 1, "length": 5.0, "x": 1.0, "highway": "path"})
        assert tags.to_dict() == {"highway": "path"}
        assert tags.osm_id == 1


class TestAnnotateGraph:
    def test_edges_annotated_in_place(self, osm_graph):
        G, counts = annotate_graph(osm_graph)

        assert G is osm_graph
        residential = G.edges[1, 2, 0]
        assert residential[ACCESS_ATTR] == "routable"
        assert residential[SPEED_ATTR] == pytest.approx(3.6)
        assert residential[PRIORITY_ATTR] == int(PriorityBand.REACH_DEST)

        steps = G.edges[2, 3, 0]
        assert steps[ACCESS_ATTR] == "excluded"
        assert steps[SPEED_ATTR] is None

        ferry = G.edges[2, 5, 0]
        assert ferry[ACCESS_ATTR] == "ferry"
        assert ferry[PRIORITY_ATTR] is None

        assert counts == {"routable": 2, "ferry": 1, "excluded": 1, "blocked_nodes": 2}

    def test_nodes_annotated(self, osm_graph):
        G, _ = annotate_graph(osm_graph)
        assert G.nodes[2][BLOCKED_ATTR] is False
        assert G.nodes[3][BLOCKED_ATTR] is True
        assert G.nodes[4][BLOCKED_ATTR] is False
        assert G.nodes[5][BLOCKED_ATTR] is True

    def test_drop_excluded_returns_copy(self, osm_graph):
        G, _ = annotate_graph(osm_graph, drop_excluded=True)

        assert G is not osm_graph
        assert not G.has_edge(2, 3)
        assert osm_graph.has_edge(2, 3)
        assert ACCESS_ATTR not in osm_graph.edges[1, 2, 0]

    def test_relation_bonus(self, osm_graph):
        ledger = RelationBonusLedger()
        ledger.record(10, 5)
        ledger.record(13, -5)
        ledger.record(13, 5)

        G, _ = annotate_graph(osm_graph, relation_ledger=ledger)

        assert G.edges[1, 2, 0][RELATION_BONUS_ATTR] == 5
        assert G.edges[1, 4, 0][RELATION_BONUS_ATTR] == 5
        assert G.edges[2, 5, 0][RELATION_BONUS_ATTR] == 0

    def test_custom_profile(self, osm_graph):
        profile = WheelchairProfile(config=ClassifierConfig(block_fords=False))
        G, counts = annotate_graph(osm_graph, profile)
        assert G.nodes[5][BLOCKED_ATTR] is False
        assert counts["blocked_nodes"] == 1

    def test_simple_graph(self):
        G = nx.Graph()
        G.add_edge("a", "b", highway="trunk", sidewalk="no")
        _, counts = annotate_graph(G)
        assert counts["excluded"] == 1
        assert G.edges["a", "b"][ACCESS_ATTR] == "excluded"

    def test_rejects_non_graph(self):
        with pytest.raises(TypeError):
            annotate_graph({"edges": []})
