"""
Graph Annotation
================

Applies a WheelchairProfile to a NetworkX graph whose edges and nodes carry
raw OSM tags as attributes (the shape OSMnx produces).

Edges receive ``wheelchair_access``, ``wheelchair_speed``,
``wheelchair_priority``, ``wheelchair_priority_factor`` and
``wheelchair_relation_bonus``; nodes receive ``wheelchair_blocked``.
"""

from collections import Counter
import logging
from typing import Any, Optional

import networkx as nx

from rollway.core.schema import AccessVerdict
from rollway.core.tags import TagBag
from rollway.profile.relation import RelationBonusLedger
from rollway.profile.wheelchair import WheelchairProfile


logger = logging.getLogger(__name__)

ACCESS_ATTR = "wheelchair_access"
SPEED_ATTR = "wheelchair_speed"
PRIORITY_ATTR = "wheelchair_priority"
PRIORITY_FACTOR_ATTR = "wheelchair_priority_factor"
RELATION_BONUS_ATTR = "wheelchair_relation_bonus"
BLOCKED_ATTR = "wheelchair_blocked"

# attributes added by OSMnx or by us that are not OSM tags
NON_TAG_ATTRS = frozenset({
    "osmid", "length", "geometry", "x", "y", "street_count", "reversed",
    "travel_time", "speed_kph", "weight",
    ACCESS_ATTR, SPEED_ATTR, PRIORITY_ATTR, PRIORITY_FACTOR_ATTR,
    RELATION_BONUS_ATTR, BLOCKED_ATTR,
})


def tags_from_data(data: dict[str, Any]) -> TagBag:
    """Build a TagBag from edge or node attribute data."""
    tags = {key: value for key, value in data.items() if key not in NON_TAG_ATTRS}
    return TagBag(tags, osm_id=data.get("osmid"))


def _relation_bonus(data: dict[str, Any], ledger: Optional[RelationBonusLedger]) -> int:
    if ledger is None:
        return 0
    osmid = data.get("osmid")
    way_ids = osmid if isinstance(osmid, (list, tuple, set)) else [osmid]
    bonuses = [ledger.get(way_id) for way_id in way_ids if way_id in ledger]
    return max(bonuses) if bonuses else 0


def annotate_graph(
    graph: nx.Graph,
    profile: Optional[WheelchairProfile] = None,
    relation_ledger: Optional[RelationBonusLedger] = None,
    drop_excluded: bool = False,
) -> tuple[nx.Graph, dict[str, int]]:
    """
    Classify every edge and node of ``graph``.

    Parameters
    ----------
    graph : nx.Graph
        Any NetworkX graph; MultiDiGraphs from OSMnx are the usual input.
    profile : WheelchairProfile, optional
        Profile to apply; a default profile is built if omitted.
    relation_ledger : RelationBonusLedger, optional
        Relation bonuses keyed by way ``osmid``.
    drop_excluded : bool
        If True, annotate and return a copy without excluded edges; the
        input graph is left untouched. Otherwise annotate in place.

    Returns
    -------
    tuple[nx.Graph, dict[str, int]]
        The annotated graph and counts per verdict plus blocked nodes.

    Raises
    ------
    TypeError
        If ``graph`` is not a NetworkX graph.
    """
    if not isinstance(graph, nx.Graph):
        raise TypeError(f"Expected a networkx graph, got {type(graph).__name__}")

    profile = profile or WheelchairProfile()
    G = graph.copy() if drop_excluded else graph

    counts: Counter[str] = Counter({verdict.value: 0 for verdict in AccessVerdict})
    excluded_edges = []

    edge_iter = G.edges(keys=True, data=True) if G.is_multigraph() else G.edges(data=True)
    for *edge, data in edge_iter:
        result = profile.handle_way(tags_from_data(data), _relation_bonus(data, relation_ledger))
        counts[result.verdict.value] += 1

        data[ACCESS_ATTR] = result.verdict.value
        data[SPEED_ATTR] = result.speed
        data[PRIORITY_ATTR] = int(result.priority) if result.priority is not None else None
        data[PRIORITY_FACTOR_ATTR] = result.priority.factor if result.priority is not None else None
        data[RELATION_BONUS_ATTR] = result.relation_bonus

        if result.verdict.is_excluded:
            excluded_edges.append(tuple(edge))

    blocked = 0
    for _, data in G.nodes(data=True):
        is_blocked = profile.classify_node(tags_from_data(data))
        data[BLOCKED_ATTR] = is_blocked
        blocked += int(is_blocked)
    counts["blocked_nodes"] = blocked

    if drop_excluded:
        G.remove_edges_from(excluded_edges)

    logger.info(
        "Annotated %d edges (%d routable, %d ferry, %d excluded), %d blocked nodes",
        sum(counts[v.value] for v in AccessVerdict),
        counts[AccessVerdict.ROUTABLE.value],
        counts[AccessVerdict.FERRY.value],
        counts[AccessVerdict.EXCLUDED.value],
        blocked,
    )
    return G, dict(counts)
