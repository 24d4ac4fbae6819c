"""
Node Access Rule
================

Decides whether a tagged node (barrier, ford) blocks wheelchair traversal.
"""

from rollway.core.schema import ClassifierConfig, NodeClassification
from rollway.core.tables import (
    DEFAULT_PEDESTRIAN_DEFAULTS,
    DEFAULT_WHEELCHAIR_TABLES,
    PedestrianDefaults,
    TagCategoryTables,
)
from rollway.core.tags import TagBag


class NodeAccessRule:
    """
    Barrier and ford handling for nodes.

    Evaluation order:
    1. Absolute and inaccessible barriers always block.
    2. Fords block when ford blocking is on and the node is not explicitly
       wheelchair accessible, even if they are also a potential barrier.
    3. Potential barriers (gates, bollards, ...) pass when an unlocked
       restriction key is intended, block when one is restricted, and
       otherwise follow ``block_potential_barriers``.
    4. Remaining fords block only when access is explicitly restricted.
    """

    def __init__(
        self,
        tables: TagCategoryTables | None = None,
        pedestrian: PedestrianDefaults | None = None,
        config: ClassifierConfig | None = None,
    ):
        self.tables = tables or DEFAULT_WHEELCHAIR_TABLES
        self.pedestrian = pedestrian or DEFAULT_PEDESTRIAN_DEFAULTS
        self.config = config or ClassifierConfig()

    def classify_node(self, tags: TagBag) -> bool:
        """Return True if the node blocks traversal."""
        return self.evaluate(tags).blocked

    def evaluate(self, tags: TagBag) -> NodeClassification:
        tags = TagBag.of(tags)
        t = self.tables
        p = self.pedestrian

        barrier = tags.get("barrier")
        if tags.has_tag_with_value("barrier", t.blocking_barriers):
            return NodeClassification(blocked=True, reason="blocking_barrier", details={"barrier": barrier})

        is_ford = tags.has_tag_with_value("highway", "ford") or tags.has_tag("ford")
        # overrides the potential barrier tier, foot=yes on a gate does not open a ford
        if (
            is_ford
            and self.config.block_fords
            and not tags.has_tag_with_value("wheelchair", p.intended_values)
        ):
            return NodeClassification(blocked=True, reason="ford")

        if tags.has_tag_with_value("barrier", t.potential_barriers):
            locked = tags.has_tag_with_value("locked", "yes")
            for key in p.restriction_keys:
                if not locked and tags.has_tag_with_value(key, p.intended_values):
                    return NodeClassification(blocked=False, reason="barrier_access_intended", details={"key": key})
                if tags.has_tag_with_value(key, p.restricted_values):
                    return NodeClassification(blocked=True, reason="barrier_access_restricted", details={"key": key})
            return NodeClassification(
                blocked=self.config.block_potential_barriers,
                reason="potential_barrier",
                details={"barrier": barrier},
            )

        if is_ford:
            if tags.has_any_tag_with_value(p.restriction_keys, p.restricted_values):
                return NodeClassification(blocked=True, reason="ford_access_restricted")
            return NodeClassification(blocked=False, reason="ford_passable")

        return NodeClassification(blocked=False)
