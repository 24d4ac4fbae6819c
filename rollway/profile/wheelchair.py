"""
Wheelchair Profile
==================

Composes the access classifier, speed adjuster, priority scorer, node rule
and relation signal over one shared set of category tables.

Typical use by an import pipeline:

    profile = WheelchairProfile()
    result = profile.handle_way(way_tags, relation_bonus=ledger.get(way_id))
    if result.is_accessible:
        store(result.speed, result.priority)
"""

from pathlib import Path
from typing import Optional

from rollway.core.lookups import (
    AttachedSidewalkEvidence,
    FerrySpeedLookup,
    MaxSpeedLookup,
    PedestrianizedWayEvidence,
)
from rollway.core.schema import (
    AccessVerdict,
    ClassifierConfig,
    EdgeClassification,
    NodeClassification,
    PriorityBand,
)
from rollway.core.tables import (
    DEFAULT_PEDESTRIAN_DEFAULTS,
    DEFAULT_WHEELCHAIR_TABLES,
    PedestrianDefaults,
    TagCategoryTables,
)
from rollway.core.tags import TagBag
from rollway.profile.access import AccessClassifier
from rollway.profile.barriers import NodeAccessRule
from rollway.profile.priority import PriorityScorer
from rollway.profile.relation import RelationSignal
from rollway.profile.speed import SpeedAdjuster


class WheelchairProfile:
    """
    Wheelchair classifier for ways, nodes and route relations.

    Parameters
    ----------
    config : ClassifierConfig, optional
        Profile configuration; defaults are used if omitted.
    tables : TagCategoryTables, optional
        Wheelchair category tables.
    pedestrian : PedestrianDefaults, optional
        Generic pedestrian access vocabulary.
    ferry_lookup, max_speed_lookup, sidewalk_evidence, pedestrian_evidence
        Optional replacements for the default tag lookups.
    """

    name = "wheelchair"
    version = 2

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        tables: Optional[TagCategoryTables] = None,
        pedestrian: Optional[PedestrianDefaults] = None,
        ferry_lookup: Optional[FerrySpeedLookup] = None,
        max_speed_lookup: Optional[MaxSpeedLookup] = None,
        sidewalk_evidence: Optional[AttachedSidewalkEvidence] = None,
        pedestrian_evidence: Optional[PedestrianizedWayEvidence] = None,
    ):
        self.config = config or ClassifierConfig()
        self.tables = tables or DEFAULT_WHEELCHAIR_TABLES
        self.pedestrian = pedestrian or DEFAULT_PEDESTRIAN_DEFAULTS

        self.access = AccessClassifier(self.tables, self.pedestrian, self.config)
        self.speed = SpeedAdjuster(self.tables, self.pedestrian, self.config, ferry_lookup)
        self.priority = PriorityScorer(
            self.tables,
            self.pedestrian,
            max_speed_lookup=max_speed_lookup,
            sidewalk_evidence=sidewalk_evidence,
            pedestrian_evidence=pedestrian_evidence,
        )
        self.nodes = NodeAccessRule(self.tables, self.pedestrian, self.config)
        self.relations = RelationSignal(self.config)

    @classmethod
    def from_json_files(
        cls,
        config_path: Optional[Path | str] = None,
        tables_path: Optional[Path | str] = None,
    ) -> "WheelchairProfile":
        """Build a profile from optional JSON config and table override files."""
        config = ClassifierConfig.from_json_file(config_path) if config_path else None
        tables = TagCategoryTables.from_json_file(tables_path) if tables_path else None
        return cls(config=config, tables=tables)

    # ------------------------------------------------------------------
    # Ways
    # ------------------------------------------------------------------

    def classify_way(self, tags: TagBag) -> AccessVerdict:
        return self.access.classify(TagBag.of(tags))

    def adjust_speed(self, tags: TagBag, verdict: AccessVerdict) -> float:
        return self.speed.adjust_speed(TagBag.of(tags), verdict)

    def score_priority(self, tags: TagBag, relation_bonus: int = 0) -> PriorityBand:
        return self.priority.score_priority(TagBag.of(tags), relation_bonus)

    def handle_way(self, tags: TagBag, relation_bonus: int = 0) -> EdgeClassification:
        """
        Classify a way completely.

        Excluded ways stop after the access decision. Ferries get a ferry
        speed and no priority band. Routable ways get both.
        """
        tags = TagBag.of(tags)
        verdict, rule = self.access.classify_with_rule(tags)
        if verdict.is_excluded:
            return EdgeClassification(verdict=verdict, relation_bonus=relation_bonus, rule=rule)

        speed = self.speed.adjust_speed(tags, verdict)
        priority = None
        if not verdict.is_ferry:
            priority = self.priority.score_priority(tags, relation_bonus)

        return EdgeClassification(
            verdict=verdict,
            speed=speed,
            priority=priority,
            relation_bonus=relation_bonus,
            rule=rule,
        )

    # ------------------------------------------------------------------
    # Nodes and relations
    # ------------------------------------------------------------------

    def classify_node(self, tags: TagBag) -> bool:
        """Return True if the node blocks traversal."""
        return self.nodes.classify_node(tags)

    def handle_node(self, tags: TagBag) -> NodeClassification:
        return self.nodes.evaluate(tags)

    def score_relation(self, tags: TagBag) -> int:
        return self.relations.score_relation(tags)

    def handle_relation(self, previous: Optional[int], tags: TagBag) -> int:
        return self.relations.handle_relation(previous, tags)

    def __repr__(self) -> str:
        return f"WheelchairProfile(name={self.name!r}, version={self.version})"
