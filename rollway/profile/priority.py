"""
Priority Scorer
===============

Scores how much a wheelchair user should prefer a way.

Positive and negative signals are counted independently, the difference is
mapped to a PriorityBand through fixed thresholds. The relation bonus is
accepted alongside but kept out of the score: it travels through its own
channel (see ``rollway.profile.relation``).
"""

from dataclasses import dataclass

from rollway.core.lookups import (
    AttachedSidewalkEvidence,
    MaxSpeedLookup,
    PedestrianizedWayEvidence,
    PedestrianTagEvidence,
    SidewalkTagEvidence,
    TagMaxSpeedLookup,
)
from rollway.core.schema import PriorityBand
from rollway.core.tables import (
    DEFAULT_PEDESTRIAN_DEFAULTS,
    DEFAULT_WHEELCHAIR_TABLES,
    PedestrianDefaults,
    TagCategoryTables,
)
from rollway.core.tags import TagBag


TRUNK_HIGHWAYS = frozenset({"trunk", "trunk_link"})
PRIMARY_HIGHWAYS = frozenset({"primary", "primary_link"})


@dataclass(frozen=True)
class FeatureScore:
    """Positive and negative signal counts for one way."""

    positive: int = 0
    negative: int = 0

    @property
    def score(self) -> int:
        return self.positive - self.negative

    @property
    def band(self) -> PriorityBand:
        return PriorityBand.from_score(self.score)


class PriorityScorer:
    """
    Accumulates preference signals for a way.

    Example
    -------
    >>> scorer = PriorityScorer()
    >>> scorer.score_priority(TagBag({"highway": "residential"}), 0)
    <PriorityBand.REACH_DEST: 2>
    """

    def __init__(
        self,
        tables: TagCategoryTables | None = None,
        pedestrian: PedestrianDefaults | None = None,
        max_speed_lookup: MaxSpeedLookup | None = None,
        sidewalk_evidence: AttachedSidewalkEvidence | None = None,
        pedestrian_evidence: PedestrianizedWayEvidence | None = None,
    ):
        self.tables = tables or DEFAULT_WHEELCHAIR_TABLES
        self.pedestrian = pedestrian or DEFAULT_PEDESTRIAN_DEFAULTS
        self.max_speed_lookup = max_speed_lookup or TagMaxSpeedLookup()
        self.sidewalk_evidence = sidewalk_evidence or SidewalkTagEvidence()
        self.pedestrian_evidence = pedestrian_evidence or PedestrianTagEvidence()

    def score_priority(self, tags: TagBag, relation_bonus: int = 0) -> PriorityBand:
        """
        Return the priority band for a way.

        ``relation_bonus`` is not folded into the score; callers store it
        separately next to the band.
        """
        return self.features(tags).band

    def features(self, tags: TagBag) -> FeatureScore:
        """Count the positive and negative signals of a way."""
        tags = TagBag.of(tags)
        t = self.tables
        p = self.pedestrian
        positive = 0
        negative = 0

        max_speed = self.max_speed_lookup.max_speed(tags)
        if max_speed > 50:
            negative += 1
            if max_speed > 60:
                negative += 1
                if max_speed > 80:
                    negative += 1
        if 0 < max_speed <= 20:
            positive += 1

        def highway_in(values) -> bool:
            return tags.has_tag_with_value("highway", values)

        if highway_in(t.assumed_accessible_highways):
            if highway_in(TRUNK_HIGHWAYS):
                negative += 5
            elif highway_in(PRIMARY_HIGHWAYS):
                negative += 3
            else:
                negative += 1

        # foot features count once
        foot_evaluated = False
        if highway_in(t.fully_accessible_highways):
            if highway_in(t.urban_pedestrian_highways):
                positive += 5
                foot_evaluated = True
            else:
                negative += 1

        if not foot_evaluated:
            if tags.has_tag_with_value("sidewalk", p.usable_sidewalk_values):
                positive += 5
            elif tags.has_tag_with_value("foot", "designated"):
                positive += 5
            elif tags.has_tag_with_value("foot", p.intended_values) or tags.has_tag_with_value(
                "bicycle", "designated"
            ):
                positive += 2

        if not self.sidewalk_evidence.has_sidewalk_info(tags) and not (
            self.pedestrian_evidence.is_pedestrianized(tags)
        ):
            negative += 2

        return FeatureScore(positive=positive, negative=negative)
