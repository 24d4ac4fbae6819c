"""
Speed Adjuster
==============

Derives a wheelchair travel speed from way tags.

Starting from the mean speed, multipliers are applied in a fixed order
(each compounds on the previous result) and the outcome is clamped to
``[min_speed, max_speed]``. Highways without a confirmed sidewalk are
slowed down, pedestrian infrastructure and good surfaces are sped up.
"""

from rollway.core.lookups import DurationFerrySpeedLookup, FerrySpeedLookup
from rollway.core.schema import AccessVerdict, ClassifierConfig
from rollway.core.tables import (
    DEFAULT_PEDESTRIAN_DEFAULTS,
    DEFAULT_WHEELCHAIR_TABLES,
    PedestrianDefaults,
    TagCategoryTables,
)
from rollway.core.tags import TagBag


ASSUMED_WITHOUT_SIDEWALK_FACTOR = 0.8
URBAN_PEDESTRIAN_FACTOR = 1.25
CROSSING_FACTOR = 2.0
OTHER_WITHOUT_SIDEWALK_FACTOR = 0.9
RESTRICTED_WITH_INTENT_FACTOR = 1.25
PROBLEMATIC_SURFACE_FACTOR = 0.1
PREFERRED_SURFACE_FACTOR = 3.0


class SpeedAdjuster:
    """
    Computes the speed of a non-excluded way.

    Ferries are delegated to a FerrySpeedLookup.
    """

    def __init__(
        self,
        tables: TagCategoryTables | None = None,
        pedestrian: PedestrianDefaults | None = None,
        config: ClassifierConfig | None = None,
        ferry_lookup: FerrySpeedLookup | None = None,
    ):
        self.tables = tables or DEFAULT_WHEELCHAIR_TABLES
        self.pedestrian = pedestrian or DEFAULT_PEDESTRIAN_DEFAULTS
        self.config = config or ClassifierConfig()
        self.ferry_lookup = ferry_lookup or DurationFerrySpeedLookup(
            min_speed=self.config.ferry_min_speed,
            max_speed=self.config.ferry_max_speed,
        )

    def adjust_speed(self, tags: TagBag, verdict: AccessVerdict) -> float:
        """
        Return the speed for a way.

        Raises
        ------
        ValueError
            If called for an excluded way.
        """
        tags = TagBag.of(tags)
        if verdict.is_excluded:
            raise ValueError("Excluded ways have no speed")
        if verdict.is_ferry:
            return self.ferry_lookup.ferry_speed(tags)
        return self.clamp(self.raw_speed(tags))

    def raw_speed(self, tags: TagBag) -> float:
        """Apply every multiplier to the mean speed, without clamping."""
        t = self.tables
        intended = self.pedestrian.intended_values
        has_sidewalk = tags.has_tag_with_value("sidewalk", self.pedestrian.usable_sidewalk_values)
        speed = self.config.mean_speed

        def highway_in(values) -> bool:
            return tags.has_tag_with_value("highway", values)

        if highway_in(t.assumed_accessible_highways) and not has_sidewalk:
            speed *= ASSUMED_WITHOUT_SIDEWALK_FACTOR

        if highway_in(t.fully_accessible_highways):
            # residential takes 0.9 here, not 1.25: 4 * 0.9 = 3.6 without a sidewalk
            if highway_in(t.urban_pedestrian_highways):
                speed *= URBAN_PEDESTRIAN_FACTOR
                if tags.has_tag_with_value("footway", "crossing") or highway_in("crossing"):
                    speed *= CROSSING_FACTOR
            elif not has_sidewalk:
                speed *= OTHER_WITHOUT_SIDEWALK_FACTOR

        if highway_in(t.restricted_highways) and (
            tags.has_tag_with_value("foot", intended)
            or tags.has_tag_with_value("wheelchair", intended)
        ):
            speed *= RESTRICTED_WITH_INTENT_FACTOR
            if (
                tags.has_tag_with_value("cycleway", "crossing")
                or tags.has_tag_with_value("bridleway", "crossing")
                or highway_in("crossing")
            ):
                speed *= CROSSING_FACTOR

        # penalty before bonus
        if (
            tags.has_tag_with_value("surface", t.problematic_surfaces)
            or tags.has_tag_with_value("smoothness", t.problematic_smoothnesses)
            or tags.has_tag_with_value("tracktype", t.problematic_tracktypes)
        ):
            speed *= PROBLEMATIC_SURFACE_FACTOR

        if (
            tags.has_tag_with_value("surface", t.preferred_surfaces)
            or tags.has_tag_with_value("smoothness", t.preferred_smoothnesses)
        ):
            speed *= PREFERRED_SURFACE_FACTOR

        return speed

    def clamp(self, speed: float) -> float:
        return min(max(speed, self.config.min_speed), self.config.max_speed)
