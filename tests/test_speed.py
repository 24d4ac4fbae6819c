"""
Tests for the Speed Adjuster
============================

Multiplier order, clamping and ferry delegation.
"""

import itertools

import pytest

from rollway.core.lookups import DurationFerrySpeedLookup
from rollway.core.schema import AccessVerdict, ClassifierConfig
from rollway.core.tags import TagBag
from rollway.profile.speed import SpeedAdjuster


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def adjuster() -> SpeedAdjuster:
    return SpeedAdjuster()


def way_speed(adjuster: SpeedAdjuster, **tags) -> float:
    return adjuster.adjust_speed(TagBag(tags), AccessVerdict.ROUTABLE)


# =============================================================================
# Highway Adjustments
# =============================================================================

class TestHighwayAdjustments:
    """Per-tier multipliers applied to the mean speed of 4."""

    def test_residential_without_sidewalk(self, adjuster):
        assert way_speed(adjuster, highway="residential") == pytest.approx(3.6)

    def test_residential_with_sidewalk(self, adjuster):
        assert way_speed(adjuster, highway="residential", sidewalk="both") == pytest.approx(4.0)

    @pytest.mark.parametrize("highway", ["footway", "pedestrian", "living_street"])
    def test_urban_pedestrian_bonus(self, adjuster, highway):
        assert way_speed(adjuster, highway=highway) == pytest.approx(5.0)

    def test_footway_crossing(self, adjuster):
        assert way_speed(adjuster, highway="footway", footway="crossing") == pytest.approx(10.0)

    @pytest.mark.parametrize("highway", ["unclassified", "service", "tertiary", "road"])
    def test_other_fully_accessible_without_sidewalk(self, adjuster, highway):
        assert way_speed(adjuster, highway=highway) == pytest.approx(3.6)

    def test_assumed_without_sidewalk(self, adjuster):
        assert way_speed(adjuster, highway="primary") == pytest.approx(3.2)

    def test_assumed_with_sidewalk(self, adjuster):
        assert way_speed(adjuster, highway="secondary", sidewalk="left") == pytest.approx(4.0)

    def test_limited_unchanged(self, adjuster):
        assert way_speed(adjuster, highway="path") == pytest.approx(4.0)

    def test_restricted_without_intent_unchanged(self, adjuster):
        assert way_speed(adjuster, highway="cycleway") == pytest.approx(4.0)

    @pytest.mark.parametrize("key", ["foot", "wheelchair"])
    def test_restricted_with_intent(self, adjuster, key):
        assert way_speed(adjuster, highway="cycleway", **{key: "yes"}) == pytest.approx(5.0)

    @pytest.mark.parametrize("crossing_key", ["cycleway", "bridleway"])
    def test_restricted_crossing(self, adjuster, crossing_key):
        tags = {"highway": "cycleway", "foot": "designated", crossing_key: "crossing"}
        assert way_speed(adjuster, **tags) == pytest.approx(10.0)

    def test_no_highway_uses_mean_speed(self, adjuster):
        assert way_speed(adjuster, railway="platform") == pytest.approx(4.0)

    def test_custom_mean_speed(self):
        adjuster = SpeedAdjuster(config=ClassifierConfig(mean_speed=2.0))
        assert way_speed(adjuster, highway="residential") == pytest.approx(1.8)


# =============================================================================
# Surface Adjustments
# =============================================================================

class TestSurfaceAdjustments:
    """Problematic surfaces slow down, preferred surfaces speed up."""

    def test_problematic_surface_floored(self, adjuster):
        assert way_speed(adjuster, highway="residential", surface="cobblestone") == pytest.approx(1.0)

    def test_problematic_raw_value(self, adjuster):
        assert adjuster.raw_speed(TagBag({"highway": "path", "tracktype": "grade2"})) == pytest.approx(0.4)

    def test_preferred_surface_capped(self, adjuster):
        assert way_speed(adjuster, highway="footway", surface="asphalt") == pytest.approx(10.0)

    def test_preferred_smoothness(self, adjuster):
        assert way_speed(adjuster, highway="path", smoothness="excellent") == pytest.approx(10.0)

    def test_preferred_surface_on_slow_way(self, adjuster):
        # 4 * 0.8 * 3
        assert way_speed(adjuster, highway="primary", surface="paved") == pytest.approx(9.6)

    def test_penalty_then_bonus(self, adjuster):
        """Contradictory tags: the penalty is applied first, then the bonus, then the clamp."""
        tags = TagBag({"highway": "footway", "surface": "gravel", "smoothness": "excellent"})
        assert adjuster.raw_speed(tags) == pytest.approx(4 * 1.25 * 0.1 * 3.0)
        assert adjuster.adjust_speed(tags, AccessVerdict.ROUTABLE) == pytest.approx(1.5)

    def test_penalty_then_bonus_with_sidewalk(self, adjuster):
        tags = TagBag({
            "highway": "residential", "sidewalk": "both",
            "surface": "sett", "smoothness": "excellent",
        })
        assert adjuster.adjust_speed(tags, AccessVerdict.ROUTABLE) == pytest.approx(1.2)


# =============================================================================
# Bounds
# =============================================================================

class TestSpeedBounds:
    """Every non-ferry speed lands in [1, 10]."""

    HIGHWAYS = [None, "footway", "residential", "primary", "trunk", "cycleway", "path", "unknown"]
    SURFACES = [None, "asphalt", "gravel", "paving_stones"]
    SMOOTHNESSES = [None, "excellent", "intermediate"]
    EXTRAS = [{}, {"sidewalk": "both"}, {"footway": "crossing", "foot": "yes"}, {"tracktype": "grade3"}]

    @pytest.mark.parametrize(
        "highway,surface,smoothness,extra",
        list(itertools.product(HIGHWAYS, SURFACES, SMOOTHNESSES, EXTRAS)),
    )
    def test_within_bounds(self, adjuster, highway, surface, smoothness, extra):
        tags = dict(extra)
        for key, value in (("highway", highway), ("surface", surface), ("smoothness", smoothness)):
            if value is not None:
                tags[key] = value
        speed = adjuster.adjust_speed(TagBag(tags), AccessVerdict.ROUTABLE)
        assert 1.0 <= speed <= 10.0


# =============================================================================
# Ferries and Excluded Ways
# =============================================================================

class TestFerrySpeed:
    def test_ferry_uses_lookup(self, adjuster):
        speed = adjuster.adjust_speed(TagBag({"route": "ferry"}), AccessVerdict.FERRY)
        assert speed == pytest.approx(5.0)

    def test_ferry_from_duration_and_distance(self, adjuster):
        tags = TagBag({"route": "ferry", "duration:seconds": "1800", "estimated_distance": "7000"})
        assert adjuster.adjust_speed(tags, AccessVerdict.FERRY) == pytest.approx(10.0)

    def test_ferry_custom_lookup(self):
        class FixedFerry:
            def ferry_speed(self, tags):
                return 12.5

        adjuster = SpeedAdjuster(ferry_lookup=FixedFerry())
        assert adjuster.adjust_speed(TagBag({"route": "ferry"}), AccessVerdict.FERRY) == 12.5

    def test_ferry_bounds_follow_config(self):
        adjuster = SpeedAdjuster(config=ClassifierConfig(ferry_max_speed=8.0))
        assert isinstance(adjuster.ferry_lookup, DurationFerrySpeedLookup)
        tags = TagBag({"route": "ferry", "duration:seconds": "600"})
        assert adjuster.adjust_speed(tags, AccessVerdict.FERRY) == pytest.approx(8.0)

    def test_excluded_way_has_no_speed(self, adjuster):
        with pytest.raises(ValueError):
            adjuster.adjust_speed(TagBag({"highway": "steps"}), AccessVerdict.EXCLUDED)
