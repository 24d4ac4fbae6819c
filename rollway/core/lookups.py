"""
Tag Lookups
===========

Small collaborators the profile consults while scoring a way:

- MaxSpeedLookup: declared speed limit in km/h (0 when unknown)
- FerrySpeedLookup: speed for ways classified as ferries
- AttachedSidewalkEvidence: does the way describe an attached sidewalk?
- PedestrianizedWayEvidence: is the way built for pedestrians?

Each has a Protocol so callers can plug in their own implementation and a
default implementation working on plain OSM tags.
"""

import math
from typing import Protocol

from rollway.core.tags import TagBag


KMH_PER_MPH = 1.60934
KMH_PER_KNOT = 1.852

WALK_SPEED_KMH = 6.0
NO_LIMIT_SPEED_KMH = 140.0

UNKNOWN_DURATION_FERRY_SPEED = 5.0
SHORT_TRIP_FERRY_SPEED = 20.0
LONG_TRIP_FERRY_SPEED = 30.0
FERRY_WAITING_FACTOR = 1.4
SHORT_FERRY_DISTANCE_M = 300.0


class MaxSpeedLookup(Protocol):
    def max_speed(self, tags: TagBag) -> float: ...


class FerrySpeedLookup(Protocol):
    def ferry_speed(self, tags: TagBag) -> float: ...


class AttachedSidewalkEvidence(Protocol):
    def has_sidewalk_info(self, tags: TagBag) -> bool: ...


class PedestrianizedWayEvidence(Protocol):
    def is_pedestrianized(self, tags: TagBag) -> bool: ...


def parse_speed(value: str | None) -> float:
    """
    Parse an OSM speed value to km/h.

    Handles formats like "60", "60 km/h", "30 mph", "10 knots", "walk"
    and "none". Returns 0.0 for anything unparsable.
    """
    if not value:
        return 0.0

    speed_str = value.lower().strip()
    if speed_str == "walk":
        return WALK_SPEED_KMH
    if speed_str == "none":
        return NO_LIMIT_SPEED_KMH

    factor = 1.0
    if "mph" in speed_str:
        speed_str = speed_str.replace("mph", "")
        factor = KMH_PER_MPH
    elif "knots" in speed_str:
        speed_str = speed_str.replace("knots", "")
        factor = KMH_PER_KNOT
    speed_str = speed_str.replace("km/h", "").replace("kmh", "").strip()

    try:
        speed = float(speed_str) * factor
    except ValueError:
        return 0.0
    if not math.isfinite(speed) or speed <= 0:
        return 0.0
    return speed


class TagMaxSpeedLookup:
    """Reads ``maxspeed``, ``maxspeed:forward`` and ``maxspeed:backward``; the lowest valid value wins."""

    keys = ("maxspeed", "maxspeed:forward", "maxspeed:backward")

    def max_speed(self, tags: TagBag) -> float:
        speeds = [parse_speed(tags.get(key)) for key in self.keys]
        valid = [s for s in speeds if s > 0]
        return min(valid) if valid else 0.0


class DurationFerrySpeedLookup:
    """
    Estimates ferry speed from ``duration:seconds`` and ``estimated_distance``.

    The trip speed is slowed by a waiting factor of 1.4 and bounded to
    ``[min_speed, max_speed]``. Without a usable duration, very short
    trips get the minimum speed and everything else a penalty speed.
    """

    def __init__(self, min_speed: float = 0.5, max_speed: float = 15.0):
        self.min_speed = min_speed
        self.max_speed = max_speed

    def _bounded(self, speed: float) -> float:
        return min(max(speed, self.min_speed), self.max_speed)

    def ferry_speed(self, tags: TagBag) -> float:
        duration_s = _parse_float(tags.get("duration:seconds"))
        distance_m = _parse_float(tags.get("estimated_distance"))
        duration_h = duration_s / 3600.0

        if duration_h > 0 and distance_m > 0:
            trip_speed = (distance_m / 1000.0) / duration_h / FERRY_WAITING_FACTOR
            # durations given in months instead of minutes produce absurd speeds
            if trip_speed > 0.01:
                return self._bounded(float(round(trip_speed)))

        if duration_h == 0:
            if 0 < distance_m <= SHORT_FERRY_DISTANCE_M:
                return self.min_speed
            return self._bounded(UNKNOWN_DURATION_FERRY_SPEED)
        if duration_h > 1:
            return self._bounded(LONG_TRIP_FERRY_SPEED)
        return self._bounded(SHORT_TRIP_FERRY_SPEED)


class SidewalkTagEvidence:
    """A way has sidewalk info when a side is named in ``sidewalk`` or a ``sidewalk:<side>*`` key."""

    sides = ("left", "right", "both")

    def has_sidewalk_info(self, tags: TagBag) -> bool:
        if tags.has_tag_with_value("sidewalk", self.sides):
            return True
        return any(tags.keys_matching(f"sidewalk:{side}") for side in self.sides)


class PedestrianTagEvidence:
    """Recognises ways built for or explicitly opened to pedestrians."""

    pedestrian_highways = frozenset(
        {"living_street", "pedestrian", "footway", "path", "crossing", "track"}
    )
    platform_values = frozenset({"platform"})
    foot_values = frozenset({"yes", "designated"})

    def is_pedestrianized(self, tags: TagBag) -> bool:
        return (
            tags.has_tag_with_value("highway", self.pedestrian_highways)
            or tags.has_tag_with_value("public_transport", self.platform_values)
            or tags.has_tag_with_value("railway", self.platform_values)
            or tags.has_tag_with_value("foot", self.foot_values)
        )


def _parse_float(value: str | None) -> float:
    if not value:
        return 0.0
    try:
        parsed = float(value)
    except ValueError:
        return 0.0
    return parsed if math.isfinite(parsed) and parsed > 0 else 0.0
