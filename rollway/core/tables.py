"""
Tag Category Tables
===================

The accessibility knowledge base: named, read-only sets of OSM tag values
grouped by tier.

Two tables live here:
- TagCategoryTables: wheelchair-specific tiers (highways, surfaces,
  smoothness, tracktype, SAC scale, barriers, platforms).
- PedestrianDefaults: the generic pedestrian access vocabulary the
  wheelchair profile builds on (restriction keys, intended/restricted
  values, sidewalk values, ferry routes).

Both are frozen dataclasses of frozensets. Build them once, share them by
reference across every classification call. Overrides can be loaded from
JSON in the same shape as ``to_dict()`` produces.
"""

from dataclasses import dataclass, fields, replace
import json
from pathlib import Path
from typing import Any


def _frozen(*values: str) -> frozenset[str]:
    return frozenset(values)


def _apply_overrides(table: Any, overrides: dict[str, Any]) -> Any:
    known = {f.name for f in fields(table)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(
            f"Unknown {type(table).__name__} categories: {sorted(unknown)}"
        )

    updates: dict[str, Any] = {}
    for name, values in overrides.items():
        if isinstance(values, str) or not isinstance(values, (list, tuple, set, frozenset)):
            raise ValueError(f"Category '{name}' must be a list of strings")
        if name == "restriction_keys":
            updates[name] = tuple(str(v) for v in values)
        else:
            updates[name] = frozenset(str(v) for v in values)
    return replace(table, **updates)


def _to_dict(table: Any) -> dict[str, list[str]]:
    result = {}
    for f in fields(table):
        value = getattr(table, f.name)
        result[f.name] = list(value) if isinstance(value, tuple) else sorted(value)
    return result


@dataclass(frozen=True)
class PedestrianDefaults:
    """
    Generic pedestrian access vocabulary.

    Attributes
    ----------
    restriction_keys : tuple[str, ...]
        Access keys consulted for explicit allow/deny, in evaluation order.
    intended_values : frozenset[str]
        Values that explicitly allow access (``foot=yes``, ...).
    restricted_values : frozenset[str]
        Values that explicitly deny access (``access=private``, ...).
    usable_sidewalk_values : frozenset[str]
        ``sidewalk=*`` values meaning a usable sidewalk exists.
    no_sidewalk_values : frozenset[str]
        ``sidewalk=*`` values meaning no usable sidewalk exists.
    ferry_routes : frozenset[str]
        ``route=*`` values treated as ferries.
    """

    restriction_keys: tuple[str, ...] = ("foot", "access", "wheelchair")
    intended_values: frozenset[str] = _frozen(
        "yes", "designated", "official", "permissive", "limited",
    )
    restricted_values: frozenset[str] = _frozen(
        "private", "no", "restricted", "military", "emergency",
    )
    usable_sidewalk_values: frozenset[str] = _frozen("yes", "both", "left", "right")
    no_sidewalk_values: frozenset[str] = _frozen("no", "none", "separate")
    ferry_routes: frozenset[str] = _frozen("ferry", "shuttle_train")

    def with_overrides(self, overrides: dict[str, Any]) -> "PedestrianDefaults":
        return _apply_overrides(self, overrides)

    def to_dict(self) -> dict[str, list[str]]:
        return _to_dict(self)


@dataclass(frozen=True)
class TagCategoryTables:
    """
    Wheelchair accessibility tiers.

    Highway tiers:
    - fully_accessible_highways: suitable as-is
    - assumed_accessible_highways: suitable, sidewalk confirmation preferred
    - limited_accessible_highways: only with surface/smoothness information
    - restricted_highways: need an explicit foot/wheelchair intent tag
    - non_accessible_highways: never usable (steps)

    Surface-like tiers come in inaccessible (excludes the way),
    problematic (speed penalty) and preferred (speed bonus) flavours.
    """

    fully_accessible_highways: frozenset[str] = _frozen(
        "footway", "pedestrian", "living_street", "residential", "unclassified",
        "service", "tertiary", "tertiary_link", "road",
    )
    assumed_accessible_highways: frozenset[str] = _frozen(
        "trunk", "trunk_link", "primary", "primary_link", "secondary", "secondary_link",
    )
    limited_accessible_highways: frozenset[str] = _frozen("path", "track")
    restricted_highways: frozenset[str] = _frozen("bridleway", "cycleway")
    non_accessible_highways: frozenset[str] = _frozen("steps")

    urban_pedestrian_highways: frozenset[str] = _frozen(
        "footway", "pedestrian", "living_street",
    )
    """Fully accessible highways built for walking; they get the speed and priority bonus."""

    problematic_surfaces: frozenset[str] = _frozen(
        "cobblestone", "unhewn_cobblestone", "sett", "unpaved", "gravel",
        "compacted", "pebblestone", "grass_paver", "woodchips",
    )
    inaccessible_surfaces: frozenset[str] = _frozen(
        "earth", "grass", "dirt", "mud", "sand", "snow", "ice", "salt",
    )
    preferred_surfaces: frozenset[str] = _frozen("asphalt", "paved")

    problematic_smoothnesses: frozenset[str] = _frozen("intermediate")
    inaccessible_smoothnesses: frozenset[str] = _frozen(
        "bad", "very_bad", "horrible", "very_horrible",
    )
    preferred_smoothnesses: frozenset[str] = _frozen("excellent")

    problematic_tracktypes: frozenset[str] = _frozen("grade2", "grade3")
    inaccessible_tracktypes: frozenset[str] = _frozen("grade4", "grade5")

    inaccessible_sac_scales: frozenset[str] = _frozen(
        "mountain_hiking", "demanding_mountain_hiking", "alpine_hiking",
        "demanding_alpine_hiking", "difficult_alpine_hiking",
    )

    absolute_barriers: frozenset[str] = _frozen(
        "fence", "wall", "hedge", "retaining_wall", "city_wall", "ditch",
        "hedge_bank", "guard_rail", "wire_fence", "embankment",
    )
    potential_barriers: frozenset[str] = _frozen(
        "gate", "bollard", "lift_gate", "cycle_barrier", "entrance",
        "cattle_grid", "swing_gate", "chain", "bump_gate",
    )
    inaccessible_barriers: frozenset[str] = _frozen(
        "stile", "block", "kissing_gate", "turnstile", "hampshire_gate",
    )

    accepted_public_transport: frozenset[str] = _frozen("platform")

    accessibility_related_attributes: frozenset[str] = _frozen(
        "surface", "smoothness", "tracktype", "incline", "sloped_curb", "sloped_kerb",
    )
    """Keys describing accessibility detail; exported for callers, no rule reads them."""

    @property
    def blocking_barriers(self) -> frozenset[str]:
        """Barrier values that block regardless of further node information."""
        return self.absolute_barriers | self.inaccessible_barriers

    def with_overrides(self, overrides: dict[str, Any]) -> "TagCategoryTables":
        """Return a copy with the named categories replaced."""
        return _apply_overrides(self, overrides)

    def to_dict(self) -> dict[str, list[str]]:
        return _to_dict(self)

    @classmethod
    def from_json_file(cls, path: Path | str) -> "TagCategoryTables":
        """Load category overrides on top of the defaults from a JSON file."""
        with open(path) as f:
            overrides = json.load(f)
        return DEFAULT_WHEELCHAIR_TABLES.with_overrides(overrides)


DEFAULT_WHEELCHAIR_TABLES = TagCategoryTables()
DEFAULT_PEDESTRIAN_DEFAULTS = PedestrianDefaults()
