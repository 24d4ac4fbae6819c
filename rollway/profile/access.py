"""
Access Classifier
=================

Turns a way's tags into an AccessVerdict for wheelchair users.

The decision is an ordered list of named rules; the first rule whose
predicate matches decides the verdict. Keeping the rules as data makes the
evaluation order explicit and lets tests address a rule by name.

Rule groups, in order:
1. Explicit access restriction without an override
2. Ways without a highway tag (ferries, platforms, everything else)
3. Ways with a highway tag (surface quality, never-accessible highways,
   explicit access, sidewalks, motorroads, fords, permissive default)
"""

from dataclasses import dataclass
import logging
from typing import Callable

from rollway.core.schema import AccessVerdict, ClassifierConfig
from rollway.core.tables import (
    DEFAULT_PEDESTRIAN_DEFAULTS,
    DEFAULT_WHEELCHAIR_TABLES,
    PedestrianDefaults,
    TagCategoryTables,
)
from rollway.core.tags import TagBag


logger = logging.getLogger(__name__)

KEY_HIGHWAY = "highway"
KEY_WHEELCHAIR = "wheelchair"
KEY_FOOT = "foot"
KEY_SIDEWALK = "sidewalk"
KEY_ROUTE = "route"

FALLTHROUGH_RULE = "fallthrough"


@dataclass(frozen=True)
class AccessRule:
    """A predicate paired with the verdict it produces."""

    name: str
    applies: Callable[[TagBag], bool]
    verdict: AccessVerdict


class AccessClassifier:
    """
    Ordered-rule access classifier.

    Example
    -------
    >>> classifier = AccessClassifier()
    >>> classifier.classify(TagBag({"highway": "steps"}))
    <AccessVerdict.EXCLUDED: 'excluded'>
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
        self.rules: tuple[AccessRule, ...] = tuple(self._build_rules())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(self, tags: TagBag) -> AccessVerdict:
        """Return the access verdict for a way."""
        return self.classify_with_rule(tags)[0]

    def classify_with_rule(self, tags: TagBag) -> tuple[AccessVerdict, str]:
        """Return the verdict together with the name of the deciding rule."""
        tags = TagBag.of(tags)
        for rule in self.rules:
            if rule.applies(tags):
                if rule.verdict.is_excluded and self.config.log_skipped_ways:
                    logger.debug(
                        "way skipped (%s): %s tags=%s", rule.name, tags.osm_id, tags.to_dict()
                    )
                return rule.verdict, rule.name

        logger.warning("No access rule matched way %s tags=%s", tags.osm_id, tags.to_dict())
        return AccessVerdict.ROUTABLE, FALLTHROUGH_RULE

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    # ------------------------------------------------------------------
    # Rule construction
    # ------------------------------------------------------------------

    def _build_rules(self) -> list[AccessRule]:
        t = self.tables
        p = self.pedestrian
        excluded, routable, ferry = (
            AccessVerdict.EXCLUDED, AccessVerdict.ROUTABLE, AccessVerdict.FERRY,
        )

        def has_highway(tags: TagBag) -> bool:
            return tags.has_tag(KEY_HIGHWAY)

        def is_ferry(tags: TagBag) -> bool:
            return not has_highway(tags) and tags.has_tag_with_value(KEY_ROUTE, p.ferry_routes)

        def is_platform(tags: TagBag) -> bool:
            return (
                not has_highway(tags)
                and not tags.has_tag_with_value(KEY_ROUTE, p.ferry_routes)
                and (
                    tags.has_tag_with_value("public_transport", t.accepted_public_transport)
                    or tags.has_tag_with_value("railway", t.accepted_public_transport)
                )
            )

        def intended(key: str) -> Callable[[TagBag], bool]:
            return lambda tags: tags.has_tag_with_value(key, p.intended_values)

        def restricted(key: str) -> Callable[[TagBag], bool]:
            return lambda tags: tags.has_tag_with_value(key, p.restricted_values)

        def both(first: Callable[[TagBag], bool], second: Callable[[TagBag], bool]):
            return lambda tags: first(tags) and second(tags)

        def highway_in(values: frozenset[str]) -> Callable[[TagBag], bool]:
            return lambda tags: tags.has_tag_with_value(KEY_HIGHWAY, values)

        def tag_in(key: str, values: frozenset[str]) -> Callable[[TagBag], bool]:
            return both(has_highway, lambda tags: tags.has_tag_with_value(key, values))

        def usable_sidewalk(tags: TagBag) -> bool:
            return tags.has_tag_with_value(KEY_SIDEWALK, p.usable_sidewalk_values)

        def access_restricted(tags: TagBag) -> bool:
            return (
                tags.has_any_tag_with_value(p.restriction_keys, p.restricted_values)
                and not tags.has_any_tag_with_value(p.restriction_keys, p.intended_values)
                and not usable_sidewalk(tags)
            )

        def assumed_without_sidewalk(tags: TagBag) -> bool:
            return (
                tags.has_tag_with_value(KEY_SIDEWALK, p.no_sidewalk_values)
                and tags.has_tag_with_value(KEY_HIGHWAY, t.assumed_accessible_highways)
            )

        def ford(tags: TagBag) -> bool:
            return self.config.block_fords and (
                tags.has_tag_with_value(KEY_HIGHWAY, "ford") or tags.has_tag("ford")
            )

        return [
            AccessRule("access_restricted", access_restricted, excluded),
            # no highway tag
            AccessRule("ferry_wheelchair_intended", both(is_ferry, intended(KEY_WHEELCHAIR)), ferry),
            AccessRule("ferry_wheelchair_restricted", both(is_ferry, restricted(KEY_WHEELCHAIR)), excluded),
            AccessRule("ferry_foot_intended", both(is_ferry, intended(KEY_FOOT)), ferry),
            AccessRule("ferry_foot_restricted", both(is_ferry, restricted(KEY_FOOT)), excluded),
            AccessRule("ferry", is_ferry, ferry),
            AccessRule("platform_wheelchair_intended", both(is_platform, intended(KEY_WHEELCHAIR)), routable),
            AccessRule("platform_wheelchair_restricted", both(is_platform, restricted(KEY_WHEELCHAIR)), excluded),
            AccessRule("platform_foot_intended", both(is_platform, intended(KEY_FOOT)), routable),
            AccessRule("platform_foot_restricted", both(is_platform, restricted(KEY_FOOT)), excluded),
            AccessRule("platform", is_platform, routable),
            AccessRule("no_highway", lambda tags: not has_highway(tags), excluded),
            # highway tag present
            AccessRule("bad_sac_scale", tag_in("sac_scale", t.inaccessible_sac_scales), excluded),
            AccessRule("bad_surface", tag_in("surface", t.inaccessible_surfaces), excluded),
            AccessRule("bad_smoothness", tag_in("smoothness", t.inaccessible_smoothnesses), excluded),
            AccessRule("bad_tracktype", tag_in("tracktype", t.inaccessible_tracktypes), excluded),
            AccessRule("non_accessible_highway", highway_in(t.non_accessible_highways), excluded),
            AccessRule("wheelchair_intended", both(has_highway, intended(KEY_WHEELCHAIR)), routable),
            AccessRule("wheelchair_restricted", both(has_highway, restricted(KEY_WHEELCHAIR)), excluded),
            AccessRule("foot_intended", both(has_highway, intended(KEY_FOOT)), routable),
            AccessRule("foot_restricted", both(has_highway, restricted(KEY_FOOT)), excluded),
            AccessRule("usable_sidewalk", both(has_highway, usable_sidewalk), routable),
            AccessRule("assumed_highway_without_sidewalk", assumed_without_sidewalk, excluded),
            AccessRule("motorroad", both(has_highway, lambda tags: tags.has_tag_with_value("motorroad", "yes")), excluded),
            AccessRule("ford", both(has_highway, ford), excluded),
            AccessRule("highway", has_highway, routable),
        ]
