"""
Tag Bag
=======

Read-only view over the key/value tags of one OSM way, node or relation.

Tags arrive either as a plain ``dict[str, str]`` from a reader, or as
networkx edge/node data where merged OSM ways may carry list values
(e.g. ``{"highway": ["residential", "service"]}``). Both shapes are
normalised here so the classifiers only ever ask two questions:
"is this key present?" and "does this key carry one of these values?".

A multi-valued key matches a value check when any of its values matches, so
``{"highway": ["service", "footway"]}`` counts as both a service road and a
footway for every tier check. ``get`` returns only the first value; it is
meant for free-form values such as speeds and durations, never for tier
membership.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union


ValueSpec = Union[str, Iterable[str]]


def normalize_tag_values(value: Any) -> tuple[str, ...]:
    """Turn a raw tag value into a tuple of stripped string values."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(str(item).strip() for item in value if item is not None)
    return (str(value).strip(),)


class TagBag:
    """
    Immutable mapping from tag key to tag value(s).

    Example
    -------
    >>> way = TagBag({"highway": "footway", "footway": "crossing"})
    >>> way.has_tag("footway")
    True
    >>> way.has_tag_with_value("highway", {"footway", "pedestrian"})
    True
    """

    __slots__ = ("_tags", "osm_id")

    def __init__(self, tags: Optional[Mapping[str, Any]] = None, osm_id: Any = None):
        normalized: dict[str, tuple[str, ...]] = {}
        for key, value in (tags or {}).items():
            values = normalize_tag_values(value)
            if values:
                normalized[str(key)] = values
        self._tags = normalized
        self.osm_id = osm_id

    @classmethod
    def of(cls, tags: Union["TagBag", Mapping[str, Any], None]) -> "TagBag":
        """Wrap ``tags`` unless it already is a TagBag."""
        if isinstance(tags, TagBag):
            return tags
        return cls(tags)

    def has_tag(self, key: str) -> bool:
        return key in self._tags

    def has_tag_with_value(self, key: str, values: ValueSpec) -> bool:
        """
        Check whether ``key`` carries ``values``.

        Parameters
        ----------
        key : str
            Tag key to inspect.
        values : str or iterable of str
            A single value or a set of accepted values.
        """
        present = self._tags.get(key)
        if not present:
            return False
        if isinstance(values, str):
            return values in present
        accepted = values if isinstance(values, (set, frozenset)) else set(values)
        return any(value in accepted for value in present)

    def has_any_tag_with_value(self, keys: Iterable[str], values: ValueSpec) -> bool:
        """True if any of ``keys`` carries one of ``values``."""
        return any(self.has_tag_with_value(key, values) for key in keys)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """First value of ``key``, or ``default`` when absent."""
        present = self._tags.get(key)
        return present[0] if present else default

    def keys_matching(self, prefix: str) -> list[str]:
        return [key for key in self._tags if key.startswith(prefix)]

    def to_dict(self) -> dict[str, str]:
        """Flatten to ``key -> value`` with multi-values joined by ``;``."""
        return {key: ";".join(values) for key, values in self._tags.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"TagBag({self.to_dict()!r})"
