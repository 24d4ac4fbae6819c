"""
Relation Signal
===============

Route relations pass a bonus to their member ways: walking-friendly routes
(hiking, foot, bicycle, inline_skates) a positive one, ferry routes a
negative one. A way in several relations keeps the largest bonus seen.
"""

import threading
from collections.abc import Hashable, Iterable
from typing import Optional

from rollway.core.schema import ClassifierConfig
from rollway.core.tags import TagBag


PREFERRED_ROUTES = frozenset({"hiking", "foot", "bicycle", "inline_skates"})
FERRY_ROUTES = frozenset({"ferry"})


def merge_relation_bonus(previous: Optional[int], bonus: int) -> int:
    """Monotone-max merge; ``previous=None`` means nothing was recorded yet."""
    if previous is None:
        return bonus
    return max(previous, bonus)


class RelationSignal:
    """Scores route relations."""

    def __init__(self, config: ClassifierConfig | None = None):
        self.config = config or ClassifierConfig()

    def score_relation(self, tags: TagBag) -> int:
        tags = TagBag.of(tags)
        if tags.has_tag_with_value("route", PREFERRED_ROUTES):
            return self.config.preferred_route_bonus
        if tags.has_tag_with_value("route", FERRY_ROUTES):
            return self.config.ferry_route_bonus
        return 0

    def handle_relation(self, previous: Optional[int], tags: TagBag) -> int:
        """Score a relation and merge it with the bonus already recorded for a way."""
        return merge_relation_bonus(previous, self.score_relation(tags))


class RelationBonusLedger:
    """
    Per-way relation bonuses, safe to update from several worker threads.

    Example
    -------
    >>> ledger = RelationBonusLedger()
    >>> ledger.record(42, 5)
    5
    >>> ledger.record(42, -5)
    5
    """

    def __init__(self, signal: RelationSignal | None = None):
        self.signal = signal or RelationSignal()
        self._bonuses: dict[Hashable, int] = {}
        self._lock = threading.Lock()

    def record(self, way_id: Hashable, bonus: int) -> int:
        """Merge ``bonus`` into the stored value for ``way_id`` and return the result."""
        with self._lock:
            merged = merge_relation_bonus(self._bonuses.get(way_id), bonus)
            self._bonuses[way_id] = merged
            return merged

    def record_relation(self, tags: TagBag, member_way_ids: Iterable[Hashable]) -> int:
        """Score a relation once and record it for each member way."""
        bonus = self.signal.score_relation(tags)
        for way_id in member_way_ids:
            self.record(way_id, bonus)
        return bonus

    def get(self, way_id: Hashable, default: int = 0) -> int:
        with self._lock:
            return self._bonuses.get(way_id, default)

    def __contains__(self, way_id: object) -> bool:
        with self._lock:
            return way_id in self._bonuses

    def __len__(self) -> int:
        with self._lock:
            return len(self._bonuses)
