"""
Rollway Profile Package
=======================

Wheelchair-specific classification components.
"""

from rollway.profile.access import AccessClassifier, AccessRule
from rollway.profile.speed import SpeedAdjuster
from rollway.profile.priority import FeatureScore, PriorityScorer
from rollway.profile.barriers import NodeAccessRule
from rollway.profile.relation import (
    RelationBonusLedger,
    RelationSignal,
    merge_relation_bonus,
)
from rollway.profile.wheelchair import WheelchairProfile

__all__ = [
    # Way classification
    "AccessClassifier",
    "AccessRule",
    "SpeedAdjuster",
    "PriorityScorer",
    "FeatureScore",
    # Nodes and relations
    "NodeAccessRule",
    "RelationSignal",
    "RelationBonusLedger",
    "merge_relation_bonus",
    # Composed profile
    "WheelchairProfile",
]
