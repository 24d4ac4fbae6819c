"""
Rollway: Wheelchair Routing Classifier
======================================

Classifies OSM way, node and relation tags into wheelchair routing
attributes: access verdict, speed and priority band.

Public API:
- WheelchairProfile: the composed classifier
- TagBag: read-only tag container
- AccessVerdict, PriorityBand: classification outcomes
- ClassifierConfig: profile configuration
- annotate_graph: apply a profile to a NetworkX graph
"""

from rollway.core import (
    AccessVerdict,
    ClassifierConfig,
    EdgeClassification,
    NodeClassification,
    PriorityBand,
    TagBag,
    TagCategoryTables,
    PedestrianDefaults,
)
from rollway.profile import WheelchairProfile, RelationBonusLedger
from rollway.graph import annotate_graph

__version__ = "0.1.0"

__all__ = [
    "WheelchairProfile",
    "RelationBonusLedger",
    "TagBag",
    "TagCategoryTables",
    "PedestrianDefaults",
    "AccessVerdict",
    "PriorityBand",
    "ClassifierConfig",
    "EdgeClassification",
    "NodeClassification",
    "annotate_graph",
]
