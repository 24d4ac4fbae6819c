"""
Rollway Core
============

Profile-independent building blocks: tag container, category tables,
classification schema and tag lookups.
"""

from rollway.core.tags import TagBag, normalize_tag_values
from rollway.core.tables import (
    DEFAULT_PEDESTRIAN_DEFAULTS,
    DEFAULT_WHEELCHAIR_TABLES,
    PedestrianDefaults,
    TagCategoryTables,
)
from rollway.core.schema import (
    AccessVerdict,
    ClassifierConfig,
    EdgeClassification,
    NodeClassification,
    PriorityBand,
)

__all__ = [
    "TagBag",
    "normalize_tag_values",
    "TagCategoryTables",
    "PedestrianDefaults",
    "DEFAULT_WHEELCHAIR_TABLES",
    "DEFAULT_PEDESTRIAN_DEFAULTS",
    "AccessVerdict",
    "ClassifierConfig",
    "EdgeClassification",
    "NodeClassification",
    "PriorityBand",
]
