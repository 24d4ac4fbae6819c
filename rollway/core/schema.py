"""
Classification Schema
=====================

Data models shared by the wheelchair profile components.

- AccessVerdict: ternary traversal outcome for a way
- PriorityBand: seven-level routing preference
- ClassifierConfig: profile configuration (validated with pydantic)
- EdgeClassification / NodeClassification: per-element results
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AccessVerdict(str, Enum):
    """Traversal outcome for a way."""

    ROUTABLE = "routable"
    """Usable as a regular way."""

    FERRY = "ferry"
    """Usable as a ferry or shuttle train."""

    EXCLUDED = "excluded"
    """Not usable; no further classification needed."""

    @property
    def is_excluded(self) -> bool:
        return self is AccessVerdict.EXCLUDED

    @property
    def is_ferry(self) -> bool:
        return self is AccessVerdict.FERRY


class PriorityBand(IntEnum):
    """Routing preference, ordered from worst to best."""

    AVOID_AT_ALL_COSTS = 1
    REACH_DEST = 2
    AVOID_IF_POSSIBLE = 3
    UNCHANGED = 4
    PREFER = 5
    VERY_NICE = 6
    BEST = 7

    @property
    def factor(self) -> float:
        """Priority as a weighting factor in (0, 1]."""
        return self.value / PriorityBand.BEST.value

    @classmethod
    def from_score(cls, score: int) -> "PriorityBand":
        """
        Map a feature score to a band.

        Upper bounds are inclusive: <=-6, <=-3, <=-1, 0, <=2, <=5, above.
        """
        if score <= -6:
            return cls.AVOID_AT_ALL_COSTS
        if score <= -3:
            return cls.REACH_DEST
        if score <= -1:
            return cls.AVOID_IF_POSSIBLE
        if score == 0:
            return cls.UNCHANGED
        if score <= 2:
            return cls.PREFER
        if score <= 5:
            return cls.VERY_NICE
        return cls.BEST


class ClassifierConfig(BaseModel):
    """Configuration for the wheelchair profile."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    block_fords: bool = True
    """Exclude ways and block nodes tagged as fords."""

    block_potential_barriers: bool = False
    """Whether gates, bollards etc. block when nothing else is known."""

    mean_speed: float = Field(default=4.0, gt=0)
    """Base speed every adjustment starts from."""

    min_speed: float = Field(default=1.0, gt=0)
    max_speed: float = Field(default=10.0, gt=0)

    ferry_min_speed: float = Field(default=0.5, gt=0)
    ferry_max_speed: float = Field(default=15.0, gt=0)

    preferred_route_bonus: int = 5
    """Bonus for ways in hiking/foot/bicycle/inline_skates route relations."""

    ferry_route_bonus: int = -5
    """Bonus for ways in ferry route relations."""

    log_skipped_ways: bool = False
    """Log every excluded way at DEBUG level with the deciding rule."""

    @model_validator(mode="after")
    def _validate_bounds(self) -> "ClassifierConfig":
        if self.min_speed > self.max_speed:
            raise ValueError("min_speed must be less than or equal to max_speed")
        if self.ferry_min_speed > self.ferry_max_speed:
            raise ValueError("ferry_min_speed must be less than or equal to ferry_max_speed")
        return self

    @classmethod
    def from_json_file(cls, path: Path | str) -> "ClassifierConfig":
        """Load configuration from a JSON file."""
        with open(path) as f:
            return cls.model_validate(json.load(f))


@dataclass(frozen=True)
class EdgeClassification:
    """
    Classification result for one way.

    Attributes
    ----------
    verdict : AccessVerdict
        Traversal outcome
    speed : float, optional
        Speed for the way; None when excluded
    priority : PriorityBand, optional
        Preference band; only set for routable ways
    relation_bonus : int
        Relation-derived bonus, carried alongside the priority, never summed into it
    rule : str
        Name of the access rule that decided the verdict
    """

    verdict: AccessVerdict
    speed: Optional[float] = None
    priority: Optional[PriorityBand] = None
    relation_bonus: int = 0
    rule: str = ""

    @property
    def is_accessible(self) -> bool:
        return not self.verdict.is_excluded

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "verdict": self.verdict.value,
            "speed": self.speed,
            "priority": self.priority.name if self.priority is not None else None,
            "priority_factor": self.priority.factor if self.priority is not None else None,
            "relation_bonus": self.relation_bonus,
            "rule": self.rule,
        }


@dataclass(frozen=True)
class NodeClassification:
    """Classification result for one node."""

    blocked: bool
    reason: str = ""
    details: dict[str, Any] = field(default_factory=dict)
