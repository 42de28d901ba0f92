"""Rule definitions -- the two kinds of line an author writes inside a
``<skill-ai>`` block.

- :class:`RatingRule` (``boost|nerf N when ...``) nudges how often a skill
  is picked.
- :class:`TargetRule` (``target [Nx|only] [.prop] ...``) reweights or
  filters the candidates the skill may be used on.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, model_validator

from .conditions import Condition, ScopeKind

DEFAULT_TARGET_MULTIPLIER = 2.0
"""Weight multiplier applied by a target rule that names no rate."""


class RuleDirection(str, Enum):
    BOOST = "boost"
    NERF = "nerf"


class RatingRule(BaseModel):
    """``boost|nerf <magnitude> when <condition>``."""

    model_config = {"frozen": True}

    direction: RuleDirection
    magnitude: int = Field(ge=0)
    condition: Condition
    source: str = ""
    """The rule line this was parsed from, kept for diagnostics."""

    @property
    def delta(self) -> int:
        """Signed rating change applied when the condition holds."""
        if self.direction is RuleDirection.NERF:
            return -self.magnitude
        return self.magnitude


class TargetRule(BaseModel):
    """``target [<rate>x | only] [.<property>] <comparison>``.

    The condition's scope is always the candidate being weighed.
    """

    model_config = {"frozen": True}

    multiplier: float | None = Field(default=None, gt=0)
    """Explicit rate, or ``None`` for the default."""

    exclusive: bool = False
    """``only``: candidates failing the condition drop to weight 0."""

    condition: Condition
    source: str = ""

    @property
    def effective_multiplier(self) -> float:
        if self.multiplier is None:
            return DEFAULT_TARGET_MULTIPLIER
        return self.multiplier

    @model_validator(mode="after")
    def _check_rule(self) -> TargetRule:
        if self.exclusive and self.multiplier is not None:
            raise ValueError("a target rule takes either a rate or 'only', not both")
        if self.condition.scope.kind is not ScopeKind.CANDIDATE:
            raise ValueError("target rule conditions must be scoped to the candidate")
        return self


Rule = Union[RatingRule, TargetRule]
