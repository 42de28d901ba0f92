"""Intermediate Representation (IR) for author-written enemy AI rules.

Rule text is parsed once into the Pydantic models below and then
evaluated many times against live battle state.  The models are frozen:
a parsed rule never changes after data load.
"""

from .conditions import (
    Comparison,
    Condition,
    DeadComparison,
    InequalityComparison,
    InequalityOp,
    MembershipComparison,
    NamedComparison,
    NamedPredicate,
    OperandKind,
    PropertySelector,
    Scope,
    ScopeKind,
    TruthyComparison,
)
from .content import ActionPattern, EnemyDefinition, SkillDefinition, StateDefinition
from .rules import (
    DEFAULT_TARGET_MULTIPLIER,
    RatingRule,
    Rule,
    RuleDirection,
    TargetRule,
)

__all__ = [
    # conditions
    "Comparison",
    "Condition",
    "DeadComparison",
    "InequalityComparison",
    "InequalityOp",
    "MembershipComparison",
    "NamedComparison",
    "NamedPredicate",
    "OperandKind",
    "PropertySelector",
    "Scope",
    "ScopeKind",
    "TruthyComparison",
    # content
    "ActionPattern",
    "EnemyDefinition",
    "SkillDefinition",
    "StateDefinition",
    # rules
    "DEFAULT_TARGET_MULTIPLIER",
    "RatingRule",
    "Rule",
    "RuleDirection",
    "TargetRule",
]
