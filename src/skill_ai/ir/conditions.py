"""Condition AST -- the parsed form of a rule's condition clause.

A condition has three parts: the *scope* (whose value is read), an
optional *property selector* (which value of a battler), and a
*comparison* (what must hold about that value).  The parser in
:mod:`skill_ai.parser` produces these nodes; the evaluator in
:mod:`skill_ai.sim.evaluator` consumes them.  Nothing here knows how to
read live battle state.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator


# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------

class ScopeKind(str, Enum):
    """Where the subject of a condition is drawn from."""

    SELF = "self"
    ANY_ALLY = "any_ally"
    ANY_ENEMY = "any_enemy"
    ALL_ALLY = "all_ally"
    ALL_ENEMY = "all_enemy"
    SWITCH = "switch"
    VARIABLE = "variable"
    CANDIDATE = "candidate"
    """The target candidate being weighed (target rules only)."""


class Scope(BaseModel):
    """Subject scope of a condition.

    ``store_id`` is set only for the ``SWITCH`` and ``VARIABLE`` kinds.
    """

    model_config = {"frozen": True}

    kind: ScopeKind
    store_id: int | None = None

    @property
    def is_global(self) -> bool:
        return self.kind in (ScopeKind.SWITCH, ScopeKind.VARIABLE)

    @property
    def requires_all(self) -> bool:
        """True for the quantified ``all`` scopes."""
        return self.kind in (ScopeKind.ALL_ALLY, ScopeKind.ALL_ENEMY)

    @model_validator(mode="after")
    def _check_store_id(self) -> Scope:
        if self.is_global and self.store_id is None:
            raise ValueError(f"{self.kind.value} scope requires a store id")
        if not self.is_global and self.store_id is not None:
            raise ValueError(f"{self.kind.value} scope cannot carry a store id")
        return self


# ---------------------------------------------------------------------------
# Property selector
# ---------------------------------------------------------------------------

RESOURCE_PROPERTIES = frozenset({"hp", "mp"})
"""Selectors that expose a ``(current, maximum)`` pair."""

STATE_PROPERTY = "state"


class PropertySelector(BaseModel):
    """Names the battler attribute a condition reads."""

    model_config = {"frozen": True}

    name: str

    @property
    def key(self) -> str:
        return self.name.lower()

    @property
    def is_resource(self) -> bool:
        return self.key in RESOURCE_PROPERTIES

    @property
    def is_state(self) -> bool:
        return self.key == STATE_PROPERTY


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------

class NamedPredicate(str, Enum):
    ZERO = "zero"
    LOW = "low"
    HIGH = "high"
    MAX = "max"
    LOWEST = "lowest"
    HIGHEST = "highest"


class InequalityOp(str, Enum):
    BELOW = "below"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    ABOVE = "above"


class OperandKind(str, Enum):
    """What the right-hand side of an inequality refers to."""

    LITERAL = "literal"
    PERCENT = "percent"
    """A percentage of the subject's maximum."""
    VARIABLE = "variable"
    """The current value of a global counter."""


class NamedComparison(BaseModel):
    """``zero``, ``low``, ``high``, ``max``, ``lowest`` or ``highest``."""

    model_config = {"frozen": True}

    kind: Literal["named"] = "named"
    predicate: NamedPredicate


class InequalityComparison(BaseModel):
    """``below|equal|not equal|above`` followed by a number, a percentage,
    or ``variable N``."""

    model_config = {"frozen": True}

    kind: Literal["inequality"] = "inequality"
    op: InequalityOp
    operand_kind: OperandKind
    operand: int
    """Literal value, percentage points, or variable id depending on
    ``operand_kind``."""


class MembershipComparison(BaseModel):
    """``is [not] X`` where X is an id, a status effect, or ``on``/``off``.

    Exactly one of ``value_id`` and ``flag`` is set.  Status-effect names
    are resolved to ids when the rule is parsed.
    """

    model_config = {"frozen": True}

    kind: Literal["membership"] = "membership"
    negated: bool = False
    value_id: int | None = None
    flag: bool | None = None

    @model_validator(mode="after")
    def _check_operand(self) -> MembershipComparison:
        if (self.value_id is None) == (self.flag is None):
            raise ValueError("membership needs exactly one of value_id or flag")
        return self


class TruthyComparison(BaseModel):
    """No comparison text: the subject's value is tested for truthiness."""

    model_config = {"frozen": True}

    kind: Literal["truthy"] = "truthy"


class DeadComparison(BaseModel):
    """``is dead`` / ``is not dead`` -- reads aliveness, not a property."""

    model_config = {"frozen": True}

    kind: Literal["dead"] = "dead"
    negated: bool = False


Comparison = Annotated[
    Union[
        NamedComparison,
        InequalityComparison,
        MembershipComparison,
        TruthyComparison,
        DeadComparison,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Condition
# ---------------------------------------------------------------------------

class Condition(BaseModel):
    """A fully parsed condition clause."""

    model_config = {"frozen": True}

    scope: Scope
    prop: PropertySelector | None = None
    comparison: Comparison

    @property
    def is_aliveness_check(self) -> bool:
        return isinstance(self.comparison, DeadComparison)

    @model_validator(mode="after")
    def _check_shape(self) -> Condition:
        if self.scope.is_global:
            if self.prop is not None:
                raise ValueError("switch/variable conditions cannot select a property")
            if self.is_aliveness_check:
                raise ValueError("switch/variable conditions cannot test aliveness")
        elif self.prop is None and not self.is_aliveness_check:
            raise ValueError(
                "battler conditions without a property must be 'is dead' or 'is not dead'"
            )
        return self
