"""Condition evaluator -- checks a parsed :class:`Condition` against a
battle snapshot.

Battler subjects are evaluated over a *group*: the acting battler alone
(``me``), or every member of its own or the opposing unit.  The group's
minimum and maximum of the selected property are computed once and
handed to every member's comparison, which is what ``lowest`` and
``highest`` test against.  ``all`` scopes need every member to pass;
the others need one.

All collaborators (battle state, acting battler) are passed in; nothing
is read from module globals.
"""

from __future__ import annotations

import operator
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence

from skill_ai.ir.conditions import (
    Condition,
    DeadComparison,
    InequalityComparison,
    InequalityOp,
    MembershipComparison,
    NamedComparison,
    NamedPredicate,
    OperandKind,
    PropertySelector,
    ScopeKind,
    TruthyComparison,
)

if TYPE_CHECKING:
    from skill_ai.ir.conditions import Comparison
    from skill_ai.sim.core.entities import Battler
    from skill_ai.sim.core.game_state import BattleState

LOW_FRACTION = Fraction(1, 3)
HIGH_FRACTION = Fraction(2, 3)
LOW_ABSOLUTE = 3
"""``low`` threshold for values without a maximum."""
HIGH_ABSOLUTE = 5
"""``high`` threshold for values without a maximum."""
TARGET_RATE_PROPERTY = "tgr"


# ---------------------------------------------------------------------------
# Property access
# ---------------------------------------------------------------------------

def read_property(
    battler: Battler,
    prop: PropertySelector,
    weight: float | None = None,
) -> tuple[Any, int | None]:
    """Return ``(value, maximum)`` for *prop* on *battler*.

    ``hp``/``mp`` carry their maximum, ``state`` yields the set of active
    state ids, and any other name is a bare attribute with no maximum.
    While target rules run, *weight* is the candidate's running weight
    and stands in for ``tgr``.
    """
    if weight is not None and prop.key == TARGET_RATE_PROPERTY:
        return weight, None
    if prop.is_resource:
        return battler.resource(prop.key)
    if prop.is_state:
        return battler.active_states(), None
    return battler.param(prop.name), None


def group_bounds(values: Iterable[Any]) -> tuple[Any, Any]:
    """Minimum and maximum of the numeric *values* (``None`` if there are none)."""
    numeric = [v for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)]
    if not numeric:
        return None, None
    return min(numeric), max(numeric)


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------

def _compare_named(
    comparison: NamedComparison,
    value: Any,
    maximum: int | None,
    group_min: Any,
    group_max: Any,
    battle: BattleState | None,
) -> bool:
    predicate = comparison.predicate
    if predicate is NamedPredicate.ZERO:
        return value == 0
    if predicate is NamedPredicate.LOW:
        if maximum:
            return value < maximum * LOW_FRACTION
        return value < LOW_ABSOLUTE
    if predicate is NamedPredicate.HIGH:
        if maximum:
            return value > maximum * HIGH_FRACTION
        return value > HIGH_ABSOLUTE
    if predicate is NamedPredicate.MAX:
        return maximum is not None and value == maximum
    if predicate is NamedPredicate.LOWEST:
        return value == group_min
    return value == group_max


_INEQUALITY_OPS: dict[InequalityOp, Callable[[Any, Any], bool]] = {
    InequalityOp.BELOW: operator.lt,
    InequalityOp.EQUAL: operator.eq,
    InequalityOp.NOT_EQUAL: operator.ne,
    InequalityOp.ABOVE: operator.gt,
}


def _compare_inequality(
    comparison: InequalityComparison,
    value: Any,
    maximum: int | None,
    group_min: Any,
    group_max: Any,
    battle: BattleState | None,
) -> bool:
    check = _INEQUALITY_OPS[comparison.op]
    if comparison.operand_kind is OperandKind.PERCENT:
        if maximum:
            return check(value / maximum, comparison.operand / 100)
        # No maximum to take a percentage of: compare against the bare number.
        return check(value, comparison.operand)
    if comparison.operand_kind is OperandKind.VARIABLE:
        counter = battle.variable(comparison.operand) if battle is not None else 0
        return check(value, counter)
    return check(value, comparison.operand)


def _compare_membership(
    comparison: MembershipComparison,
    value: Any,
    maximum: int | None,
    group_min: Any,
    group_max: Any,
    battle: BattleState | None,
) -> bool:
    if comparison.flag is not None:
        result = value == comparison.flag
    elif isinstance(value, (set, frozenset, list, tuple)):
        result = comparison.value_id in value
    else:
        result = value == comparison.value_id
    return result != comparison.negated


def _compare_truthy(
    comparison: TruthyComparison,
    value: Any,
    maximum: int | None,
    group_min: Any,
    group_max: Any,
    battle: BattleState | None,
) -> bool:
    return bool(value)


def _compare_dead(
    comparison: DeadComparison,
    value: Any,
    maximum: int | None,
    group_min: Any,
    group_max: Any,
    battle: BattleState | None,
) -> bool:
    # value is the battler itself for aliveness checks
    return value.is_dead != comparison.negated


_DISPATCH: dict[type, Callable[..., bool]] = {
    NamedComparison: _compare_named,
    InequalityComparison: _compare_inequality,
    MembershipComparison: _compare_membership,
    TruthyComparison: _compare_truthy,
    DeadComparison: _compare_dead,
}


def compare(
    comparison: Comparison,
    value: Any,
    maximum: int | None = None,
    group_min: Any = None,
    group_max: Any = None,
    battle: BattleState | None = None,
) -> bool:
    """Apply *comparison* to one subject value.

    Parameters
    ----------
    comparison:
        Parsed comparison node.
    value:
        The subject's value (the battler itself for ``is dead``).
    maximum:
        The value's maximum, if it has one (``hp``/``mp`` only).
    group_min, group_max:
        Bounds of the value across the group being evaluated.
    battle:
        Needed only for ``variable N`` operands.
    """
    handler = _DISPATCH[type(comparison)]
    return handler(comparison, value, maximum, group_min, group_max, battle)


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------

def member_results(
    condition: Condition,
    members: list[Battler],
    battle: BattleState | None = None,
    weights: Sequence[float] | None = None,
) -> list[bool]:
    """Evaluate *condition* for each battler in *members*.

    Group bounds are taken over *members* once, before any comparison.
    *weights*, when given, are the members' current target weights and
    are what ``.tgr`` reads.
    """
    if condition.is_aliveness_check:
        return [compare(condition.comparison, member, battle=battle) for member in members]

    if weights is None:
        readings = [read_property(member, condition.prop) for member in members]
    else:
        readings = [
            read_property(member, condition.prop, weight)
            for member, weight in zip(members, weights)
        ]
    group_min, group_max = group_bounds(value for value, _ in readings)
    return [
        compare(condition.comparison, value, maximum, group_min, group_max, battle)
        for value, maximum in readings
    ]


def resolve_group(condition: Condition, battle: BattleState, subject: Battler) -> list[Battler]:
    """Battlers a battler-scoped *condition* ranges over.

    Property checks range over living members; ``is dead`` checks see
    the whole unit.
    """
    kind = condition.scope.kind
    if kind is ScopeKind.SELF:
        return [subject]
    if kind in (ScopeKind.ANY_ALLY, ScopeKind.ALL_ALLY):
        group = battle.friends_of(subject)
    else:
        group = battle.opponents_of(subject)
    if condition.is_aliveness_check:
        return group
    return battle.living(group)


def evaluate_condition(condition: Condition, battle: BattleState, subject: Battler) -> bool:
    """Evaluate a rating-rule condition from *subject*'s point of view.

    Raises
    ------
    ValueError
        For candidate-scoped conditions, which only make sense per target
        (see :func:`member_results`).
    """
    scope = condition.scope
    if scope.kind is ScopeKind.SWITCH:
        return compare(condition.comparison, battle.switch(scope.store_id), battle=battle)
    if scope.kind is ScopeKind.VARIABLE:
        return compare(condition.comparison, battle.variable(scope.store_id), battle=battle)
    if scope.kind is ScopeKind.CANDIDATE:
        raise ValueError("candidate conditions are evaluated per target, not per subject")

    results = member_results(condition, resolve_group(condition, battle, subject), battle)
    if scope.requires_all:
        return all(results)
    return any(results)
