"""Comparison parser -- the text after a condition's subject.

Recognised forms, tried in order::

    <blank>                                   truthiness of the value
    zero | low | high | max | lowest | highest
    below|equal|not equal|above  N | N% | variable N
    is [not]  N | on | off | dead | <state name>

Keywords are case-insensitive.  ``equals`` / ``not equals`` are accepted
as spellings of ``equal`` / ``not equal``.  A state name cannot contain
``//`` and ``is not`` needs an operand; either is a malformed comparison.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from skill_ai.ir.conditions import (
    Comparison,
    DeadComparison,
    InequalityComparison,
    InequalityOp,
    MembershipComparison,
    NamedComparison,
    NamedPredicate,
    OperandKind,
    TruthyComparison,
)
from skill_ai.parser.errors import ComparisonParseError, UnknownStateError

if TYPE_CHECKING:
    from skill_ai.sim.content.registry import ContentRegistry

_NAMED_RE = re.compile(r"^\s*(zero|lowest|highest|low|high|max)\s*$", re.IGNORECASE)
_INEQUALITY_RE = re.compile(
    r"^\s*(below|equals?|not\s+equals?|above)\s+"
    r"(?:(\d+)%|variable\s+(\d+)|(\d+))\s*$",
    re.IGNORECASE,
)
_MEMBERSHIP_RE = re.compile(
    r"^\s*is(\s+not)?\s+(?:(\d+)|(on|off)|(?!not(?:\s|$))(\S(?:(?!//).)*?))\s*$",
    re.IGNORECASE,
)

_INEQUALITY_WORDS: dict[str, InequalityOp] = {
    "below": InequalityOp.BELOW,
    "equal": InequalityOp.EQUAL,
    "not equal": InequalityOp.NOT_EQUAL,
    "above": InequalityOp.ABOVE,
}


def _inequality_op(word: str) -> InequalityOp:
    normalised = " ".join(word.lower().split())
    if normalised.endswith("s"):
        normalised = normalised[:-1]
    return _INEQUALITY_WORDS[normalised]


def parse_comparison(
    text: str | None,
    registry: ContentRegistry | None = None,
) -> Comparison:
    """Parse residual comparison text into a comparison node.

    Parameters
    ----------
    text:
        Everything after the condition's subject (may be ``None`` or blank).
    registry:
        Used to resolve status-effect names in ``is <state name>``.

    Raises
    ------
    ComparisonParseError
        If *text* matches none of the recognised forms.
    UnknownStateError
        If a status-effect name cannot be resolved.
    """
    if text is None or not text.strip():
        return TruthyComparison()

    named = _NAMED_RE.match(text)
    if named:
        return NamedComparison(predicate=NamedPredicate(named.group(1).lower()))

    inequality = _INEQUALITY_RE.match(text)
    if inequality:
        op = _inequality_op(inequality.group(1))
        percent, variable_id, literal = inequality.group(2, 3, 4)
        if percent is not None:
            return InequalityComparison(op=op, operand_kind=OperandKind.PERCENT, operand=int(percent))
        if variable_id is not None:
            return InequalityComparison(op=op, operand_kind=OperandKind.VARIABLE, operand=int(variable_id))
        return InequalityComparison(op=op, operand_kind=OperandKind.LITERAL, operand=int(literal))

    membership = _MEMBERSHIP_RE.match(text)
    if membership:
        negated = membership.group(1) is not None
        value_id, flag, name = membership.group(2, 3, 4)
        if value_id is not None:
            return MembershipComparison(negated=negated, value_id=int(value_id))
        if flag is not None:
            return MembershipComparison(negated=negated, flag=flag.lower() == "on")
        if name.lower() == "dead":
            return DeadComparison(negated=negated)
        return MembershipComparison(negated=negated, value_id=_resolve_state(name, registry))

    raise ComparisonParseError(text)


def _resolve_state(name: str, registry: ContentRegistry | None) -> int:
    if registry is None:
        raise UnknownStateError(name)
    return registry.find_state_id(name)
