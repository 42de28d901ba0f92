"""Condition parser -- splits a condition clause into subject and comparison.

Subject forms, in priority order::

    [all] me|ally|enemy[.<property>] <comparison>
    switch <id> <comparison>
    variable <id> <comparison>

A battler subject may omit the property only when the comparison is
``is dead`` / ``is not dead``.  Target rules have no subject of their
own; :func:`parse_target_condition` builds a candidate-scoped condition
from the property and comparison text the target grammar captured.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pydantic import ValidationError

from skill_ai.ir.conditions import Condition, PropertySelector, Scope, ScopeKind
from skill_ai.parser.comparisons import parse_comparison
from skill_ai.parser.errors import ConditionParseError

if TYPE_CHECKING:
    from skill_ai.sim.content.registry import ContentRegistry

_BATTLER_RE = re.compile(
    r"^\s*(?:(all)\s+)?(me|my|ally|enemy)(?:\.([a-z_]\w*))?(?:\s+(.*?))?\s*$",
    re.IGNORECASE,
)
_SWITCH_RE = re.compile(r"^\s*switch\s+(\d+)(?:\s+(.*?))?\s*$", re.IGNORECASE)
_VARIABLE_RE = re.compile(r"^\s*variable\s+(\d+)(?:\s+(.*?))?\s*$", re.IGNORECASE)

_BATTLER_SCOPES: dict[tuple[str, bool], ScopeKind] = {
    ("me", False): ScopeKind.SELF,
    ("my", False): ScopeKind.SELF,
    ("ally", False): ScopeKind.ANY_ALLY,
    ("ally", True): ScopeKind.ALL_ALLY,
    ("enemy", False): ScopeKind.ANY_ENEMY,
    ("enemy", True): ScopeKind.ALL_ENEMY,
}


def split_condition(clause: str) -> tuple[Scope, PropertySelector | None, str]:
    """Split *clause* into its subject and the residual comparison text.

    Raises
    ------
    ConditionParseError
        If no subject form matches.
    """
    battler = _BATTLER_RE.match(clause)
    if battler:
        quantified = battler.group(1) is not None
        subject = battler.group(2).lower()
        kind = _BATTLER_SCOPES.get((subject, quantified))
        if kind is None:
            raise ConditionParseError(clause, f"'all' cannot quantify {subject!r}")
        prop_name = battler.group(3)
        prop = PropertySelector(name=prop_name) if prop_name else None
        return Scope(kind=kind), prop, battler.group(4) or ""

    switch = _SWITCH_RE.match(clause)
    if switch:
        return Scope(kind=ScopeKind.SWITCH, store_id=int(switch.group(1))), None, switch.group(2) or ""

    variable = _VARIABLE_RE.match(clause)
    if variable:
        return Scope(kind=ScopeKind.VARIABLE, store_id=int(variable.group(1))), None, variable.group(2) or ""

    raise ConditionParseError(clause)


def parse_condition(clause: str, registry: ContentRegistry | None = None) -> Condition:
    """Parse a full ``when`` clause into a :class:`Condition`.

    Raises
    ------
    ConditionParseError
        If no subject form matches, or the subject and comparison do not
        fit together (e.g. a battler without a property compared by value).
    ComparisonParseError
        If the residual comparison text is malformed.
    UnknownStateError
        If the comparison names an unknown status effect.
    """
    scope, prop, residual = split_condition(clause)
    comparison = parse_comparison(residual, registry)
    return _build(clause, scope=scope, prop=prop, comparison=comparison)


def parse_target_condition(
    prop_name: str | None,
    residual: str | None,
    registry: ContentRegistry | None = None,
) -> Condition:
    """Build the candidate-scoped condition of a target rule."""
    comparison = parse_comparison(residual, registry)
    prop = PropertySelector(name=prop_name) if prop_name else None
    text = f".{prop_name} {residual or ''}" if prop_name else (residual or "")
    return _build(text.strip(), scope=Scope(kind=ScopeKind.CANDIDATE), prop=prop, comparison=comparison)


def _build(clause: str, **fields) -> Condition:
    try:
        return Condition(**fields)
    except ValidationError as exc:
        reason = "; ".join(err["msg"] for err in exc.errors())
        raise ConditionParseError(clause, reason) from exc
