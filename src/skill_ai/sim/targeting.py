"""Target weighting and weighted selection.

:func:`adjust_target_weights` folds a skill's ``target`` rules into the
candidates' base weights; :func:`select_weighted` draws one candidate in
proportion to the result.

Rules are applied in source order to a running weight list.  A plain
rule multiplies the weight of every candidate that matches; an ``only``
rule leaves matching candidates alone and zeroes the rest, so a later
``only`` rule discards whatever an earlier rule boosted.
``.tgr`` in a target rule reads the candidate's running weight, so a rule
can react to what the rules before it did.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Sequence, TypeVar, Union

from skill_ai.ir.rules import TargetRule
from skill_ai.parser.rules import parse_target_rule
from skill_ai.sim.evaluator import member_results

if TYPE_CHECKING:
    from skill_ai.ir.rules import Rule
    from skill_ai.sim.content.registry import ContentRegistry
    from skill_ai.sim.core.entities import Battler
    from skill_ai.sim.core.game_state import BattleState
    from skill_ai.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _target_rules(
    rules: Iterable[Union[str, Rule]],
    registry: ContentRegistry | None,
) -> Iterable[TargetRule]:
    for rule in rules:
        if isinstance(rule, str):
            rule = parse_target_rule(rule, registry)
        if isinstance(rule, TargetRule):
            yield rule


def adjust_target_weights(
    candidates: Sequence[Battler],
    weights: Sequence[float],
    rules: Iterable[Union[str, Rule]],
    battle: BattleState | None = None,
    registry: ContentRegistry | None = None,
) -> list[tuple[Battler, float]]:
    """Apply a skill's target rules to the candidates' weights.

    Parameters
    ----------
    candidates:
        Targets the skill may legally be used on.
    weights:
        Base weight of each candidate (same order and length).
    rules:
        The skill's rule list: raw lines or compiled rules.  Rating rules
        and lines that are not target rules are ignored.
    battle:
        Needed only when a comparison reads ``variable N``.
    registry:
        Resolves status-effect names when *rules* contains raw lines.

    Returns
    -------
    list[tuple[Battler, float]]
        ``(candidate, weight)`` pairs in candidate order.
    """
    if len(candidates) != len(weights):
        raise ValueError(
            f"got {len(candidates)} candidates but {len(weights)} weights"
        )
    adjusted = [float(w) for w in weights]

    for rule in _target_rules(rules, registry):
        try:
            results = member_results(rule.condition, list(candidates), battle, list(adjusted))
        except TypeError as exc:
            logger.warning("Could not evaluate target rule %r: %s", rule.source, exc)
            continue

        for i, (candidate, holds) in enumerate(zip(candidates, results)):
            logger.debug("Target rule %r for %s: %s", rule.source, candidate.name, holds)
            if holds:
                if not rule.exclusive:
                    adjusted[i] *= rule.effective_multiplier
            elif rule.exclusive:
                adjusted[i] = 0.0

    return list(zip(candidates, adjusted))


def select_weighted(
    candidates: Sequence[T],
    weights: Sequence[float],
    rng: GameRNG,
) -> T | None:
    """Draw one candidate with probability proportional to its weight.

    One draw is taken from ``[0, sum(weights))`` and each weight is
    subtracted from it in order; the first candidate that brings the
    remainder to ``<= 0`` wins.  A zero-weight candidate can therefore
    be picked when the draw lands exactly on the boundary before it.

    Returns ``None`` when every weight is zero; the caller decides the
    fallback.

    Raises
    ------
    ValueError
        If *candidates* is empty or the lengths differ.
    """
    if not candidates:
        raise ValueError("select_weighted needs at least one candidate")
    if len(candidates) != len(weights):
        raise ValueError(
            f"got {len(candidates)} candidates but {len(weights)} weights"
        )

    total = sum(weights)
    if total <= 0:
        logger.debug("All %d candidate weights are zero", len(candidates))
        return None

    remainder = rng.random_below(total)
    for candidate, weight in zip(candidates, weights):
        remainder -= weight
        if remainder <= 0:
            return candidate

    # Float rounding can leave a sliver; fall to the last weighted candidate.
    for candidate, weight in zip(reversed(candidates), reversed(weights)):
        if weight > 0:
            return candidate
    return None
