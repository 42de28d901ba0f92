"""Rating engine -- folds ``boost``/``nerf`` rules into a skill's selection score.

The adjusted rating goes back to the host's own action-selection
algorithm; only the number changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Union

from skill_ai.ir.rules import RatingRule
from skill_ai.parser.rules import parse_rating_rule
from skill_ai.sim.evaluator import evaluate_condition

if TYPE_CHECKING:
    from skill_ai.ir.rules import Rule
    from skill_ai.sim.content.registry import ContentRegistry
    from skill_ai.sim.core.entities import Battler
    from skill_ai.sim.core.game_state import BattleState

logger = logging.getLogger(__name__)


def _rating_rules(
    rules: Iterable[Union[str, Rule]],
    registry: ContentRegistry | None,
) -> Iterable[RatingRule]:
    for rule in rules:
        if isinstance(rule, str):
            rule = parse_rating_rule(rule, registry)
        if isinstance(rule, RatingRule):
            yield rule


def adjust_rating(
    rating: float,
    rules: Iterable[Union[str, Rule]],
    battle: BattleState,
    subject: Battler,
    registry: ContentRegistry | None = None,
) -> float:
    """Return *rating* plus the deltas of every rating rule whose condition holds.

    Parameters
    ----------
    rating:
        The skill's base selection score.
    rules:
        The skill's rule list: raw lines or compiled rules.  Target rules
        and lines that are not rating rules are ignored.
    battle:
        Current battle snapshot.
    subject:
        The battler choosing the skill (``me`` in conditions).
    registry:
        Resolves status-effect names when *rules* contains raw lines.

    Returns
    -------
    float
        The adjusted rating.  Adjustments are summed, so rule order does
        not matter.
    """
    total = 0
    for rule in _rating_rules(rules, registry):
        try:
            holds = evaluate_condition(rule.condition, battle, subject)
        except TypeError as exc:
            # e.g. an inequality against a state set
            logger.warning("Could not evaluate rating rule %r: %s", rule.source, exc)
            continue
        if holds:
            logger.debug("Rating rule %r applies (%+d) for %s", rule.source, rule.delta, subject.name)
            total += rule.delta
    return rating + total
