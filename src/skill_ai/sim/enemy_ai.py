"""Enemy AI -- the seam between the host battle engine and the rule core.

The host calls in at its two decision points and applies the results with
its own algorithms:

- **Skill choice**: :meth:`EnemyAI.modify_action_ratings` returns the
  enemy's action list with adjusted ratings; :meth:`EnemyAI.select_action`
  runs the engine's usual rating-window pick over it.
- **Target choice**: :meth:`EnemyAI.choose_target` weights the legal
  targets by their target rate, applies the skill's target rules, and
  draws one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

from skill_ai.sim.rating import adjust_rating
from skill_ai.sim.targeting import adjust_target_weights, select_weighted

if TYPE_CHECKING:
    from skill_ai.ir.content import ActionPattern
    from skill_ai.sim.content.registry import ContentRegistry
    from skill_ai.sim.core.entities import Battler, Enemy
    from skill_ai.sim.core.game_state import BattleState
    from skill_ai.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

RATING_WINDOW = 3
"""Actions rated more than this far below the best are never picked."""

TargetModifier = Callable[[Sequence["Battler"]], list[tuple["Battler", float]]]


class EnemyAI:
    """Applies an enemy template's ``<skill-ai>`` rules at decision time.

    Parameters
    ----------
    registry:
        Holds each enemy template's compiled rules.
    rng:
        Forked into independent streams for action and target draws.
    rating_window:
        Width of the rating window used by :meth:`select_action`.
    """

    def __init__(
        self,
        registry: ContentRegistry,
        rng: GameRNG,
        rating_window: int = RATING_WINDOW,
    ) -> None:
        self._registry = registry
        self._action_rng = rng.fork("actions")
        self._target_rng = rng.fork("targets")
        self._rating_window = rating_window

    # ------------------------------------------------------------------
    # Skill choice
    # ------------------------------------------------------------------

    def modify_action_ratings(
        self,
        enemy: Enemy,
        actions: Sequence[ActionPattern],
        battle: BattleState,
    ) -> list[ActionPattern]:
        """Return copies of *actions* with rating rules applied.

        Actions whose skill has no rules come back unchanged.  The input
        list is not mutated.
        """
        adjusted: list[ActionPattern] = []
        for action in actions:
            rules = self._registry.get_rules(enemy.enemy_id, action.skill_id)
            if not rules:
                adjusted.append(action)
                continue
            rating = adjust_rating(action.rating, rules, battle, enemy)
            adjusted.append(action.model_copy(update={"rating": rating}))
        logger.debug(
            "Modified action ratings for %s: %s",
            enemy.name,
            [(a.skill_id, a.rating) for a in adjusted],
        )
        return adjusted

    def select_action(
        self,
        enemy: Enemy,
        actions: Sequence[ActionPattern],
        battle: BattleState,
    ) -> ActionPattern | None:
        """Pick one action the way the host engine does, after rating rules.

        Actions rated within ``rating_window`` of the best are eligible and
        drawn with weight ``rating - (best - rating_window)``.
        """
        if not actions:
            return None
        adjusted = self.modify_action_ratings(enemy, actions, battle)

        floor = max(a.rating for a in adjusted) - self._rating_window
        eligible = [a for a in adjusted if a.rating > floor]
        weights = [a.rating - floor for a in eligible]

        total = sum(weights)
        roll = self._action_rng.random_float() * total
        cumulative = 0
        selected = eligible[0]
        for action, weight in zip(eligible, weights):
            cumulative += weight
            if roll <= cumulative:
                selected = action
                break
        return selected

    # ------------------------------------------------------------------
    # Target choice
    # ------------------------------------------------------------------

    def make_target_modifier(
        self,
        enemy: Enemy,
        skill_id: int,
        battle: BattleState | None = None,
    ) -> TargetModifier | None:
        """Return a ``candidates -> [(candidate, weight)]`` function, or
        ``None`` if the enemy has no rules for *skill_id*."""
        if not self._registry.has_rules(enemy.enemy_id, skill_id):
            return None
        rules = self._registry.get_rules(enemy.enemy_id, skill_id)

        def modifier(candidates: Sequence[Battler]) -> list[tuple[Battler, float]]:
            return adjust_target_weights(
                candidates, [c.tgr for c in candidates], rules, battle,
            )

        return modifier

    def choose_target(
        self,
        enemy: Enemy,
        skill_id: int,
        candidates: Sequence[Battler],
        battle: BattleState,
    ) -> Battler | None:
        """Draw a target for *skill_id* from the living *candidates*.

        Without rules the draw is weighted by target rate alone.  If every
        weight ends up zero (e.g. an ``only`` rule nobody matches) the
        choice falls back to uniform.
        """
        living = battle.living(list(candidates))
        if not living:
            return None

        modifier = self.make_target_modifier(enemy, skill_id, battle)
        if modifier is None:
            pairs = [(c, c.tgr) for c in living]
        else:
            pairs = modifier(living)

        target = select_weighted([c for c, _ in pairs], [w for _, w in pairs], self._target_rng)
        if target is None:
            logger.debug("No weighted target for %s skill %d; choosing uniformly", enemy.name, skill_id)
            target = self._target_rng.random_choice(living)
        return target
