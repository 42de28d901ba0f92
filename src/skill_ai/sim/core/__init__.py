"""Core battle primitives the rule evaluator reads from."""

from skill_ai.sim.core.entities import DEATH_STATE_ID, Actor, Battler, Enemy, Side
from skill_ai.sim.core.game_state import BattleState
from skill_ai.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # entities
    "DEATH_STATE_ID",
    "Side",
    "Battler",
    "Actor",
    "Enemy",
    # game_state
    "BattleState",
]
