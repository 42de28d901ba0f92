"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

import pytest

from skill_ai.ir.content import ActionPattern, EnemyDefinition, SkillDefinition, StateDefinition
from skill_ai.sim.content.registry import ContentRegistry
from skill_ai.sim.core.entities import Actor, Enemy
from skill_ai.sim.core.game_state import BattleState
from skill_ai.sim.core.rng import GameRNG

ATTACK, HEAL, FIRE = 1, 2, 9
POISONED, PROTECTED = 4, 7


@pytest.fixture
def registry() -> ContentRegistry:
    """Registry with a small skill and state catalogue, no enemies."""
    reg = ContentRegistry()
    reg.register_skill(SkillDefinition(id=ATTACK, name="Attack"))
    reg.register_skill(SkillDefinition(id=HEAL, name="Heal"))
    reg.register_skill(SkillDefinition(id=FIRE, name="Fire I"))
    reg.register_state(StateDefinition(id=POISONED, name="Poisoned"))
    reg.register_state(StateDefinition(id=PROTECTED, name="Protected"))
    return reg


@pytest.fixture
def rng() -> GameRNG:
    return GameRNG(42)


@pytest.fixture
def enemy_template(registry: ContentRegistry):
    """Factory registering an enemy template whose note holds the given rules."""

    def _register(note: str, actions=None, enemy_id: int = 1) -> EnemyDefinition:
        return register_enemy(registry, note, actions, enemy_id)

    return _register


@pytest.fixture
def skirmish() -> tuple[BattleState, Enemy]:
    return make_skirmish()


def register_enemy(
    registry: ContentRegistry,
    note: str,
    actions: list[tuple[int, int]] | None = None,
    enemy_id: int = 1,
) -> EnemyDefinition:
    """Register an enemy template carrying *note* and return it."""
    definition = EnemyDefinition(
        id=enemy_id,
        name=f"Enemy {enemy_id}",
        note=note,
        actions=[ActionPattern(skill_id=s, rating=r) for s, r in (actions or [])],
    )
    registry.register_enemy(definition)
    return definition


def make_skirmish() -> tuple[BattleState, Enemy]:
    """Two-on-three skirmish, seen from the first enemy.

    The acting enemy sits at 5/8 hp with a charge of 1.  Its allies are
    at 1/2 and 10/12; the party members it faces are at 2/2 and 12/20.
    """
    me = Enemy(name="Me", enemy_id=1, hp=5, mhp=8, params={"charge": 1})
    allies = [
        Enemy(name="Ally A", enemy_id=2, hp=1, mhp=2, params={"charge": 1}),
        Enemy(name="Ally B", enemy_id=2, hp=10, mhp=12, params={"charge": 0}),
    ]
    foes = [
        Actor(name="Foe A", hp=2, mhp=2, params={"charge": 0}),
        Actor(name="Foe B", hp=12, mhp=20, params={"charge": 3}),
    ]
    return BattleState(actors=foes, enemies=[me, *allies]), me
