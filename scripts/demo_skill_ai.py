"""Demo script: walk one enemy through skill and target choices with rule tracing.

Usage:
    uv run python scripts/demo_skill_ai.py [--seed S] [--turns N]
"""

from __future__ import annotations

import argparse
import logging

from skill_ai.ir.content import ActionPattern, EnemyDefinition, SkillDefinition, StateDefinition
from skill_ai.sim.content.registry import ContentRegistry
from skill_ai.sim.core.entities import Actor, Enemy
from skill_ai.sim.core.game_state import BattleState
from skill_ai.sim.core.rng import GameRNG
from skill_ai.sim.enemy_ai import EnemyAI

ATTACK, HEAL, FIRE = 1, 2, 9
POISON, PROTECTED = 4, 7

NOTE = """
<skill-ai Heal>
boost 6 when ally.hp below 50%
nerf 4 when all ally.hp max
</skill-ai>
<skill-ai 9>
nerf 10 when all enemy.state is Protected
target 3x .hp low // finish off the weak
</skill-ai>
<skill-ai Fire I>
target only .state is not Poisoned
boost 2 when switch 5 is on
</skill-ai>
"""


def build_registry() -> ContentRegistry:
    registry = ContentRegistry(strip_comments=True)
    for skill_id, name in [(ATTACK, "Attack"), (HEAL, "Heal"), (FIRE, "Fire I")]:
        registry.register_skill(SkillDefinition(id=skill_id, name=name))
    registry.register_state(StateDefinition(id=POISON, name="Poisoned"))
    registry.register_state(StateDefinition(id=PROTECTED, name="Protected"))
    registry.register_enemy(EnemyDefinition(
        id=3,
        name="Goblin Shaman",
        note=NOTE,
        actions=[
            ActionPattern(skill_id=ATTACK, rating=5),
            ActionPattern(skill_id=HEAL, rating=4),
            ActionPattern(skill_id=FIRE, rating=5),
        ],
    ))
    return registry


def separator(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def run_demo(seed: int, turns: int) -> None:
    registry = build_registry()
    template = registry.get_enemy(3)
    shaman = Enemy(name="Shaman", enemy_id=3, hp=40, mhp=40)
    goblin = Enemy(name="Goblin", enemy_id=4, hp=9, mhp=30)
    party = [
        Actor(name="Harold", hp=40, mhp=400),
        Actor(name="Therese", hp=300, mhp=350, states={POISON}),
        Actor(name="Marsha", hp=250, mhp=300),
    ]
    battle = BattleState(actors=party, enemies=[shaman, goblin], switches={5: True})
    ai = EnemyAI(registry, GameRNG(seed))

    separator("Rule cache")
    for skill_id in registry.rule_caches[3]:
        print(f"  skill {skill_id} ({registry.get_skill(skill_id).name}):")
        for line in registry.get_rule_lines(3, skill_id):
            print(f"    {line}")

    for turn in range(1, turns + 1):
        separator(f"Turn {turn}")
        for action in ai.modify_action_ratings(shaman, template.actions, battle):
            print(f"  {registry.get_skill(action.skill_id).name:<8} rating {action.rating}")
        action = ai.select_action(shaman, template.actions, battle)
        skill = registry.get_skill(action.skill_id)
        print(f"  -> uses {skill.name}")

        if action.skill_id == HEAL:
            target = ai.choose_target(shaman, HEAL, battle.enemies, battle)
            target.hp = min(target.mhp, target.hp + 15)
        else:
            target = ai.choose_target(shaman, action.skill_id, battle.actors, battle)
            if target is None:
                print("  -> no living target")
                continue
            target.hp = max(0, target.hp - 30)
        print(f"  -> target {target.name} (hp {target.hp}/{target.mhp})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--seed", type=int, default=42, help="RNG seed")
    parser.add_argument("--turns", type=int, default=5, help="Number of enemy turns")
    parser.add_argument("--verbose", action="store_true", help="Log rule evaluation")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    run_demo(args.seed, args.turns)
