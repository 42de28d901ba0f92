"""Chart how often each party member is targeted under a set of target rules.

Draws many targets for one enemy skill with and without its
``<skill-ai>`` rules and plots the empirical frequencies.

Usage:
    uv run python scripts/target_distribution.py [--draws N] [--seed S]
"""

from __future__ import annotations

import argparse
import logging

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from skill_ai.ir.content import ActionPattern, EnemyDefinition, SkillDefinition, StateDefinition
from skill_ai.sim.content.registry import ContentRegistry
from skill_ai.sim.core.entities import Actor, Enemy
from skill_ai.sim.core.game_state import BattleState
from skill_ai.sim.core.rng import GameRNG
from skill_ai.sim.enemy_ai import EnemyAI

POISON = 4
BITE = 10

NOTE = """
<skill-ai Bite>
target 3x .hp low
target .state is Poisoned
</skill-ai>
"""


def build_registry() -> ContentRegistry:
    registry = ContentRegistry()
    registry.register_skill(SkillDefinition(id=BITE, name="Bite"))
    registry.register_state(StateDefinition(id=POISON, name="Poisoned"))
    registry.register_enemy(EnemyDefinition(
        id=1, name="Wolf", note=NOTE, actions=[ActionPattern(skill_id=BITE, rating=5)],
    ))
    return registry


def build_battle() -> BattleState:
    party = [
        Actor(name="Harold", hp=120, mhp=400),
        Actor(name="Therese", hp=300, mhp=350, states={POISON}),
        Actor(name="Marsha", hp=90, mhp=300, states={POISON}),
        Actor(name="Lucius", hp=280, mhp=280),
    ]
    return BattleState(actors=party, enemies=[Enemy(name="Wolf", enemy_id=1, hp=60, mhp=60)])


def run_distribution(n_draws: int, seed: int) -> None:
    registry = build_registry()
    battle = build_battle()
    wolf = battle.enemies[0]
    names = [a.name for a in battle.actors]

    counts: dict[str, np.ndarray] = {}
    for label, skill_id in [("No rules", 0), ("With rules", BITE)]:
        ai = EnemyAI(registry, GameRNG(seed))
        tally = np.zeros(len(names), dtype=int)
        for _ in range(n_draws):
            target = ai.choose_target(wolf, skill_id, battle.actors, battle)
            tally[names.index(target.name)] += 1
        counts[label] = tally

        print(f"\n{label} ({n_draws} draws):")
        for name, n in zip(names, tally):
            print(f"  {name:<8} {n / n_draws * 100:5.1f}%")

    generate_chart(names, counts, n_draws)


def generate_chart(names: list[str], counts: dict[str, np.ndarray], n_draws: int) -> None:
    fig, ax = plt.subplots(figsize=(9, 5))
    x = np.arange(len(names))
    width = 0.38
    colors = {"No rules": "#95a5a6", "With rules": "#e67e22"}

    for offset, (label, tally) in zip((-width / 2, width / 2), counts.items()):
        freq = tally / n_draws * 100
        bars = ax.bar(x + offset, freq, width, label=label, color=colors[label],
                      edgecolor="black", linewidth=0.5)
        for bar, f in zip(bars, freq):
            ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height() + 0.5,
                    f"{f:.1f}%", ha="center", va="bottom", fontsize=9)

    ax.set_xticks(x)
    ax.set_xticklabels(names)
    ax.set_ylabel("Targeted (%)")
    ax.set_title(f"Target frequency over {n_draws} draws")
    ax.legend()

    plt.tight_layout()
    out_path = "target_distribution.png"
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--draws", type=int, default=5000, help="Number of target draws per setting")
    parser.add_argument("--seed", type=int, default=0, help="RNG seed")
    parser.add_argument("--verbose", action="store_true", help="Log rule evaluation")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    run_distribution(args.draws, args.seed)
