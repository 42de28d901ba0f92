"""Content registry -- the skill and status-effect catalogues, plus enemy
templates with their parsed ``<skill-ai>`` rules.

Registering an enemy is the data-load hook: its note is scanned once,
the raw rule lines are cached per skill, and every line is compiled so
that authoring errors (unknown skill or state names) surface here rather
than in the middle of a battle.
"""

from __future__ import annotations

from skill_ai.ir.content import EnemyDefinition, SkillDefinition, StateDefinition
from skill_ai.ir.rules import Rule
from skill_ai.parser.blocks import RuleCache, parse_rule_blocks
from skill_ai.parser.errors import UnknownSkillError, UnknownStateError
from skill_ai.parser.rules import compile_rules


class ContentRegistry:
    """Single source of truth for the content the rule core refers to.

    Usage::

        registry = ContentRegistry()
        registry.register_skill(SkillDefinition(id=9, name="Fire I"))
        registry.register_state(StateDefinition(id=4, name="Poisoned"))
        registry.register_enemy(slime_definition)

        lines = registry.get_rule_lines(slime_definition.id, 9)
        rules = registry.get_rules(slime_definition.id, 9)

    Parameters
    ----------
    strip_comments:
        Passed to :func:`parse_rule_blocks` for every registered enemy.
    """

    def __init__(self, strip_comments: bool = False) -> None:
        self.skills: dict[int, SkillDefinition] = {}
        self.states: dict[int, StateDefinition] = {}
        self.enemies: dict[int, EnemyDefinition] = {}
        self.rule_caches: dict[int, RuleCache] = {}
        self.compiled_rules: dict[int, dict[int, list[Rule]]] = {}
        self.strip_comments = strip_comments

    # ------------------------------------------------------------------
    # Catalogue registration
    # ------------------------------------------------------------------

    def register_skill(self, skill: SkillDefinition) -> None:
        self.skills[skill.id] = skill

    def register_state(self, state: StateDefinition) -> None:
        self.states[state.id] = state

    def register_enemy(self, enemy: EnemyDefinition) -> RuleCache:
        """Store *enemy* and build its rule cache.

        Skills and states referenced by name must already be registered.

        Returns
        -------
        RuleCache
            The enemy's skill id -> raw rule lines mapping.

        Raises
        ------
        UnknownSkillError, UnknownStateError
            If the note references content the catalogue does not have.
        """
        cache = parse_rule_blocks(enemy.note, self, strip_comments=self.strip_comments)
        compiled = {
            skill_id: compile_rules(lines, self)
            for skill_id, lines in cache.items()
        }
        self.enemies[enemy.id] = enemy
        self.rule_caches[enemy.id] = cache
        self.compiled_rules[enemy.id] = compiled
        return cache

    # ------------------------------------------------------------------
    # Name lookups
    # ------------------------------------------------------------------

    def find_skill_id(self, name: str) -> int:
        """Resolve a skill name (case-insensitive, first match wins).

        Raises
        ------
        UnknownSkillError
            If no skill has that name.
        """
        wanted = name.lower()
        for skill in self.skills.values():
            if skill.name.lower() == wanted:
                return skill.id
        raise UnknownSkillError(name)

    def find_state_id(self, name: str) -> int:
        """Resolve a status-effect name (case-insensitive, first match wins).

        Raises
        ------
        UnknownStateError
            If no state has that name.
        """
        wanted = name.lower()
        for state in self.states.values():
            if state.name.lower() == wanted:
                return state.id
        raise UnknownStateError(name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_skill(self, skill_id: int) -> SkillDefinition | None:
        return self.skills.get(skill_id)

    def get_enemy(self, enemy_id: int) -> EnemyDefinition | None:
        return self.enemies.get(enemy_id)

    def get_rule_lines(self, enemy_id: int, skill_id: int) -> list[str]:
        """Raw rule lines for one enemy's use of one skill (may be empty)."""
        return list(self.rule_caches.get(enemy_id, {}).get(skill_id, []))

    def get_rules(self, enemy_id: int, skill_id: int) -> list[Rule]:
        """Compiled rules for one enemy's use of one skill (may be empty)."""
        return list(self.compiled_rules.get(enemy_id, {}).get(skill_id, []))

    def has_rules(self, enemy_id: int, skill_id: int) -> bool:
        return skill_id in self.rule_caches.get(enemy_id, {})

    def __repr__(self) -> str:
        return (
            f"ContentRegistry(skills={len(self.skills)}, "
            f"states={len(self.states)}, "
            f"enemies={len(self.enemies)})"
        )
