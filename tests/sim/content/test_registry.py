"""Tests for ContentRegistry catalogues and enemy rule loading."""

import logging

import pytest

from skill_ai.ir.content import EnemyDefinition, SkillDefinition
from skill_ai.ir.rules import RatingRule, TargetRule
from skill_ai.parser.errors import UnknownSkillError, UnknownStateError

HEAL, FIRE = 2, 9

NOTE = """
<skill-ai Fire I>
target 3x .hp low // finish off the weak
</skill-ai>
<skill-ai Heal>
boost 6 when ally.hp below 50%
not a rule at all
</skill-ai>
<skill-ai 9>
nerf 10 when all enemy.state is Protected
</skill-ai>
"""


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

class TestNameLookups:
    def test_find_skill_id(self, registry):
        assert registry.find_skill_id("fire i") == FIRE
        assert registry.find_skill_id("HEAL") == HEAL

    def test_find_state_id(self, registry):
        assert registry.find_state_id("poisoned") == 4

    def test_unknown_skill(self, registry):
        with pytest.raises(UnknownSkillError):
            registry.find_skill_id("Meteor")

    def test_unknown_state(self, registry):
        with pytest.raises(UnknownStateError):
            registry.find_state_id("Frozen")

    def test_getters(self, registry):
        assert registry.get_skill(FIRE).name == "Fire I"
        assert registry.get_skill(404) is None
        assert registry.get_enemy(1) is None


# ---------------------------------------------------------------------------
# Enemy registration
# ---------------------------------------------------------------------------

class TestRegisterEnemy:
    def test_rule_cache(self, registry, enemy_template):
        enemy_template(NOTE)
        assert registry.get_rule_lines(1, FIRE) == [
            "target 3x .hp low // finish off the weak",
            "nerf 10 when all enemy.state is Protected",
        ]
        assert registry.get_rule_lines(1, HEAL) == [
            "boost 6 when ally.hp below 50%",
            "not a rule at all",
        ]

    def test_returns_cache(self, registry):
        cache = registry.register_enemy(
            EnemyDefinition(id=5, name="Imp", note="<skill-ai 2>\nnerf 1 when me.hp max\n</skill-ai>")
        )
        assert cache == {HEAL: ["nerf 1 when me.hp max"]}
        assert registry.get_enemy(5).name == "Imp"

    def test_compiled_rules_drop_unusable_lines(self, registry, enemy_template):
        enemy_template(NOTE)
        heal_rules = registry.get_rules(1, HEAL)
        assert len(heal_rules) == 1
        assert isinstance(heal_rules[0], RatingRule)

    def test_trailing_comment_makes_line_malformed_by_default(self, registry, enemy_template):
        enemy_template(NOTE)
        assert [type(r) for r in registry.get_rules(1, FIRE)] == [RatingRule]

    def test_strip_comments(self, registry):
        registry.strip_comments = True
        registry.register_enemy(EnemyDefinition(id=1, name="Shaman", note=NOTE))
        fire_rules = registry.get_rules(1, FIRE)
        assert [type(r) for r in fire_rules] == [TargetRule, RatingRule]
        assert fire_rules[0].effective_multiplier == 3.0

    def test_has_rules(self, registry, enemy_template):
        enemy_template(NOTE)
        assert registry.has_rules(1, FIRE)
        assert not registry.has_rules(1, 1)
        assert not registry.has_rules(2, FIRE)

    def test_lookups_return_copies(self, registry, enemy_template):
        enemy_template(NOTE)
        registry.get_rule_lines(1, HEAL).clear()
        registry.get_rules(1, HEAL).clear()
        assert len(registry.get_rule_lines(1, HEAL)) == 2
        assert len(registry.get_rules(1, HEAL)) == 1

    def test_unknown_skill_in_header(self, registry, enemy_template):
        with pytest.raises(UnknownSkillError):
            enemy_template("<skill-ai Meteor>\ntarget .hp low\n</skill-ai>")
        assert registry.get_enemy(1) is None

    def test_unknown_state_in_rule(self, registry, enemy_template):
        with pytest.raises(UnknownStateError):
            enemy_template("<skill-ai 9>\ntarget only .state is Frozen\n</skill-ai>")
        assert registry.get_enemy(1) is None

    def test_comment_after_state_name_skips_only_that_line(self, registry, enemy_template, caplog):
        note = (
            "<skill-ai 9>\n"
            "boost 3 when me.hp low\n"
            "nerf 5 when all enemy.state is Protected // shielded\n"
            "</skill-ai>"
        )
        with caplog.at_level(logging.WARNING, logger="skill_ai.parser.rules"):
            enemy_template(note)
        assert [r.source for r in registry.get_rules(1, FIRE)] == ["boost 3 when me.hp low"]
        assert registry.get_enemy(1) is not None
        assert "Protected // shielded" in caplog.text

    def test_skill_must_be_registered_before_enemy(self, registry, enemy_template):
        with pytest.raises(UnknownSkillError):
            enemy_template("<skill-ai Blizzard>\ntarget .hp low\n</skill-ai>")
        registry.register_skill(SkillDefinition(id=12, name="Blizzard"))
        enemy_template("<skill-ai Blizzard>\ntarget .hp low\n</skill-ai>")
        assert registry.has_rules(1, 12)


def test_repr(registry, enemy_template):
    enemy_template(NOTE)
    assert repr(registry) == "ContentRegistry(skills=3, states=2, enemies=1)"
