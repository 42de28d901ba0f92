"""Tests for BattleState unit queries and global stores."""

from skill_ai.sim.core.entities import Actor, Enemy, Side
from skill_ai.sim.core.game_state import BattleState


def _make_battle():
    actors = [Actor(name="Harold", hp=40, mhp=40), Actor(name="Marsha", hp=0, mhp=30)]
    enemies = [Enemy(name="Slime", enemy_id=1, hp=12, mhp=12)]
    return BattleState(actors=actors, enemies=enemies, switches={5: True}, variables={2: 7})


class TestGlobalStores:
    def test_switches(self):
        battle = _make_battle()
        assert battle.switch(5) is True
        assert battle.switch(6) is False

    def test_variables(self):
        battle = _make_battle()
        assert battle.variable(2) == 7
        assert battle.variable(3) == 0


class TestUnits:
    def test_unit_includes_dead(self):
        battle = _make_battle()
        assert [b.name for b in battle.unit(Side.ACTOR)] == ["Harold", "Marsha"]
        assert [b.name for b in battle.unit(Side.ENEMY)] == ["Slime"]

    def test_friends_and_opponents(self):
        battle = _make_battle()
        slime = battle.enemies[0]
        harold = battle.actors[0]
        assert battle.friends_of(slime) == [slime]
        assert [b.name for b in battle.opponents_of(slime)] == ["Harold", "Marsha"]
        assert battle.opponents_of(harold) == [slime]

    def test_living(self):
        battle = _make_battle()
        assert battle.living(battle.enemies) == battle.enemies
        assert [b.name for b in battle.living(battle.actors)] == ["Harold"]

    def test_unit_returns_a_copy(self):
        battle = _make_battle()
        battle.unit(Side.ACTOR).clear()
        assert len(battle.actors) == 2
