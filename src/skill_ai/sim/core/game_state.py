"""Battle snapshot handed to the rule evaluator at decision time.

``BattleState`` holds the two units and the global switch/variable
stores.  The evaluator only reads from it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from skill_ai.sim.core.entities import Actor, Battler, Enemy, Side


class BattleState(BaseModel):
    """Live state of a single combat encounter."""

    actors: list[Actor] = Field(default_factory=list)
    enemies: list[Enemy] = Field(default_factory=list)
    switches: dict[int, bool] = Field(default_factory=dict)
    """Global boolean flags by id.  Missing ids read as ``False``."""

    variables: dict[int, float] = Field(default_factory=dict)
    """Global counters by id.  Missing ids read as ``0``."""

    # -- global stores -------------------------------------------------------

    def switch(self, switch_id: int) -> bool:
        return self.switches.get(switch_id, False)

    def variable(self, variable_id: int) -> float:
        return self.variables.get(variable_id, 0)

    # -- unit queries --------------------------------------------------------

    def unit(self, side: Side) -> list[Battler]:
        """Every member of *side*, dead or alive."""
        if side is Side.ACTOR:
            return list(self.actors)
        return list(self.enemies)

    def friends_of(self, battler: Battler) -> list[Battler]:
        return self.unit(battler.side)

    def opponents_of(self, battler: Battler) -> list[Battler]:
        other = Side.ENEMY if battler.side is Side.ACTOR else Side.ACTOR
        return self.unit(other)

    @staticmethod
    def living(group: list[Battler]) -> list[Battler]:
        return [b for b in group if not b.is_dead]

