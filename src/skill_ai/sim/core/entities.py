"""Battler models -- the read-only view of combatants that rule conditions
inspect.

All data classes use Pydantic v2 BaseModel for validation and
serialization.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

DEATH_STATE_ID = 1
"""Status effect id the host engine uses for knockout."""


class Side(str, Enum):
    """Which unit a battler belongs to."""

    ACTOR = "actor"
    ENEMY = "enemy"


# ---------------------------------------------------------------------------
# Battler base
# ---------------------------------------------------------------------------

class Battler(BaseModel):
    """Common base for anything that can be a rule subject or a target."""

    name: str
    side: Side
    hp: int
    mhp: int
    mp: int = 0
    mmp: int = 0
    tp: int = 0
    tgr: float = 1.0
    """Target rate: base weight when an opponent picks a random target."""

    params: dict[str, float] = Field(default_factory=dict)
    """Other numeric attributes by name (``atk``, ``def``, ``charge``, ...)."""

    states: set[int] = Field(default_factory=set)
    """Ids of the status effects currently applied."""

    # -- aliveness -----------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0 or DEATH_STATE_ID in self.states

    # -- accessors -----------------------------------------------------------

    def resource(self, name: str) -> tuple[int, int]:
        """Return ``(current, maximum)`` for ``"hp"`` or ``"mp"``."""
        key = name.lower()
        if key == "hp":
            return self.hp, self.mhp
        if key == "mp":
            return self.mp, self.mmp
        raise KeyError(f"{name!r} is not a resource with a maximum")

    def param(self, name: str) -> Any:
        """Return a bare numeric attribute.

        ``params`` win over declared fields (``tp``, ``tgr``, ...); unknown
        names read as ``0``.
        """
        if name in self.params:
            return self.params[name]
        if name in type(self).model_fields and name not in ("params", "states", "name", "side"):
            return getattr(self, name)
        return 0

    def active_states(self) -> frozenset[int]:
        return frozenset(self.states)


# ---------------------------------------------------------------------------
# Actor
# ---------------------------------------------------------------------------

class Actor(Battler):
    """A party member."""

    side: Side = Side.ACTOR


# ---------------------------------------------------------------------------
# Enemy
# ---------------------------------------------------------------------------

class Enemy(Battler):
    """A single enemy in combat."""

    side: Side = Side.ENEMY
    enemy_id: int
    """Ties this instance back to an :class:`EnemyDefinition` template."""
