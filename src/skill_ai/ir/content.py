"""Database records the rule core reads: skills, status effects, and the
enemy templates whose notes carry ``<skill-ai>`` blocks."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SkillDefinition(BaseModel):
    """A skill in the host engine's catalogue."""

    id: int
    """Canonical numeric id.  Rule blocks naming the skill resolve to this."""

    name: str
    """Display name; rule blocks may reference it case-insensitively."""


class StateDefinition(BaseModel):
    """A status effect (buff, debuff, ailment) in the host catalogue."""

    id: int
    name: str


class ActionPattern(BaseModel):
    """One row of an enemy's action list: a skill and its selection rating."""

    skill_id: int
    rating: int = 5
    """Base selection score.  Rating rules add to or subtract from it."""


class EnemyDefinition(BaseModel):
    """Enemy template as it comes out of the database."""

    id: int
    name: str
    note: str = ""
    """Free-text annotation field holding the ``<skill-ai>`` blocks."""

    actions: list[ActionPattern] = Field(default_factory=list)
