"""Rule block parser -- extracts ``<skill-ai>`` blocks from an enemy note.

Block syntax::

    <skill-ai 12>            <skill-ai Fire I>
    boost 3 when me.hp low   target 3x .hp low
    </skill-ai>              </skill-ai>

The header is a numeric skill id or a case-insensitive skill name.  Every
non-blank line between the tags is kept verbatim (minus surrounding
whitespace) as a raw rule line.  Several blocks for the same skill are
concatenated in the order they appear.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skill_ai.sim.content.registry import ContentRegistry

RuleCache = dict[int, list[str]]
"""Skill id -> raw rule lines, in source order."""

_BLOCK_RE = re.compile(
    r"<skill-ai\s+(?:(\d+)|([^>]+?))\s*>(.*?)</skill-ai\s*>",
    re.IGNORECASE | re.DOTALL,
)
_LINE_SPLIT_RE = re.compile(r"[\r\n]+")
_COMMENT_RE = re.compile(r"//.*$")


def parse_rule_blocks(
    note: str | None,
    registry: ContentRegistry,
    strip_comments: bool = False,
) -> RuleCache:
    """Build the rule cache for one enemy template.

    Parameters
    ----------
    note:
        The template's free-text annotation.
    registry:
        Skill catalogue used to resolve named block headers.
    strip_comments:
        Drop ``// ...`` trailing comments before filtering blank lines.
        Off by default: comment handling belongs to the caller.

    Raises
    ------
    UnknownSkillError
        If a block header names a skill the registry does not know.
    """
    cache: RuleCache = {}
    if not note:
        return cache

    for match in _BLOCK_RE.finditer(note):
        skill_ref, skill_name, body = match.group(1, 2, 3)
        if skill_ref is not None:
            skill_id = int(skill_ref)
        else:
            skill_id = registry.find_skill_id(skill_name.strip())

        lines = []
        for raw in _LINE_SPLIT_RE.split(body):
            if strip_comments:
                raw = _COMMENT_RE.sub("", raw)
            if raw.strip():
                lines.append(raw.strip())

        cache.setdefault(skill_id, []).extend(lines)

    return cache
