"""Rule-line parser -- turns one raw line of a ``<skill-ai>`` block into a
:class:`RatingRule` or :class:`TargetRule`.

A line that does not fit a grammar, or whose condition cannot be parsed,
is logged and skipped so that one typo does not disable the other rules
for the same skill.  Unresolvable skill or state *names* are authoring
errors and propagate.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Iterable

from pydantic import ValidationError

from skill_ai.ir.rules import RatingRule, Rule, RuleDirection, TargetRule
from skill_ai.parser.conditions import parse_condition, parse_target_condition
from skill_ai.parser.errors import (
    ComparisonParseError,
    ConditionParseError,
    UnknownStateError,
)

if TYPE_CHECKING:
    from skill_ai.sim.content.registry import ContentRegistry

logger = logging.getLogger(__name__)

_RATING_RE = re.compile(r"^\s*(boost|nerf)\s+(\d+)\s+when\s+(.*?)\s*$", re.IGNORECASE)
_TARGET_RE = re.compile(
    r"^\s*target"
    r"(?:\s+(?:(\d*\.?\d+)x|(only)))?"
    r"(?:\s+\.([a-z_]\w*))?"
    r"(?:\s+(.*?))?\s*$",
    re.IGNORECASE,
)

_RECOVERABLE = (ComparisonParseError, ConditionParseError, ValidationError)


def parse_rating_rule(line: str, registry: ContentRegistry | None = None) -> RatingRule | None:
    """Parse a ``boost|nerf N when <condition>`` line.

    Returns ``None`` if *line* is not a rating rule or is malformed.
    """
    match = _RATING_RE.match(line)
    if match is None:
        return None
    try:
        return RatingRule(
            direction=RuleDirection(match.group(1).lower()),
            magnitude=int(match.group(2)),
            condition=parse_condition(match.group(3), registry),
            source=line,
        )
    except _RECOVERABLE as exc:
        logger.warning("Skipping malformed rating rule %r: %s", line, exc)
        return None


def parse_target_rule(line: str, registry: ContentRegistry | None = None) -> TargetRule | None:
    """Parse a ``target [Nx|only] [.prop] <comparison>`` line.

    Returns ``None`` if *line* is not a target rule or is malformed.
    """
    match = _TARGET_RE.match(line)
    if match is None:
        return None
    rate, only, prop_name, residual = match.group(1, 2, 3, 4)
    try:
        return TargetRule(
            multiplier=float(rate) if rate is not None else None,
            exclusive=only is not None,
            condition=parse_target_condition(prop_name, residual, registry),
            source=line,
        )
    except _RECOVERABLE as exc:
        logger.warning("Skipping malformed target rule %r: %s", line, exc)
        return None


def parse_rule_line(line: str, registry: ContentRegistry | None = None) -> Rule | None:
    """Parse *line* as whichever rule kind it is, or ``None``."""
    if _RATING_RE.match(line):
        return parse_rating_rule(line, registry)
    if _TARGET_RE.match(line):
        return parse_target_rule(line, registry)
    logger.warning("Skipping unrecognised rule line %r", line)
    return None


def compile_rules(lines: Iterable[str], registry: ContentRegistry | None = None) -> list[Rule]:
    """Parse every line of a skill's rule list, dropping unusable lines.

    Source order is preserved.

    Raises
    ------
    UnknownStateError
        If any line names a status effect missing from *registry*.
    """
    rules: list[Rule] = []
    for line in lines:
        try:
            rule = parse_rule_line(line, registry)
        except UnknownStateError:
            logger.error("Rule line %r references an unknown state", line)
            raise
        if rule is not None:
            rules.append(rule)
    return rules
