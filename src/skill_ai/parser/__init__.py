"""Rule text parsing: ``<skill-ai>`` blocks, rule lines, conditions and
comparisons."""

from .blocks import RuleCache, parse_rule_blocks
from .comparisons import parse_comparison
from .conditions import parse_condition, parse_target_condition, split_condition
from .errors import (
    ComparisonParseError,
    ConditionParseError,
    RuleError,
    UnknownSkillError,
    UnknownStateError,
)
from .rules import compile_rules, parse_rating_rule, parse_rule_line, parse_target_rule

__all__ = [
    # blocks
    "RuleCache",
    "parse_rule_blocks",
    # comparisons
    "parse_comparison",
    # conditions
    "parse_condition",
    "parse_target_condition",
    "split_condition",
    # errors
    "ComparisonParseError",
    "ConditionParseError",
    "RuleError",
    "UnknownSkillError",
    "UnknownStateError",
    # rules
    "compile_rules",
    "parse_rating_rule",
    "parse_rule_line",
    "parse_target_rule",
]
