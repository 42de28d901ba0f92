"""Exceptions raised while turning rule text into IR."""

from __future__ import annotations


class RuleError(ValueError):
    """Base class for every rule-text problem."""


class UnknownSkillError(RuleError):
    """A ``<skill-ai NAME>`` block names a skill that is not in the catalogue.

    Fatal: the annotation must be fixed before the template is usable.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find skill {name!r}")
        self.name = name


class UnknownStateError(RuleError):
    """A comparison names a status effect that is not in the catalogue.

    Fatal for the same reason as :class:`UnknownSkillError`.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find state {name!r}")
        self.name = name


class ComparisonParseError(RuleError):
    """Comparison text matches none of the recognised forms."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Could not parse comparison {text!r}")
        self.text = text


class ConditionParseError(RuleError):
    """Condition clause matches none of the recognised subject forms."""

    def __init__(self, text: str, reason: str = "no subject form matches") -> None:
        super().__init__(f"Could not parse condition {text!r}: {reason}")
        self.text = text
