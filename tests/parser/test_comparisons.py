"""Tests for comparison parsing (the text after a condition's subject)."""

import pytest

from skill_ai.ir.conditions import (
    DeadComparison,
    InequalityComparison,
    InequalityOp,
    MembershipComparison,
    NamedComparison,
    NamedPredicate,
    OperandKind,
    TruthyComparison,
)
from skill_ai.ir.content import StateDefinition
from skill_ai.parser.comparisons import parse_comparison
from skill_ai.parser.errors import ComparisonParseError, RuleError, UnknownStateError
from skill_ai.sim.content.registry import ContentRegistry


@pytest.fixture
def registry():
    r = ContentRegistry()
    r.register_state(StateDefinition(id=4, name="Poisoned"))
    r.register_state(StateDefinition(id=11, name="Test State"))
    return r


# ---------------------------------------------------------------------------
# Truthiness and named predicates
# ---------------------------------------------------------------------------

class TestTruthyAndNamed:
    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_is_truthy(self, text):
        assert parse_comparison(text) == TruthyComparison()

    @pytest.mark.parametrize(
        "text,predicate",
        [
            ("zero", NamedPredicate.ZERO),
            ("low", NamedPredicate.LOW),
            ("high", NamedPredicate.HIGH),
            ("max", NamedPredicate.MAX),
            ("lowest", NamedPredicate.LOWEST),
            ("highest", NamedPredicate.HIGHEST),
        ],
    )
    def test_named_predicates(self, text, predicate):
        assert parse_comparison(text) == NamedComparison(predicate=predicate)

    def test_named_is_case_insensitive(self):
        assert parse_comparison("  LoW ") == NamedComparison(predicate=NamedPredicate.LOW)

    def test_lowest_not_read_as_low(self):
        assert parse_comparison("lowest").predicate is NamedPredicate.LOWEST


# ---------------------------------------------------------------------------
# Inequalities
# ---------------------------------------------------------------------------

class TestInequality:
    @pytest.mark.parametrize(
        "text,op",
        [
            ("below 5", InequalityOp.BELOW),
            ("above 5", InequalityOp.ABOVE),
            ("equal 5", InequalityOp.EQUAL),
            ("equals 5", InequalityOp.EQUAL),
            ("not equal 5", InequalityOp.NOT_EQUAL),
            ("not  equals 5", InequalityOp.NOT_EQUAL),
        ],
    )
    def test_operators(self, text, op):
        comparison = parse_comparison(text)
        assert comparison == InequalityComparison(
            op=op, operand_kind=OperandKind.LITERAL, operand=5,
        )

    def test_percentage(self):
        comparison = parse_comparison("below 20%")
        assert comparison.operand_kind is OperandKind.PERCENT
        assert comparison.operand == 20

    def test_variable_operand(self):
        comparison = parse_comparison("equal variable 2")
        assert comparison.operand_kind is OperandKind.VARIABLE
        assert comparison.operand == 2

    def test_negative_literal_rejected(self):
        with pytest.raises(ComparisonParseError):
            parse_comparison("below -5")

    def test_missing_operand_rejected(self):
        with pytest.raises(ComparisonParseError):
            parse_comparison("above")


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

class TestMembership:
    def test_numeric_id(self):
        assert parse_comparison("is 3") == MembershipComparison(value_id=3)

    def test_negated_numeric_id(self):
        assert parse_comparison("is not 3") == MembershipComparison(negated=True, value_id=3)

    def test_on_off(self):
        assert parse_comparison("is on") == MembershipComparison(flag=True)
        assert parse_comparison("is OFF") == MembershipComparison(flag=False)
        assert parse_comparison("is not on") == MembershipComparison(negated=True, flag=True)

    def test_dead(self):
        assert parse_comparison("is dead") == DeadComparison()
        assert parse_comparison("is not dead") == DeadComparison(negated=True)
        assert parse_comparison("IS DEAD") == DeadComparison()

    def test_state_name_resolves_to_id(self, registry):
        assert parse_comparison("is Test State", registry) == MembershipComparison(value_id=11)

    def test_state_name_is_case_insensitive(self, registry):
        assert parse_comparison("is not poisoned", registry) == MembershipComparison(
            negated=True, value_id=4,
        )

    def test_unknown_state_raises(self, registry):
        with pytest.raises(UnknownStateError, match="Petrified"):
            parse_comparison("is Petrified", registry)

    def test_state_name_without_registry_raises(self):
        with pytest.raises(UnknownStateError):
            parse_comparison("is Poisoned")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestMalformed:
    @pytest.mark.parametrize("text", ["lowish", "beneath 5", "5", "is"])
    def test_unrecognised_text_raises(self, text):
        with pytest.raises(ComparisonParseError) as excinfo:
            parse_comparison(text)
        assert excinfo.value.text == text

    @pytest.mark.parametrize("text", ["is Protected // shielded", "is not Poisoned // note"])
    def test_comment_after_state_name_raises(self, registry, text):
        with pytest.raises(ComparisonParseError):
            parse_comparison(text, registry)

    @pytest.mark.parametrize("text", ["is not", "IS NOT  ", "is not not"])
    def test_is_not_without_operand_raises(self, registry, text):
        with pytest.raises(ComparisonParseError):
            parse_comparison(text, registry)

    def test_state_name_starting_with_not(self, registry):
        registry.register_state(StateDefinition(id=12, name="Nothingness"))
        assert parse_comparison("is Nothingness", registry) == MembershipComparison(value_id=12)

    def test_errors_share_a_base(self):
        assert issubclass(ComparisonParseError, RuleError)
        assert issubclass(UnknownStateError, RuleError)
        assert issubclass(RuleError, ValueError)
