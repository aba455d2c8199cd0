"""
Tests for constraint combinators and wrappers

Tests cover:
- Composition: ordered corrections, first failure propagated as-is
- Conjunction / Disjunction aggregation
- Negation
- all_of / any_of / none_of shortcuts and leaf flattening
- Group filtering
- Non-raising evaluation
"""

import pytest

from vouch.core import DEFAULT_GROUP, ConstraintViolation, ValidationFailure, flatten
from vouch.core.constraints import (
    CheckConstraint,
    Composition,
    Conjunction,
    Constraint,
    Disjunction,
    GroupConstraint,
    MessageConstraint,
    Negation,
    all_of,
    any_of,
    none_of,
)
from vouch.errors import DeclarationError


class Fails(CheckConstraint):
    message_key = "constraint.predicate"

    def check(self, value, context):
        return False


class Passes(CheckConstraint):
    def check(self, value, context):
        return True


class Upper(Constraint):
    def validate(self, value, context):
        return value.upper()


class Suffix(Constraint):
    def __init__(self, suffix):
        self.suffix = suffix

    def validate(self, value, context):
        return value + self.suffix


class TestComposition:
    """Test chained constraints"""

    def test_threads_corrections(self, context):
        assert Composition(Upper(), Suffix("!")).validate("v", context) == "V!"

    def test_first_failure_propagates_unchanged(self, context):
        failing = Fails()
        with pytest.raises(ConstraintViolation) as exc_info:
            Composition(Upper(), failing, Suffix("!")).validate("v", context)

        assert exc_info.value.constraint is failing
        assert exc_info.value.invalid_value == "V"
        assert exc_info.value.failure is None


class TestConjunction:
    """Test AND semantics"""

    def test_two_failures(self, context):
        with pytest.raises(ConstraintViolation) as exc_info:
            Conjunction(Fails(), Fails()).validate("v", context)
        assert len(exc_info.value.failure) == 2

    def test_one_failure(self, context):
        with pytest.raises(ConstraintViolation) as exc_info:
            Conjunction(Fails(), Passes()).validate("v", context)
        assert len(exc_info.value.failure) == 1

    def test_does_not_correct(self, context):
        assert Conjunction(Upper(), Passes()).validate("v", context) == "v"

    def test_fail_fast(self, factory):
        context = factory.new_context().fail_fast().build()
        with pytest.raises(ConstraintViolation) as exc_info:
            Conjunction(Fails(), Fails()).validate("v", context)
        assert len(exc_info.value.failure) == 1

    def test_leaves_are_the_parts(self, context):
        """Test that iterating the failure yields the part violations"""
        with pytest.raises(ConstraintViolation) as exc_info:
            Conjunction(Fails(), Fails()).validate("v", context)
        leaves = list(ValidationFailure([exc_info.value]))
        assert len(leaves) == 2
        assert all(isinstance(v.constraint, Fails) for v in leaves)


class TestDisjunction:
    """Test OR semantics"""

    def test_two_failures(self, context):
        with pytest.raises(ConstraintViolation) as exc_info:
            Disjunction(Fails(), Fails()).validate("v", context)
        assert len(exc_info.value.failure) == 2

    def test_succeeds_when_one_part_succeeds(self, context):
        assert Disjunction(Fails(), Passes()).validate("v", context) == "v"

    def test_returns_first_successful_correction(self, context):
        assert Disjunction(Fails(), Upper(), Suffix("!")).validate("v", context) == "V"


class TestNegation:
    """Test NOT semantics"""

    def test_negated_success_fails(self, context):
        negation = Negation(Passes())
        with pytest.raises(ConstraintViolation) as exc_info:
            negation.validate("v", context)
        assert exc_info.value.constraint is negation
        assert len(list(ValidationFailure([exc_info.value]))) == 1

    def test_negated_failure_passes_unchanged(self, context):
        assert Negation(Fails()).validate("v", context) == "v"

    def test_any_success_fails(self, context):
        with pytest.raises(ConstraintViolation):
            Negation(Fails(), Passes()).validate("v", context)


class TestHelpers:
    """Test the all_of / any_of / none_of shortcuts"""

    @pytest.mark.parametrize("helper", [all_of, any_of])
    def test_single_constraint_returned_as_is(self, helper):
        only = Passes()
        assert helper(only) is only

    @pytest.mark.parametrize("helper,combinator", [(all_of, Conjunction), (any_of, Disjunction), (none_of, Negation)])
    def test_several_constraints_combined(self, helper, combinator):
        parts = (Passes(), Fails())
        combined = helper(*parts)
        assert type(combined) is combinator
        assert tuple(combined.constraints) == parts

    def test_none_of_single_constraint_negates(self, context):
        assert isinstance(none_of(Passes()), Negation)
        assert none_of(Fails()).validate("v", context) == "v"

    def test_helpers_validate(self, context):
        assert any_of(Fails(), Upper()).validate("v", context) == "V"
        with pytest.raises(ConstraintViolation):
            all_of(Passes(), Fails()).validate("v", context)


class TestFlatten:
    """Test leaf extraction from nested aggregates"""

    def test_nested_conjunction_leaves(self, context):
        inner_fail, outer_fail = Fails(), Fails()
        with pytest.raises(ConstraintViolation) as exc_info:
            Conjunction(outer_fail, Conjunction(inner_fail, Passes())).validate("v", context)

        leaves = flatten([exc_info.value])
        assert [v.constraint for v in leaves] == [outer_fail, inner_fail]

    def test_plain_violation_is_its_own_leaf(self, context):
        with pytest.raises(ConstraintViolation) as exc_info:
            Fails().validate("v", context)
        assert flatten([exc_info.value]) == [exc_info.value]

    def test_empty(self):
        assert flatten([]) == []


class TestDeclaration:
    """Test combinator declaration errors"""

    @pytest.mark.parametrize("combinator", [Composition, Conjunction, Disjunction, Negation])
    def test_requires_constraints(self, combinator):
        with pytest.raises(DeclarationError):
            combinator()

    def test_rejects_non_constraints(self):
        with pytest.raises(DeclarationError):
            Conjunction(Passes(), "not a constraint")


class TestEvaluate:
    """Test the non-raising form"""

    def test_success(self, context):
        result = Upper().evaluate("v", context)
        assert result.valid
        assert result.value == "V"
        assert result.unwrap() == "V"

    def test_failure(self, context):
        result = Fails().evaluate("v", context)
        assert not result.valid
        assert isinstance(result.violation, ConstraintViolation)
        with pytest.raises(ConstraintViolation):
            result.unwrap()


class TestGroups:
    """Test group filtering"""

    def test_skipped_for_other_group(self, factory):
        constraint = GroupConstraint(Fails(), ["update"])
        context = factory.new_context().groups("create").build()
        assert constraint.validate("v", context) == "v"
        assert constraint.message_template(context) is None

    def test_active_for_all_groups(self, factory):
        constraint = GroupConstraint(Fails(), ["update"])
        with pytest.raises(ConstraintViolation):
            constraint.validate("v", factory.new_context().build())

    def test_active_for_matching_group(self, factory):
        constraint = GroupConstraint(Fails(), ["update"])
        with pytest.raises(ConstraintViolation):
            constraint.validate("v", factory.new_context().groups("create", "update").build())

    def test_default_group(self, factory):
        constraint = GroupConstraint(Fails(), [DEFAULT_GROUP])
        with pytest.raises(ConstraintViolation):
            constraint.validate("v", factory.new_context().groups(DEFAULT_GROUP).build())
        assert constraint.validate("v", factory.new_context().groups("update").build()) == "v"

    def test_empty_groups_rejected(self):
        with pytest.raises(DeclarationError):
            GroupConstraint(Fails(), [])


class TestMessageOverride:
    """Test message wrappers"""

    def test_violation_carries_override(self, context):
        with pytest.raises(ConstraintViolation) as exc_info:
            MessageConstraint(Fails(), "custom text").validate("v", context)
        assert exc_info.value.message == "custom text"
        assert isinstance(exc_info.value.cause, ConstraintViolation)
