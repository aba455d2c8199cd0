# vouch/core/constraints/combinators.py
"""
Constraint combinators.

- Composition: chain, each part sees the previous part's output; the first
  violation propagates unchanged
- Conjunction: every part sees the original value; all violations are
  collected into one aggregate; the value is returned unchanged
- Disjunction: first part that succeeds wins; otherwise all violations are
  aggregated
- Negation: fails when any wrapped part succeeds
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from ...errors import DeclarationError
from ..violations import ConstraintViolation, ValidationFailure
from .base import Constraint

if TYPE_CHECKING:
    from ..context import ValidationContext


class ConstraintAggregation(Constraint):
    """Base class of combinators over one or more constraints"""

    def __init__(self, *constraints: Constraint):
        if not constraints:
            raise DeclarationError.invalid(f"{type(self).__name__} requires at least one constraint")
        for constraint in constraints:
            if not isinstance(constraint, Constraint):
                raise DeclarationError.invalid(
                    f"{type(self).__name__} accepts constraints only",
                    component=repr(constraint),
                )
        self.constraints: Sequence[Constraint] = tuple(constraints)

    @property
    def value_type(self) -> Any:
        return _common_type([c.value_type for c in self.constraints])

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["constraints"] = list(self.constraints)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(c) for c in self.constraints)})"


class Composition(ConstraintAggregation):
    """
    Applies constraints in order, threading corrections through.

    The message is the newline-joined messages of the parts, used verbatim.
    """

    def message_template(self, context: ValidationContext) -> Optional[str]:
        messages = [context.build_message(c) for c in self.constraints]
        text = "\n".join(m for m in messages if m)
        return text or None

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        return False

    def validate(self, value: Any, context: ValidationContext) -> Any:
        for constraint in self.constraints:
            value = constraint.validate(value, context)
        return value


class Conjunction(ConstraintAggregation):
    message_key = "constraint.conjunction"

    def validate(self, value: Any, context: ValidationContext) -> Any:
        violations: List[ConstraintViolation] = []
        for constraint in self.constraints:
            result = constraint.evaluate(value, context)
            if result.valid:
                continue
            violations.append(result.violation)
            if context.fail_fast:
                break
        if violations:
            raise self.violation(value, context, ValidationFailure(violations))
        return value


class Disjunction(ConstraintAggregation):
    message_key = "constraint.disjunction"

    def validate(self, value: Any, context: ValidationContext) -> Any:
        violations: List[ConstraintViolation] = []
        for constraint in self.constraints:
            result = constraint.evaluate(value, context)
            if result.valid:
                return result.value
            violations.append(result.violation)
        raise self.violation(value, context, ValidationFailure(violations))


class Negation(ConstraintAggregation):
    message_key = "constraint.negation"

    def validate(self, value: Any, context: ValidationContext) -> Any:
        for constraint in self.constraints:
            if constraint.evaluate(value, context).valid:
                raise self.violation(value, context)
        return value


def _common_type(types: List[Any]) -> Any:
    # Most specific type every part accepts; falls back to object.
    candidates = [t for t in types if isinstance(t, type)]
    if len(candidates) != len(types):
        return object
    for candidate in sorted(candidates, key=lambda t: len(t.__mro__), reverse=True):
        if all(issubclass(candidate, t) for t in candidates):
            return candidate
    return object


def compose(*constraints: Constraint) -> Constraint:
    """Single constraint as-is, several as a ``Composition``"""
    return constraints[0] if len(constraints) == 1 else Composition(*constraints)


def all_of(*constraints: Constraint) -> Constraint:
    return constraints[0] if len(constraints) == 1 else Conjunction(*constraints)


def any_of(*constraints: Constraint) -> Constraint:
    return constraints[0] if len(constraints) == 1 else Disjunction(*constraints)


def none_of(*constraints: Constraint) -> Constraint:
    return Negation(*constraints)


__all__ = [
    "ConstraintAggregation",
    "Composition",
    "Conjunction",
    "Disjunction",
    "Negation",
    "compose",
    "all_of",
    "any_of",
    "none_of",
]
