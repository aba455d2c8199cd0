# vouch/core/constraints/elements.py
"""
Target dispatch for composite values.

Dispatchers apply an element constraint to every element (or key, or
mapping value) of a composite, with the context's target and index scoped
to the element being checked. Element violations are collected into one
aggregate; corrected elements are written back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

from ...errors import DeclarationError, TargetDeclarationError
from ..targets import Target, has_elements, has_keys
from ..violations import ConstraintViolation, ValidationFailure
from .base import Constraint

if TYPE_CHECKING:
    from ..context import ValidationContext


class SequenceElementConstraint(Constraint):
    """Base class of dispatchers; ``None`` composites pass untouched"""

    def __init__(self, constraint: Constraint):
        if not isinstance(constraint, Constraint):
            raise DeclarationError.invalid(f"{type(self).__name__} wraps constraints only")
        self.constraint = constraint

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["constraint"] = self.constraint
        return True

    def validate(self, value: Any, context: ValidationContext) -> Any:
        if value is None:
            return value
        violations: List[ConstraintViolation] = []
        value = self._validate_elements(value, context, violations)
        if violations:
            raise self.violation(value, context, ValidationFailure(violations))
        return value

    def _validate_elements(self, value: Any, context: ValidationContext, violations: List[ConstraintViolation]) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.constraint!r})"


class ElementsConstraint(SequenceElementConstraint):
    """
    Validates the elements of lists, tuples and sets.

    Lists are corrected in place; other collections are rebuilt when an
    element was corrected.
    """

    message_key = "constraint.elements"

    @property
    def value_type(self) -> Any:
        return list

    def _validate_elements(self, value, context, violations):
        items = list(value)
        changed = False
        for index, item in enumerate(items):
            with context.scoped(target=Target.ELEMENTS, index=index):
                result = self.constraint.evaluate(item, context)
            if not result.valid:
                violations.append(result.violation)
                if context.fail_fast:
                    break
                continue
            if result.value is not item:
                items[index] = result.value
                changed = True
        if not changed:
            return value
        if isinstance(value, list):
            value[:] = items
            return value
        return type(value)(items)


class KeysConstraint(SequenceElementConstraint):
    """Validates mapping keys; corrected keys are re-inserted"""

    message_key = "constraint.keys"

    @property
    def value_type(self) -> Any:
        return dict

    def _validate_elements(self, value, context, violations):
        renamed = {}
        for key in list(value):
            with context.scoped(target=Target.KEYS, index=key):
                result = self.constraint.evaluate(key, context)
            if not result.valid:
                violations.append(result.violation)
                if context.fail_fast:
                    break
                continue
            if result.value != key:
                renamed[result.value] = value.pop(key)
        value.update(renamed)
        return value


class ValuesConstraint(SequenceElementConstraint):
    """Validates mapping values, indexed by their key"""

    message_key = "constraint.elements"

    @property
    def value_type(self) -> Any:
        return dict

    def _validate_elements(self, value, context, violations):
        for key, item in list(value.items()):
            with context.scoped(target=Target.ELEMENTS, index=key):
                result = self.constraint.evaluate(item, context)
            if not result.valid:
                violations.append(result.violation)
                if context.fail_fast:
                    break
                continue
            if result.value is not item:
                value[key] = result.value
        return value


def targeted(constraint: Constraint, target: Target, carrier_type: Any) -> Constraint:
    """
    Apply ``constraint`` to the ``target`` part of values of ``carrier_type``.

    Raises:
        TargetDeclarationError: If the carrier type has no keys/elements
    """
    target = Target(target)
    if target is Target.KEYS:
        if not has_keys(carrier_type):
            raise TargetDeclarationError.for_target(target, carrier_type)
        return KeysConstraint(constraint)
    if target is Target.ELEMENTS:
        if not has_elements(carrier_type):
            raise TargetDeclarationError.for_target(target, carrier_type)
        if has_keys(carrier_type):
            return ValuesConstraint(constraint)
        return ElementsConstraint(constraint)
    return constraint


__all__ = [
    "SequenceElementConstraint",
    "ElementsConstraint",
    "KeysConstraint",
    "ValuesConstraint",
    "targeted",
]
