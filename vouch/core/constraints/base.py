# vouch/core/constraints/base.py
"""
Constraint base classes.

A constraint either returns the (possibly corrected) value or raises a
``ConstraintViolation``. ``evaluate`` is the non-raising form: it wraps the
outcome in a ``ValidationResult`` so aggregating combinators can collect
failures as data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..component import Validation
from ..results import ValidationResult
from ..violations import ConstraintViolation

if TYPE_CHECKING:
    from ..context import ValidationContext


class Constraint(Validation):
    """Base class of all constraints"""

    def validate(self, value: Any, context: ValidationContext) -> Any:
        """
        Validate ``value`` in ``context``.

        Returns:
            The value, possibly corrected

        Raises:
            ConstraintViolation: If the value is invalid and cannot be corrected
        """
        raise NotImplementedError

    def evaluate(self, value: Any, context: ValidationContext) -> ValidationResult:
        """Validate without raising; violations come back as a failed result"""
        try:
            return ValidationResult.success(self.validate(value, context))
        except ConstraintViolation as violation:
            return ValidationResult.failure(violation)

    def violation(
        self,
        value: Any,
        context: ValidationContext,
        cause: Optional[BaseException] = None,
    ) -> ConstraintViolation:
        """Build a violation of this constraint for ``value``"""
        return ConstraintViolation(self, context, value, cause)


class CheckConstraint(Constraint):
    """Constraint that only checks and never corrects"""

    def check(self, value: Any, context: ValidationContext) -> bool:
        raise NotImplementedError

    def validate(self, value: Any, context: ValidationContext) -> Any:
        if not self.check(value, context):
            raise self.violation(value, context)
        return value


__all__ = ["Constraint", "CheckConstraint"]
