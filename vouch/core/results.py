# vouch/core/results.py
"""
Non-raising validation outcomes.

Constraints signal failure by raising ``ConstraintViolation``; the
aggregating combinators work on ``ValidationResult`` values instead, so
partial-failure collection is explicit data flow rather than nested
try/except blocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .violations import Violation


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one constraint evaluation"""
    valid: bool
    value: Any = None
    violation: Optional[Violation] = None

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful result carrying the (possibly corrected) value"""
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, violation: Violation) -> ValidationResult:
        """Create a failed result carrying the violation"""
        return cls(valid=False, value=violation.invalid_value, violation=violation)

    def unwrap(self) -> Any:
        """Return the value or re-raise the violation"""
        if self.violation is not None:
            raise self.violation
        return self.value


__all__ = ["ValidationResult"]
