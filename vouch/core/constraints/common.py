# vouch/core/constraints/common.py
"""
Leaf constraints.

Checks pass ``None`` through unless they are about nullness; combine with
``NotNull`` to require a value.
"""

from __future__ import annotations

import operator
import re
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Pattern as RegexPattern, Union

from ...errors import DeclarationError
from .base import CheckConstraint, Constraint

if TYPE_CHECKING:
    from ..context import ValidationContext


class NotNull(CheckConstraint):
    message_key = "constraint.not_null"

    def check(self, value, context):
        return value is not None


class NotEmpty(CheckConstraint):
    """Rejects ``None`` and empty strings/collections"""

    message_key = "constraint.not_empty"

    def check(self, value, context):
        return value is not None and len(value) > 0


class _Bounded(CheckConstraint):
    def __init__(self, min: Any = None, max: Any = None):
        if min is None and max is None:
            raise DeclarationError.invalid(f"{type(self).__name__} requires min or max")
        if min is not None and max is not None and min > max:
            raise DeclarationError.invalid(
                f"{type(self).__name__} min is greater than max", min=min, max=max
            )
        self.min = min
        self.max = max

    def _within(self, measure: Any) -> bool:
        if self.min is not None and measure < self.min:
            return False
        if self.max is not None and measure > self.max:
            return False
        return True

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["min"] = self.min
        arguments["max"] = self.max
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(min={self.min!r}, max={self.max!r})"


class Size(_Bounded):
    """Length bounds for strings and collections"""

    message_key = "constraint.size"

    def check(self, value, context):
        return value is None or self._within(len(value))


class Range(_Bounded):
    """Value bounds for anything ordered"""

    message_key = "constraint.range"

    def check(self, value, context):
        return value is None or self._within(value)


class Pattern(CheckConstraint):
    """The whole string must match ``regex``"""

    message_key = "constraint.pattern"

    def __init__(self, regex: Union[str, RegexPattern], flags: int = 0):
        try:
            self.regex = re.compile(regex, flags) if isinstance(regex, str) else regex
        except re.error as e:
            raise DeclarationError.invalid(f"Invalid regular expression: {regex!r}", error=str(e)) from e

    @property
    def value_type(self) -> Any:
        return str

    def check(self, value, context):
        return value is None or self.regex.fullmatch(value) is not None

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["regex"] = self.regex.pattern
        return True

    def __repr__(self) -> str:
        return f"Pattern({self.regex.pattern!r})"


class Trim(Constraint):
    """Corrects strings by stripping surrounding whitespace"""

    @property
    def value_type(self) -> Any:
        return str

    def validate(self, value, context):
        return value.strip() if isinstance(value, str) else value


class DefaultValue(Constraint):
    """Corrects ``None`` to a fixed value"""

    def __init__(self, value: Any):
        self.value = value

    def validate(self, value, context):
        return self.value if value is None else value

    def __repr__(self) -> str:
        return f"DefaultValue({self.value!r})"


class Predicate(CheckConstraint):
    """Check backed by a callable ``fn(value) -> bool``"""

    def __init__(self, fn: Callable[[Any], bool], message_key: Optional[str] = None):
        if not callable(fn):
            raise DeclarationError.invalid("Predicate requires a callable")
        self.fn = fn
        self.message_key = message_key or "constraint.predicate"

    def check(self, value, context):
        return bool(self.fn(value))

    def __repr__(self) -> str:
        return f"Predicate({getattr(self.fn, '__name__', self.fn)!r})"


_COMPARISONS: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
}


class PropertyComparison(CheckConstraint):
    """
    Compares the value with a sibling property of the current entity.

    ``None`` on either side passes the ordering operators. Without a current
    entity (plain value validation) the check passes.
    """

    def __init__(self, property: str, op: str = "eq"):
        if not property:
            raise DeclarationError.invalid("PropertyComparison requires a property name")
        if op not in _COMPARISONS:
            raise DeclarationError.invalid(
                f"Unknown comparison operator: {op!r}", allowed=sorted(_COMPARISONS)
            )
        self.property = property
        self.op = op
        self.message_key = f"constraint.property_comparison.{op}"

    def check(self, value, context):
        entity = context.current_entity
        if entity is None:
            return True
        other = context.validator.get_value(entity, self.property)
        if self.op in ("eq", "ne"):
            return _COMPARISONS[self.op](value, other)
        if value is None or other is None:
            return True
        return _COMPARISONS[self.op](value, other)

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["property"] = self.property
        return True

    def __repr__(self) -> str:
        return f"PropertyComparison({self.property!r}, {self.op!r})"


__all__ = [
    "NotNull",
    "NotEmpty",
    "Size",
    "Range",
    "Pattern",
    "Trim",
    "DefaultValue",
    "Predicate",
    "PropertyComparison",
]
