# vouch/core/constraints/wrappers.py
"""
Constraint wrappers: group filtering and message override.

A wrapper delegates to the wrapped constraint and reports a failure as its
own violation, with the wrapped violation as the cause.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Tuple

from ...errors import DeclarationError, MissingMessageError
from ..violations import ConstraintViolation
from .base import Constraint

if TYPE_CHECKING:
    from ..context import ValidationContext


class ConstraintWrapper(Constraint):
    def __init__(self, constraint: Constraint):
        if not isinstance(constraint, Constraint):
            raise DeclarationError.invalid(f"{type(self).__name__} wraps constraints only")
        self.constraint = constraint

    @property
    def value_type(self) -> Any:
        return self.constraint.value_type

    def message_template(self, context: ValidationContext) -> Optional[str]:
        return self.constraint.message_template(context)

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        return self.constraint.append_message_arguments(context, arguments)

    def validate(self, value: Any, context: ValidationContext) -> Any:
        try:
            return self.constraint.validate(value, context)
        except ConstraintViolation as e:
            raise self.violation(value, context, e) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.constraint!r})"


class GroupConstraint(ConstraintWrapper):
    """
    Applies the wrapped constraint only when one of ``groups`` is active.

    A context with no active groups validates every group.
    """

    def __init__(self, constraint: Constraint, groups: Iterable[str]):
        super().__init__(constraint)
        groups = tuple(dict.fromkeys(groups))
        if not groups:
            raise DeclarationError.invalid("Constraint groups must not be empty")
        if any(group is None for group in groups):
            raise DeclarationError.invalid("Constraint groups must not contain None")
        self.groups: Tuple[str, ...] = groups

    def message_template(self, context: ValidationContext) -> Optional[str]:
        if context.accepts_groups(self.groups):
            return self.constraint.message_template(context)
        return None

    def validate(self, value: Any, context: ValidationContext) -> Any:
        if context.accepts_groups(self.groups):
            return super().validate(value, context)
        return value

    def __repr__(self) -> str:
        return f"GroupConstraint({self.constraint!r}, groups={list(self.groups)})"


class MessageConstraint(ConstraintWrapper):
    """
    Overrides the wrapped constraint's message.

    ``message`` is resolved as a message key first; when no resolver knows
    it, the text itself is the template.
    """

    def __init__(self, constraint: Constraint, message: str):
        super().__init__(constraint)
        if not message:
            raise DeclarationError.invalid("Message override must not be empty")
        self.message = message

    def message_template(self, context: ValidationContext) -> Optional[str]:
        try:
            return context.resolve_message(self.message)
        except MissingMessageError:
            return self.message

    def __repr__(self) -> str:
        return f"MessageConstraint({self.constraint!r}, {self.message!r})"


__all__ = ["ConstraintWrapper", "GroupConstraint", "MessageConstraint"]
