# vouch/core/constraints/cascade.py
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..violations import ValidationFailure
from .base import Constraint

if TYPE_CHECKING:
    from ..context import ValidationContext
    from ..metadata.entity import EntityMeta


class CascadeConstraint(Constraint):
    """
    Validates a nested entity in a child context.

    The child raises a ``cascade`` failure; it becomes the cause of this
    constraint's violation, which adds one segment to violation paths.
    """

    def __init__(self, entity_meta: EntityMeta):
        self.entity_meta = entity_meta

    @property
    def value_type(self) -> Any:
        return self.entity_meta.entity_type

    def message_template(self, context: ValidationContext) -> Optional[str]:
        return None

    def validate(self, value: Any, context: ValidationContext) -> Any:
        if value is None:
            return value
        validator = context.validator.factory.get_validator(self.entity_meta)
        try:
            return validator.new_context(context).validate_entity(value)
        except ValidationFailure as e:
            raise self.violation(value, context, e) from e

    def __repr__(self) -> str:
        return f"CascadeConstraint({self.entity_meta!r})"


__all__ = ["CascadeConstraint"]
