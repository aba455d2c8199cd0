# vouch/core/component.py
"""
Validation component capability shared by constraints and converters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Dict, Optional

from ..errors import MissingMessageError

if TYPE_CHECKING:
    from .context import ValidationContext


class Validation:
    """
    Base class of every validation component.

    A component exposes the type of value it handles, an optional message
    template and the arguments that template is rendered with. Returning
    False from ``append_message_arguments`` tells the message builder to use
    the template verbatim.
    """

    message_key: ClassVar[Optional[str]] = None

    @property
    def value_type(self) -> Any:
        return object

    def message_template(self, context: ValidationContext) -> Optional[str]:
        key = self.message_key or f"{type(self).__module__}.{type(self).__qualname__}"
        try:
            return context.resolve_message(key)
        except MissingMessageError:
            return None

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        arguments["context"] = context
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["Validation"]
