# vouch/core/converters/base.py
"""
Converter base: bidirectional mapping between text and typed values.

Contract:
- ``decode`` may raise ``MalformedValue``; blank text decodes to None
  (sequence converters decode it to an empty value instead)
- ``encode`` is total; None encodes to ``""``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from ..component import Validation
from ..violations import MalformedValue

if TYPE_CHECKING:
    from ..context import ValidationContext


class Converter(Validation):
    """
    Base class of all converters.

    Subclasses implement ``_decode`` / ``_encode``. A ``ValueError`` or
    ``ArithmeticError`` raised by ``_decode`` is reported as a
    ``MalformedValue`` for this converter.
    """

    message_key = "converter.malformed"

    def __init__(self, value_type: Any = object):
        self._value_type = value_type

    @property
    def value_type(self) -> Any:
        return self._value_type

    def decode(self, text: Optional[str], context: ValidationContext) -> Any:
        if text is None:
            return None
        text = text.strip()
        if not text:
            return None
        return self._convert(text, context)

    def _convert(self, text: str, context: ValidationContext) -> Any:
        """Run ``_decode`` on ``text`` as given, reporting errors as ``MalformedValue``"""
        try:
            return self._decode(text, context)
        except (ValueError, ArithmeticError, IndexError) as e:
            raise MalformedValue(self, context, text, cause=e) from e

    def encode(self, value: Any, context: ValidationContext) -> str:
        if value is None:
            return ""
        return self._encode(value, context)

    def _decode(self, text: str, context: ValidationContext) -> Any:
        raise NotImplementedError

    def _encode(self, value: Any, context: ValidationContext) -> str:
        return str(value)

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["type"] = _type_name(self.value_type)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({_type_name(self.value_type)})"


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or str(value_type)


__all__ = ["Converter"]
