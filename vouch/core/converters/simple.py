# vouch/core/converters/simple.py
"""
Leaf converters for scalar types.

Canonical text (plain numbers, ISO dates) is used unless the context asks
for localized conversion, in which case numbers and dates go through the
context's locale-aware formats.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Type

from ..violations import MalformedValue
from .base import Converter

if TYPE_CHECKING:
    from ..context import ValidationContext


class StringConverter(Converter):
    message_key = "converter.string"

    def __init__(self):
        super().__init__(str)

    def _decode(self, text, context):
        return text


class IntegerConverter(Converter):
    message_key = "converter.integer"

    def __init__(self):
        super().__init__(int)

    def _decode(self, text, context):
        if context.localized_convert:
            return context.integer_format().parse(text)
        return int(text)

    def _encode(self, value, context):
        if context.localized_convert:
            return context.integer_format().format(value)
        return str(int(value))


class FloatConverter(Converter):
    message_key = "converter.decimal"

    def __init__(self):
        super().__init__(float)

    def _decode(self, text, context):
        if context.localized_convert:
            return float(context.decimal_format().parse(text))
        return float(text)

    def _encode(self, value, context):
        if context.localized_convert:
            return context.decimal_format().format(value)
        return repr(float(value))


class DecimalConverter(Converter):
    message_key = "converter.decimal"

    def __init__(self):
        super().__init__(Decimal)

    def _decode(self, text, context):
        if context.localized_convert:
            return context.decimal_format().parse(text)
        return Decimal(text)

    def _encode(self, value, context):
        if context.localized_convert:
            return context.decimal_format().format(value)
        return str(value)


class BooleanConverter(Converter):
    """Accepts ``true`` / ``false`` in any letter case"""

    message_key = "converter.boolean"

    def __init__(self):
        super().__init__(bool)

    def _decode(self, text, context):
        lowered = text.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(f"not a boolean: {text!r}")

    def _encode(self, value, context):
        return "true" if value else "false"


class DateConverter(Converter):
    message_key = "converter.date"

    def __init__(self):
        super().__init__(date)

    def _decode(self, text, context):
        if context.localized_convert:
            return context.date_format().parse_date(text)
        return date.fromisoformat(text)

    def _encode(self, value, context):
        if context.localized_convert:
            return context.date_format().format(value)
        return value.isoformat()


class DateTimeConverter(Converter):
    """
    Timestamps are always decoded from ISO 8601 text; localized conversion
    only affects encoding (date style plus medium time style).
    """

    message_key = "converter.datetime"

    def __init__(self):
        super().__init__(datetime)

    def _decode(self, text, context):
        return datetime.fromisoformat(text)

    def _encode(self, value, context):
        if context.localized_convert:
            current = context.date_format()
            return context.date_format(date_style=current.date_style, time_style="medium").format(value)
        return value.isoformat()


class EnumConverter(Converter):
    """Decodes a member by name, then by value text; encodes the name"""

    message_key = "converter.enum"

    def __init__(self, enum_type: Type[Enum]):
        super().__init__(enum_type)

    def _decode(self, text, context):
        members = self.value_type.__members__
        if text in members:
            return members[text]
        for member in self.value_type:
            if str(member.value) == text:
                return member
        raise ValueError(f"unknown {self.value_type.__name__} constant: {text!r}")

    def _encode(self, value, context):
        return value.name

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["constants"] = ", ".join(self.value_type.__members__)
        return True


class UnsupportedConverter(Converter):
    """Fallback for types without a converter: encodes with ``str()``, never decodes"""

    message_key = "converter.unsupported"

    def decode(self, text, context):
        if text is None or not text.strip():
            return None
        raise MalformedValue(self, context, text)


__all__ = [
    "StringConverter",
    "IntegerConverter",
    "FloatConverter",
    "DecimalConverter",
    "BooleanConverter",
    "DateConverter",
    "DateTimeConverter",
    "EnumConverter",
    "UnsupportedConverter",
]
