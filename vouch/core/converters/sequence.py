# vouch/core/converters/sequence.py
"""
Sequence converters: arrays (tuples), collections and mappings.

Decoding tokenizes the text, then decodes every element independently under
a scoped target/index. Malformed elements are collected rather than raised,
and one ``MalformedValue`` for the whole sequence wraps all of them. Encoding
is total. Empty text decodes to an empty sequence, never to None.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional

from ..targets import Target
from ..violations import MalformedValue, ValidationFailure
from .base import Converter
from .tokenizer import DEFAULT_TOKENIZER, Tokenizer

if TYPE_CHECKING:
    from ..context import ValidationContext


class SequenceConverter(Converter):
    """
    Base class of converters for composite values.

    Subclasses implement ``_decode_tokens`` and ``_encode_tokens``.
    """

    message_key = "converter.sequence"

    def __init__(self, value_type: Any, tokenizer: Optional[Tokenizer] = None):
        super().__init__(value_type)
        self.tokenizer = tokenizer or DEFAULT_TOKENIZER

    def decode(self, text: Optional[str], context: ValidationContext) -> Any:
        try:
            tokens = self.tokenizer.decode(text, context)
        except MalformedValue as e:
            raise MalformedValue(self, context, text, cause=ValidationFailure([e])) from e
        self._check_tokens(tokens, text, context)

        violations: List[MalformedValue] = []
        value = self._decode_tokens(tokens, context, violations)
        if violations:
            raise MalformedValue(self, context, text, cause=ValidationFailure(violations))
        return value

    def _encode(self, value: Any, context: ValidationContext) -> str:
        return self.tokenizer.encode(self._encode_tokens(value, context), context)

    def _check_tokens(self, tokens: List[Optional[str]], text: str, context: ValidationContext) -> None:
        """Reject a token list that cannot form a value of this shape"""

    def _decode_tokens(
        self,
        tokens: List[Optional[str]],
        context: ValidationContext,
        violations: List[MalformedValue],
    ) -> Any:
        raise NotImplementedError

    def _encode_tokens(self, value: Any, context: ValidationContext) -> List[str]:
        raise NotImplementedError

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["tokenizer"] = self.tokenizer
        return True


def _decode_element(
    converter: Converter,
    token: Optional[str],
    context: ValidationContext,
    target: Target,
    index: Any,
    violations: List[MalformedValue],
) -> tuple:
    """Decode one token; returns ``(ok, value)`` and records a failure"""
    with context.scoped(target=target, index=index):
        try:
            return True, converter.decode(token, context)
        except MalformedValue as e:
            violations.append(e)
            return False, None


class _ElementSequenceConverter(SequenceConverter):
    """Shared decoding for sequences of homogeneous elements"""

    def __init__(
        self,
        value_type: Any,
        element_converter: Converter,
        build: Callable[[Iterable[Any]], Any],
        tokenizer: Optional[Tokenizer] = None,
    ):
        super().__init__(value_type, tokenizer)
        self.element_converter = element_converter
        self._build = build

    def _decode_tokens(self, tokens, context, violations):
        items = []
        for index, token in enumerate(tokens):
            ok, item = _decode_element(self.element_converter, token, context, Target.ELEMENTS, index, violations)
            if ok:
                items.append(item)
            elif context.fail_fast:
                break
        return self._build(items)

    def _encode_tokens(self, value, context):
        return [self.element_converter.encode(item, context) for item in value]

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["element"] = self.element_converter
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.element_converter!r})"


class ArrayConverter(_ElementSequenceConverter):
    """Decodes to a tuple"""

    def __init__(self, element_converter: Converter, tokenizer: Optional[Tokenizer] = None):
        super().__init__(tuple, element_converter, tuple, tokenizer)


class CollectionConverter(_ElementSequenceConverter):
    """Decodes to ``collection_type`` (list, set, frozenset, ...)"""

    def __init__(
        self,
        element_converter: Converter,
        collection_type: type = list,
        tokenizer: Optional[Tokenizer] = None,
    ):
        super().__init__(collection_type, element_converter, collection_type, tokenizer)
        self.collection_type = collection_type


class MapConverter(SequenceConverter):
    """
    Decodes alternating key/value tokens to ``map_type``.

    Keys decode under the ``KEYS`` target, values under ``ELEMENTS``; the
    index of both is the pair number. An odd token count is malformed.
    """

    def __init__(
        self,
        key_converter: Converter,
        value_converter: Converter,
        map_type: type = dict,
        tokenizer: Optional[Tokenizer] = None,
    ):
        super().__init__(map_type, tokenizer)
        self.key_converter = key_converter
        self.value_converter = value_converter
        self.map_type = map_type

    def _check_tokens(self, tokens, text, context):
        if len(tokens) % 2 != 0:
            odd = MalformedValue(self.tokenizer, context, text)
            raise MalformedValue(self, context, text, cause=ValidationFailure([odd]))

    def _decode_tokens(self, tokens, context, violations):
        pairs = []
        for i in range(0, len(tokens), 2):
            index = i // 2
            key_ok, key = _decode_element(self.key_converter, tokens[i], context, Target.KEYS, index, violations)
            if not key_ok and context.fail_fast:
                break
            value_ok, value = _decode_element(
                self.value_converter, tokens[i + 1], context, Target.ELEMENTS, index, violations
            )
            if key_ok and value_ok:
                pairs.append((key, value))
            elif context.fail_fast:
                break
        return self.map_type(pairs)

    def _encode_tokens(self, value, context):
        tokens = []
        for key, item in value.items():
            tokens.append(self.key_converter.encode(key, context))
            tokens.append(self.value_converter.encode(item, context))
        return tokens

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["key"] = self.key_converter
        arguments["element"] = self.value_converter
        return True

    def __repr__(self) -> str:
        return f"MapConverter({self.key_converter!r}, {self.value_converter!r})"


__all__ = [
    "SequenceConverter",
    "ArrayConverter",
    "CollectionConverter",
    "MapConverter",
]
