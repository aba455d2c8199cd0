# vouch/core/converters/tokenizer.py
"""
Tokenizers: split delimited text into string tokens and join them back.

Tokenizing rules of ``SimpleTokenizer``:
- whitespace delimiters only separate tokens
- two non-whitespace delimiters with nothing in between yield a None token
- a leading or trailing non-whitespace delimiter yields a None token
- empty text yields no tokens; text is not stripped, so surrounding
  whitespace only matters where it sits next to a delimiter
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from ...errors import DeclarationError
from .base import Converter

if TYPE_CHECKING:
    from ..context import ValidationContext


DEFAULT_DELIMS = ",;| \t\n\r"

_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\\": "\\\\"}


class Tokenizer(Converter):
    """Converter between text and a list of (possibly None) tokens"""

    message_key = "converter.tokenizer"

    def __init__(self):
        super().__init__(list)

    def decode(self, text: Optional[str], context: ValidationContext) -> List[Optional[str]]:
        return self._convert(text, context) if text else []

    def encode(self, value: Optional[Sequence[Optional[str]]], context: ValidationContext) -> str:
        if not value:
            return ""
        return self._encode(value, context)


class SimpleTokenizer(Tokenizer):
    """Tokenizer driven by a fixed set of delimiter characters"""

    def __init__(self, delims: str = DEFAULT_DELIMS):
        if not delims:
            raise DeclarationError.invalid("Tokenizer delimiters must not be empty")
        super().__init__()
        self.delims = delims

    def append_message_arguments(self, context: ValidationContext, arguments: Dict[str, Any]) -> bool:
        super().append_message_arguments(context, arguments)
        arguments["delims"] = "".join(_ESCAPES.get(ch, ch) for ch in self.delims)
        return True

    def _decode(self, text: str, context: ValidationContext) -> List[Optional[str]]:
        tokens: List[Optional[str]] = []
        delim = False
        start = 0
        nulls = 0
        length = len(text)
        for i, ch in enumerate(text):
            if ch not in self.delims:
                if delim:
                    start = i
                if i + 1 == length:
                    tokens.append(text[start:])
                delim = False
                nulls = 0
                continue

            if not (delim or i == start):
                tokens.append(text[start:i])
            if not ch.isspace():
                if nulls > 0 or not tokens:
                    tokens.append(None)
                nulls += 1
                if i + 1 == length:
                    tokens.append(None)
            delim = True
        return tokens

    def _encode(self, value: Sequence[Optional[str]], context: ValidationContext) -> str:
        return self.delims[0].join("" if token is None else token for token in value)

    def __repr__(self) -> str:
        return f"SimpleTokenizer({self.delims!r})"


DEFAULT_TOKENIZER = SimpleTokenizer()


__all__ = ["Tokenizer", "SimpleTokenizer", "DEFAULT_TOKENIZER", "DEFAULT_DELIMS"]
