# vouch/core/converters/__init__.py
"""
Converters between text and typed values.
"""

from .base import Converter
from .tokenizer import DEFAULT_DELIMS, DEFAULT_TOKENIZER, SimpleTokenizer, Tokenizer
from .sequence import ArrayConverter, CollectionConverter, MapConverter, SequenceConverter
from .simple import (
    BooleanConverter,
    DateConverter,
    DateTimeConverter,
    DecimalConverter,
    EnumConverter,
    FloatConverter,
    IntegerConverter,
    StringConverter,
    UnsupportedConverter,
)
from .registry import (
    ConverterRegistry,
    get_default_registry,
    reset_default_registry,
    set_default_registry,
)

__all__ = [
    "Converter",
    "Tokenizer",
    "SimpleTokenizer",
    "DEFAULT_TOKENIZER",
    "DEFAULT_DELIMS",
    "SequenceConverter",
    "ArrayConverter",
    "CollectionConverter",
    "MapConverter",
    "StringConverter",
    "IntegerConverter",
    "FloatConverter",
    "DecimalConverter",
    "BooleanConverter",
    "DateConverter",
    "DateTimeConverter",
    "EnumConverter",
    "UnsupportedConverter",
    "ConverterRegistry",
    "get_default_registry",
    "set_default_registry",
    "reset_default_registry",
]
