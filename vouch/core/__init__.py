# vouch/core/__init__.py
"""
Validation engine core.
"""

from .targets import Target, has_elements, has_keys, supports_target
from .violations import (
    ConstraintViolation,
    MalformedValue,
    ValidationFailure,
    Violation,
    flatten,
)
from .path import DEFAULT_FORMATTER, DefaultNodeFormatter, NodeFormatter, PathIterator
from .results import ValidationResult
from .component import Validation
from .formats import DateFormat, DecimalFormat, IntegerFormat, parse_locale
from .context import ValidationContext
from .engine import (
    DEFAULT_GROUP,
    ContextBuilder,
    Validator,
    ValidatorFactory,
    get_default_factory,
    reset_default_factory,
    set_default_factory,
)
from .constrained_map import ConstrainedMap, Transaction

__all__ = [
    "Target",
    "has_keys",
    "has_elements",
    "supports_target",
    "Violation",
    "ConstraintViolation",
    "MalformedValue",
    "ValidationFailure",
    "flatten",
    "PathIterator",
    "NodeFormatter",
    "DefaultNodeFormatter",
    "DEFAULT_FORMATTER",
    "ValidationResult",
    "Validation",
    "IntegerFormat",
    "DecimalFormat",
    "DateFormat",
    "parse_locale",
    "ValidationContext",
    "DEFAULT_GROUP",
    "Validator",
    "ContextBuilder",
    "ValidatorFactory",
    "get_default_factory",
    "set_default_factory",
    "reset_default_factory",
    "ConstrainedMap",
    "Transaction",
]
