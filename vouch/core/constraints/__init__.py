# vouch/core/constraints/__init__.py
"""
Constraints: leaf rules, combinators, wrappers and target dispatchers.
"""

from .base import CheckConstraint, Constraint
from .combinators import (
    Composition,
    ConstraintAggregation,
    Conjunction,
    Disjunction,
    Negation,
    all_of,
    any_of,
    compose,
    none_of,
)
from .wrappers import ConstraintWrapper, GroupConstraint, MessageConstraint
from .elements import (
    ElementsConstraint,
    KeysConstraint,
    SequenceElementConstraint,
    ValuesConstraint,
    targeted,
)
from .cascade import CascadeConstraint
from .common import (
    DefaultValue,
    NotEmpty,
    NotNull,
    Pattern,
    Predicate,
    PropertyComparison,
    Range,
    Size,
    Trim,
)

__all__ = [
    "Constraint",
    "CheckConstraint",
    "ConstraintAggregation",
    "Composition",
    "Conjunction",
    "Disjunction",
    "Negation",
    "compose",
    "all_of",
    "any_of",
    "none_of",
    "ConstraintWrapper",
    "GroupConstraint",
    "MessageConstraint",
    "SequenceElementConstraint",
    "ElementsConstraint",
    "KeysConstraint",
    "ValuesConstraint",
    "targeted",
    "CascadeConstraint",
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
