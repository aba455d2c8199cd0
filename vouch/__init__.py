# vouch/__init__.py
"""
Vouch - declarative value validation and conversion.

Constraints and converters are composed into entity metadata; a validator
checks entities, single properties or detached values against it and either
returns the (possibly corrected) value or raises one ``ValidationFailure``
describing every violation with its path.

Usage:
```python
from vouch import EntityMetaBuilder, NotEmpty, Range, ValidatorFactory

meta = (
    EntityMetaBuilder(Person)
    .property("name", str, constraint=NotEmpty())
    .property("age", int, constraint=Range(min=0, max=150))
    .build()
)
validator = ValidatorFactory().get_validator(meta)
try:
    validator.validate_entity(person)
except ValidationFailure as failure:
    failure.log_violations()
```
"""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    DeclarationError,
    MissingMessageError,
    TargetDeclarationError,
    UnknownPropertyError,
    VouchError,
)
from .config import VouchSettings, load_settings
from .core import (
    DEFAULT_GROUP,
    ConstrainedMap,
    ConstraintViolation,
    ContextBuilder,
    DefaultNodeFormatter,
    MalformedValue,
    Target,
    ValidationContext,
    ValidationFailure,
    ValidationResult,
    Validator,
    ValidatorFactory,
    Violation,
    get_default_factory,
    reset_default_factory,
)
from .core.constraints import (
    CascadeConstraint,
    Composition,
    Conjunction,
    Constraint,
    DefaultValue,
    Disjunction,
    GroupConstraint,
    MessageConstraint,
    Negation,
    NotEmpty,
    NotNull,
    Pattern,
    Predicate,
    PropertyComparison,
    Range,
    Size,
    Trim,
    targeted,
)
from .core.converters import (
    ArrayConverter,
    CollectionConverter,
    Converter,
    MapConverter,
    SimpleTokenizer,
    get_default_registry,
)
from .core.message import DictMessageResolver, MessageBuilder, YamlMessageResolver
from .core.metadata import EntityMetaBuilder, MappingMetaBuilder

__all__ = [
    "__version__",
    # errors
    "VouchError",
    "DeclarationError",
    "TargetDeclarationError",
    "MissingMessageError",
    "UnknownPropertyError",
    "ConfigError",
    # config
    "VouchSettings",
    "load_settings",
    # engine
    "DEFAULT_GROUP",
    "Target",
    "Violation",
    "ConstraintViolation",
    "MalformedValue",
    "ValidationFailure",
    "ValidationResult",
    "ValidationContext",
    "DefaultNodeFormatter",
    "Validator",
    "ContextBuilder",
    "ValidatorFactory",
    "get_default_factory",
    "reset_default_factory",
    "ConstrainedMap",
    # constraints
    "Constraint",
    "Composition",
    "Conjunction",
    "Disjunction",
    "Negation",
    "GroupConstraint",
    "MessageConstraint",
    "CascadeConstraint",
    "targeted",
    "NotNull",
    "NotEmpty",
    "Size",
    "Range",
    "Pattern",
    "Trim",
    "DefaultValue",
    "Predicate",
    "PropertyComparison",
    # converters
    "Converter",
    "SimpleTokenizer",
    "ArrayConverter",
    "CollectionConverter",
    "MapConverter",
    "get_default_registry",
    # messages
    "MessageBuilder",
    "DictMessageResolver",
    "YamlMessageResolver",
    # metadata
    "EntityMetaBuilder",
    "MappingMetaBuilder",
]
