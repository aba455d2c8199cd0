# vouch/core/metadata/builder.py
"""
Programmatic metadata declaration.

Usage:
```python
address = (
    EntityMetaBuilder(Address)
    .property("city", str, constraint=[Trim(), NotEmpty()])
    .property("zip", str, constraint=Pattern(r"\\d{5}"), groups=["strict"])
    .build()
)
```

Declaration problems (unknown target for the property type, empty group
list, duplicate property) raise ``DeclarationError`` from ``property()`` or
``build()``; they never surface during validation.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Union

from ...errors import DeclarationError
from ..constraints.base import Constraint
from ..constraints.combinators import compose
from ..constraints.elements import targeted
from ..constraints.wrappers import GroupConstraint, MessageConstraint
from ..converters.base import Converter
from ..converters.registry import get_default_registry
from ..targets import Target
from .entity import EntityMeta, MappingMeta, ObjectMeta, PropertyMeta


logger = logging.getLogger(__name__)

ConstraintSpec = Union[Constraint, Sequence[Constraint], None]


def _declare(
    constraint: ConstraintSpec,
    target: Target,
    carrier_type: Any,
    groups: Optional[Iterable[str]],
    message: Optional[str],
) -> Optional[Constraint]:
    if isinstance(constraint, (list, tuple)):
        constraint = compose(*constraint) if constraint else None
    if constraint is None:
        if message is not None or groups is not None:
            raise DeclarationError.invalid("Message or groups declared without a constraint")
        return None
    constraint = targeted(constraint, target, carrier_type)
    if message is not None:
        constraint = MessageConstraint(constraint, message)
    if groups is not None:
        constraint = GroupConstraint(constraint, groups)
    return constraint


class EntityMetaBuilder:
    """Builds ``ObjectMeta`` for attribute-access entities"""

    meta_class = ObjectMeta

    def __init__(self, entity_type: Any):
        self.entity_type = entity_type
        self._properties: List[PropertyMeta] = []
        self._constraints: List[Constraint] = []

    def property(
        self,
        name: str,
        value_type: Any = object,
        converter: Optional[Converter] = None,
        constraint: ConstraintSpec = None,
        default: Any = None,
        target: Target = Target.VALUE,
        groups: Optional[Iterable[str]] = None,
        message: Optional[str] = None,
        readable: bool = True,
        writable: bool = True,
    ) -> EntityMetaBuilder:
        """
        Declare a property.

        Args:
            name: Property name (attribute or key)
            value_type: Declared type; drives the default converter and target checks
            converter: Explicit converter, else the registry default for ``value_type``
            constraint: One constraint, or a list applied as a composition
            default: Value stored when ``None`` is set
            target: Part of the value the constraint applies to
            groups: Groups the constraint belongs to (None: always active)
            message: Message key or template overriding the constraint's message

        Raises:
            DeclarationError: Duplicate name, illegal target, empty groups
        """
        if not name:
            raise DeclarationError.invalid("Property name must not be empty")
        if any(p.name == name for p in self._properties):
            raise DeclarationError.invalid(f"Duplicate property '{name}'")
        self._properties.append(
            PropertyMeta(
                name=name,
                value_type=value_type,
                converter=converter or get_default_registry().get(value_type),
                constraint=_declare(constraint, Target(target), value_type, groups, message),
                default=default,
                readable=readable,
                writable=writable,
                mapping=self.meta_class.mapping,
            )
        )
        return self

    def constraint(
        self,
        *constraints: Constraint,
        groups: Optional[Iterable[str]] = None,
        message: Optional[str] = None,
    ) -> EntityMetaBuilder:
        """Add an entity-level constraint, checked after the properties"""
        declared = _declare(list(constraints), Target.VALUE, self.entity_type, groups, message)
        if declared is not None:
            self._constraints.append(declared)
        return self

    def _entity_constraint(self) -> Optional[Constraint]:
        return compose(*self._constraints) if self._constraints else None

    def build(self) -> EntityMeta:
        meta = ObjectMeta(self.entity_type, self._properties, self._entity_constraint())
        logger.debug("Built metadata %r", meta)
        return meta


class MappingMetaBuilder(EntityMetaBuilder):
    """Builds ``MappingMeta`` for dict entities"""

    meta_class = MappingMeta

    def __init__(self, entity_type: Any = dict):
        super().__init__(entity_type)

    def build(self) -> EntityMeta:
        meta = MappingMeta(self._properties, self._entity_constraint(), entity_type=self.entity_type)
        logger.debug("Built metadata %r", meta)
        return meta


__all__ = ["EntityMetaBuilder", "MappingMetaBuilder"]
