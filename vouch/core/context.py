# vouch/core/context.py
"""
Validation context: request-scoped state threaded through nested checks.

A context is created per top-level call (through ``ContextBuilder``) and is
owned by the call stack that created it. It carries:
- the entity being validated and the property (element) currently visited
- the current target and index, overridden only through ``scoped()``
- call parameters: locale, groups, property filter, localized convert, fail-fast
- locale-aware formats (default ones cached per context)
- the violations collected so far

Cascading into a nested entity creates a child context that points at its
parent; the failure a child raises is marked ``cascade``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .formats import DateFormat, DecimalFormat, IntegerFormat, parse_locale
from .targets import Target
from .violations import ValidationFailure, Violation

if TYPE_CHECKING:
    from .component import Validation
    from .engine import ContextBuilder, Validator
    from .metadata.entity import EntityMeta, PropertyMeta


_UNSET: Any = object()


class ValidationContext:
    """Mutable, request-scoped validation state"""

    def __init__(
        self,
        validator: Validator,
        *,
        parent: Optional[ValidationContext] = None,
        locale: Any = None,
        property_filter: Optional[Callable[[PropertyMeta], bool]] = None,
        groups: Iterable[str] = (),
        localized_convert: bool = False,
        fail_fast: bool = False,
    ):
        self.validator = validator
        self.parent = parent
        self.locale = parse_locale(locale, validator.factory.settings.locale)
        self.property_filter = property_filter
        self.groups: Tuple[str, ...] = tuple(groups)
        self.localized_convert = localized_convert
        self.fail_fast = fail_fast

        self.current_entity: Any = None
        self.element_meta: Optional[PropertyMeta] = None
        self._target = Target.VALUE
        self._index: Any = None
        self._formats: Dict[str, Any] = {}
        self._violations: List[Violation] = []

    # State

    @property
    def entity_meta(self) -> Optional[EntityMeta]:
        return self.validator.meta

    @property
    def entity_type(self) -> Any:
        meta = self.validator.meta
        return meta.entity_type if meta is not None else None

    @property
    def element_type(self) -> Any:
        return self.element_meta.value_type if self.element_meta is not None else None

    @property
    def element_name(self) -> Optional[str]:
        return self.element_meta.name if self.element_meta is not None else None

    @property
    def root_entity(self) -> Any:
        return self.current_entity if self.parent is None else self.parent.root_entity

    @property
    def current_target(self) -> Target:
        return self._target

    @property
    def current_index(self) -> Any:
        return self._index

    @contextmanager
    def scoped(self, target: Optional[Target] = None, index: Any = _UNSET) -> Iterator[ValidationContext]:
        """
        Override the current target and/or index for the enclosed block.

        The previous values are restored on exit, including exit by exception.
        """
        saved = (self._target, self._index)
        if target is not None:
            self._target = target
        if index is not _UNSET:
            self._index = index
        try:
            yield self
        finally:
            self._target, self._index = saved

    def accepts_groups(self, groups: Iterable[str]) -> bool:
        """A constraint tagged with ``groups`` is active for this context"""
        if not self.groups:
            return True
        return any(group in self.groups for group in groups)

    def accepts_property(self, meta: PropertyMeta) -> bool:
        return self.property_filter is None or bool(self.property_filter(meta))

    # Formats

    def integer_format(self, pattern: Optional[str] = None) -> IntegerFormat:
        if pattern is not None:
            return IntegerFormat(self.locale, pattern)
        if "integer" not in self._formats:
            self._formats["integer"] = IntegerFormat(self.locale, self.validator.factory.settings.integer_pattern)
        return self._formats["integer"]

    def decimal_format(self, pattern: Optional[str] = None) -> DecimalFormat:
        if pattern is not None:
            return DecimalFormat(self.locale, pattern)
        if "decimal" not in self._formats:
            self._formats["decimal"] = DecimalFormat(self.locale, self.validator.factory.settings.decimal_pattern)
        return self._formats["decimal"]

    def date_format(
        self,
        pattern: Optional[str] = None,
        date_style: Optional[str] = None,
        time_style: Optional[str] = None,
    ) -> DateFormat:
        if pattern is not None:
            return DateFormat(self.locale, pattern)
        if date_style is not None or time_style is not None:
            return DateFormat(self.locale, date_style=date_style, time_style=time_style)
        if "date" not in self._formats:
            settings = self.validator.factory.settings
            self._formats["date"] = DateFormat(
                self.locale,
                pattern=settings.date_pattern,
                date_style=settings.date_style,
                time_style=settings.time_style,
            )
        return self._formats["date"]

    # Messages

    def resolve_message(self, key: str) -> str:
        """
        Resolve a message template by key for this context's locale.

        Raises:
            MissingMessageError: If no resolver knows the key
        """
        return self.validator.factory.message_resolver.resolve(key, self.locale)

    def build_message(self, component: Validation) -> Optional[str]:
        return self.validator.factory.message_builder.build_message(component, self)

    def for_rendering(self) -> ContextBuilder:
        """Fresh context builder for localized value rendering in messages"""
        return self.validator.new_context().locale(self.locale).localized_convert(True)

    # Violations

    @property
    def violations(self) -> Tuple[Violation, ...]:
        return tuple(self._violations)

    def add_violation(self, violation: Violation) -> None:
        """Collect ``violation``; in fail-fast mode raise it right away"""
        self._violations.append(violation)
        if self.fail_fast:
            self.raise_if_violated()

    def raise_if_violated(self) -> None:
        if self._violations:
            raise ValidationFailure(self._violations, cascade=self.parent is not None)

    def __str__(self) -> str:
        entity_type = self.entity_type
        name = getattr(entity_type, "__name__", None) or ("value" if entity_type is None else str(entity_type))
        if self.element_meta is not None:
            return f"{name}#{self.element_meta.name}"
        return name

    def __repr__(self) -> str:
        return (
            f"ValidationContext({self}, target={self._target.value}, index={self._index!r}, "
            f"locale={self.locale}, groups={list(self.groups)}, fail_fast={self.fail_fast})"
        )


__all__ = ["ValidationContext"]
