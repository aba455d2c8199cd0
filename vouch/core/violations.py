# vouch/core/violations.py
"""
Violation model: the atomic failure record and its aggregate.

A ``Violation`` is built exactly once, at the point of failure, by
snapshotting the validation context. Later context mutation cannot change
it. A ``ValidationFailure`` is an ordered batch of violations; its
``cascade`` flag tells path reconstruction whether the batch came from
validating one nested element (one path segment deeper) or is a flat batch
of siblings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence

if TYPE_CHECKING:
    from .path import NodeFormatter, PathIterator


logger = logging.getLogger(__name__)


class Violation(Exception):
    """
    One failed validation or conversion unit.

    Attributes are captured from the context at construction time:
    component, entity type, element type and name, root and leaf entities,
    and the target/index/type/value that failed.
    """

    def __init__(
        self,
        component: Any,
        context: Any,
        value: Any,
        cause: Optional[BaseException] = None,
    ):
        message = _build_message(component, context)
        super().__init__(message)
        self.message: Optional[str] = message
        self.component = component
        self.entity_type = context.entity_type
        self.element_type = context.element_type
        self.element_name: Optional[str] = context.element_name
        self.root_entity = context.root_entity
        self.leaf_entity = context.current_entity
        self.invalid_target = context.current_target
        self.invalid_index = context.current_index
        self.invalid_type = getattr(component, "value_type", None)
        self.invalid_value = value
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        return self.message or ""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"component={type(self.component).__name__}, "
            f"element={self.element_name!r}, "
            f"target={self.invalid_target.value if self.invalid_target else None}, "
            f"index={self.invalid_index!r}, "
            f"message={self.message!r})"
        )

    @property
    def failure(self) -> Optional[ValidationFailure]:
        """Nearest ``ValidationFailure`` in the cause chain, if any"""
        cause = self.cause
        while cause is not None and not isinstance(cause, ValidationFailure):
            cause = getattr(cause, "cause", None) or cause.__cause__
        return cause

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "component": type(self.component).__name__,
            "entity_type": getattr(self.entity_type, "__name__", None),
            "element_name": self.element_name,
            "target": self.invalid_target.value if self.invalid_target else None,
            "index": self.invalid_index,
            "message": self.message,
        }


class ConstraintViolation(Violation):
    """A value failed a rule and could not be corrected"""

    @property
    def constraint(self) -> Any:
        return self.component


class MalformedValue(Violation):
    """Text could not be decoded into a value"""

    @property
    def converter(self) -> Any:
        return self.component


class ValidationFailure(Exception):
    """
    Ordered aggregate of violations.

    Iterating yields the leaf violations of the whole hierarchy depth-first;
    nested aggregates (reached through a violation's cause) are flattened
    transparently. Use ``iterator()`` directly to also read each violation's
    path.
    """

    def __init__(self, violations: Iterable[Violation], cascade: bool = False):
        self.violations: tuple[Violation, ...] = tuple(violations)
        self.cascade = cascade
        super().__init__(self._summary())

    def _summary(self) -> str:
        count = len(self.violations)
        first = self.first_violation
        if first is None:
            return "no violations"
        if count == 1:
            return f"1 violation: {first.message}"
        return f"{count} violations, first: {first.message}"

    @property
    def first_violation(self) -> Optional[Violation]:
        return self.violations[0] if self.violations else None

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self) -> PathIterator:
        return self.iterator()

    def iterator(self, formatter: Optional[NodeFormatter] = None) -> PathIterator:
        from .path import DEFAULT_FORMATTER, PathIterator

        return PathIterator(self, formatter or DEFAULT_FORMATTER)

    def format_violations(self, formatter: Optional[NodeFormatter] = None) -> List[str]:
        """Render every leaf violation as ``"path: message"`` (or just the message)"""
        lines = []
        itr = self.iterator(formatter)
        for violation in itr:
            path = itr.path()
            message = violation.message or ""
            lines.append(f"{path}: {message}" if path else message)
        return lines

    def log_violations(self, log: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        log = log or logger
        for line in self.format_violations():
            log.log(level, line)

    def to_dict(self, formatter: Optional[NodeFormatter] = None) -> Dict[str, Any]:
        items = []
        itr = self.iterator(formatter)
        for violation in itr:
            entry = violation.to_dict()
            entry["path"] = itr.path()
            items.append(entry)
        return {"cascade": self.cascade, "violations": items}


def _build_message(component: Any, context: Any) -> Optional[str]:
    # A violation must always be constructible, even with a broken template.
    try:
        return context.build_message(component)
    except Exception:
        logger.warning(
            "Failed to build violation message for %s", type(component).__name__, exc_info=True
        )
        return None


def flatten(violations: Sequence[Violation]) -> List[Violation]:
    """Leaf violations of ``violations`` in depth-first order"""
    return list(ValidationFailure(violations))


__all__ = [
    "Violation",
    "ConstraintViolation",
    "MalformedValue",
    "ValidationFailure",
    "flatten",
]
