# vouch/core/path.py
"""
Path reconstruction over a violation hierarchy.

The iterator walks a ``ValidationFailure`` depth-first and yields leaf
violations. Whenever a violation's cause chain contains a nested
``ValidationFailure``, the iterator descends into it; the violation is pushed
onto the path stack only if that nested failure is marked ``cascade``, and it
is popped again once the nested batch is exhausted.
"""

from __future__ import annotations

import json
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from .targets import Target
from .violations import ValidationFailure, Violation


class NodeFormatter(Protocol):
    """Renders path nodes and separators"""

    def append_separator(self, buf: List[str]) -> None:
        ...

    def append_node(self, node: Violation, buf: List[str]) -> None:
        ...


class DefaultNodeFormatter:
    """
    Renders ``name``, ``name[index]`` for elements and ``name{index}`` for keys.
    """

    def __init__(
        self,
        separator: str = ".",
        element_brackets: Tuple[str, str] = ("[", "]"),
        key_brackets: Tuple[str, str] = ("{", "}"),
    ):
        self.separator = separator
        self.element_brackets = element_brackets
        self.key_brackets = key_brackets

    def append_separator(self, buf: List[str]) -> None:
        buf.append(self.separator)

    def append_node(self, node: Violation, buf: List[str]) -> None:
        buf.append(node.element_name or "")
        target = node.invalid_target
        if target is not None and target.is_composite:
            brackets = self.element_brackets if target is Target.ELEMENTS else self.key_brackets
            buf.append(brackets[0])
            buf.append(self.format_index(node.invalid_index))
            buf.append(brackets[1])

    def format_index(self, index: object) -> str:
        if index is None:
            return "null"
        if isinstance(index, bool):
            return "true" if index else "false"
        if isinstance(index, (int, float)):
            return str(index)
        if isinstance(index, str):
            return json.dumps(index)
        return f"@{hash(index) & 0xFFFFFFFF:x}"


DEFAULT_FORMATTER = DefaultNodeFormatter(".")


class _Frame:
    __slots__ = ("iterator", "cascade")

    def __init__(self, iterator: Iterator[Violation], cascade: bool):
        self.iterator = iterator
        self.cascade = cascade


class PathIterator:
    """
    Depth-first iterator over the leaf violations of a failure hierarchy.

    After each ``next()``, ``nodes()`` and ``path()`` describe the position of
    the violation just returned.
    """

    def __init__(self, failure: ValidationFailure, formatter: NodeFormatter = DEFAULT_FORMATTER):
        self._iterator: Iterator[Violation] = iter(failure.violations)
        self._frames: List[_Frame] = []
        self._path: List[Violation] = []
        self._last: Optional[Violation] = None
        self.formatter = formatter

    def __iter__(self) -> PathIterator:
        return self

    def __next__(self) -> Violation:
        while True:
            candidate = next(self._iterator, None)
            if candidate is None:
                if not self._frames:
                    raise StopIteration
                frame = self._frames.pop()
                self._iterator = frame.iterator
                if frame.cascade:
                    self._path.pop()
                continue

            nested = candidate.failure
            if nested is None:
                self._last = candidate
                return candidate

            self._frames.append(_Frame(self._iterator, nested.cascade))
            if nested.cascade:
                self._path.append(candidate)
            self._iterator = iter(nested.violations)

    def nodes(self) -> Sequence[Violation]:
        """Stacked path violations followed by the last returned violation"""
        if self._last is None:
            raise LookupError("next() has not been called yet")
        return (*self._path, self._last)

    def path(self) -> str:
        """Rendered path of the last returned violation"""
        buf: List[str] = []
        for node in self.nodes():
            if not node.element_name:
                continue
            if buf:
                self.formatter.append_separator(buf)
            self.formatter.append_node(node, buf)
        return "".join(buf)


__all__ = ["NodeFormatter", "DefaultNodeFormatter", "DEFAULT_FORMATTER", "PathIterator"]
