# vouch/core/message/builder.py
"""
Message template rendering.

Grammar, scanned left to right (``\\`` passes the next character through):

- ``{name}``  optional argument. A bound non-null value is substituted; a
  name bound to ``None`` empties the whole (sub-)template; an unbound name is
  left in place literally so a later pass can fill it.
- ``<name>``  required argument. Unbound or ``None`` suppresses the whole
  (sub-)template: the render result is ``None``.
- ``(...)``   sub-template rendered recursively with the same arguments;
  parentheses nest. A sub-template that renders to nothing is dropped.

Broken templates (unbalanced brackets, special characters inside an argument
name) never raise: the rest of the raw text is emitted after an error marker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

from ..component import Validation

if TYPE_CHECKING:
    from ..context import ValidationContext


ESCAPE = "\\"
LBRACKETS = "{<("
RBRACKETS = "}>)"
ERROR_MARKER = " ---> "

_OPTIONAL, _REQUIRED, _SUBTEMPLATE = 0, 1, 2


def _is_special(ch: str) -> bool:
    return ch == ESCAPE or ch in LBRACKETS or ch in RBRACKETS


class _Suppressed(Exception):
    """Internal signal: the current (sub-)template renders to ``value``"""

    def __init__(self, value: Optional[str]):
        super().__init__(value)
        self.value = value


class MessageBuilder:
    """
    Builds violation messages from component templates.

    ``build_message`` is the entry point used by the validation context;
    ``render_template`` exposes the template interpreter on its own.
    """

    def build_message(self, component: Validation, context: ValidationContext) -> Optional[str]:
        template = component.message_template(context)
        if template is None:
            return None
        message: Optional[str] = template
        arguments: Dict[str, Any] = {}
        if component.append_message_arguments(context, arguments):
            message = self.render_template(template, arguments, context)
        if message is None:
            return None
        message = message.strip()
        return message or None

    def render_template(
        self,
        template: str,
        arguments: Mapping[str, Any],
        context: Optional[ValidationContext] = None,
    ) -> Optional[str]:
        """
        Render ``template`` with ``arguments``.

        Returns:
            Rendered text, ``""`` when an optional argument is bound to None,
            or None when a required argument is missing.
        """
        try:
            return self._render(template, arguments, context)
        except _Suppressed as signal:
            return signal.value

    def _render(self, template: str, arguments: Mapping[str, Any], context: Optional[ValidationContext]) -> str:
        length = len(template)
        out: List[str] = []
        i = 0
        while i < length:
            ch = template[i]
            if ch == ESCAPE:
                i += 1
                # a trailing escape stands for itself
                out.append(template[i] if i < length else ESCAPE)
                i += 1
                continue

            bracket = LBRACKETS.find(ch)
            if bracket < 0:
                out.append(ch)
                i += 1
                continue

            start = i
            rb = RBRACKETS[bracket]
            i += 1

            if bracket == _SUBTEMPLATE:
                level = 1
                while i < length and level > 0:
                    c = template[i]
                    if c == ESCAPE:
                        i += 1
                    elif c == rb:
                        level -= 1
                    elif c == ch:
                        level += 1
                    i += 1
                if level > 0:
                    out.append(ERROR_MARKER)
                    out.append(template[start:])
                    return "".join(out)
                sub = self.render_template(template[start + 1:i - 1], arguments, context)
                if sub:
                    out.append(sub)
                continue

            # {name} or <name>
            end = i
            while end < length and template[end] != rb:
                if _is_special(template[end]):
                    out.append(template[start:end])
                    out.append(ERROR_MARKER)
                    out.append(template[end:])
                    return "".join(out)
                end += 1
            if end >= length:
                out.append(ERROR_MARKER)
                out.append(template[start:])
                return "".join(out)

            key = template[i:end]
            i = end + 1
            value = self.render_argument(arguments.get(key), context)
            if value is not None:
                out.append(value)
            elif bracket == _REQUIRED:
                raise _Suppressed(None)
            elif key in arguments:
                raise _Suppressed("")
            else:
                out.append(template[start:i])
        return "".join(out)

    # Argument rendering

    def render_argument(self, value: Any, context: Optional[ValidationContext]) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        from ..context import ValidationContext

        if isinstance(value, ValidationContext):
            return self.render_context(value)
        if context is None:
            return str(value)
        if isinstance(value, Validation):
            return self.build_message(value, context)
        if _is_component_sequence(value):
            return self.render_components(value, context)
        return self.render_value(value, context)

    def render_value(self, value: Any, context: ValidationContext) -> Optional[str]:
        """Encode ``value`` with the default converter for its type, localized"""
        from ..converters.registry import get_default_registry

        converter = get_default_registry().get(type(value))
        return context.for_rendering().encode_value(converter, value)

    def render_components(self, components: Sequence[Validation], context: ValidationContext) -> Optional[str]:
        messages = []
        for component in components:
            message = self.build_message(component, context)
            if message is not None:
                messages.append(message)
        return self.render_value(messages, context) if messages else None

    def render_context(self, context: ValidationContext) -> str:
        return str(context)


def _is_component_sequence(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and all(isinstance(item, Validation) for item in value)
    )


DEFAULT_MESSAGE_BUILDER = MessageBuilder()


__all__ = ["MessageBuilder", "DEFAULT_MESSAGE_BUILDER", "ERROR_MARKER"]
