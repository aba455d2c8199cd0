"""
Tests for the message template renderer

Tests cover:
- Optional argument bound to None vs absent
- Required argument missing
- Nested sub-templates
- Escapes and broken templates (error marker, never raises)
- Component messages: argument rendering, localization, raw templates
"""

import logging

import pytest

from vouch.core.constraints import (
    CheckConstraint,
    Conjunction,
    MessageConstraint,
    NotEmpty,
    NotNull,
    Range,
    Size,
)
from vouch.core.message import ERROR_MARKER, DictMessageResolver, MessageBuilder
from vouch.core import ValidatorFactory


@pytest.fixture
def builder():
    return MessageBuilder()


class TestArguments:
    """Test optional and required argument semantics"""

    def test_optional_bound_to_none_empties_message(self, builder):
        """Test that {suffix} bound to None yields an empty message"""
        assert builder.render_template("<name> is required{suffix}", {"name": "x", "suffix": None}) == ""

    def test_required_none_suppresses_message(self, builder):
        """Test that <name> bound to None yields no message at all"""
        assert builder.render_template("<name> is required{suffix}", {"name": None}) is None

    def test_required_absent_suppresses_message(self, builder):
        assert builder.render_template("<name> is required", {}) is None

    def test_substitution(self, builder):
        assert builder.render_template("<name> is required{suffix}", {"name": "x", "suffix": "!"}) == "x is required!"

    def test_absent_optional_kept_literally(self, builder):
        """Test that an unbound {name} survives for a later pass"""
        assert builder.render_template("Hello {name}", {}) == "Hello {name}"

    def test_non_string_value_without_context(self, builder):
        assert builder.render_template("<n> items", {"n": 5}) == "5 items"


class TestSubTemplates:
    """Test nested (...) templates"""

    def test_nested_literal_structure(self, builder):
        """Test that "(a(b)c)" renders its text without crashing"""
        assert builder.render_template("(a(b)c)", {}) == "abc"

    def test_suppressed_sub_template_dropped(self, builder):
        assert builder.render_template("(value: <v>)done", {}) == "done"

    def test_emptied_sub_template_dropped(self, builder):
        """Test that an optional None only empties its own sub-template"""
        assert builder.render_template("(a{x})b", {"x": None}) == "b"

    def test_sub_template_with_arguments(self, builder):
        assert builder.render_template("must be( at least <min>)( at most <max>)", {"min": 1, "max": None}) == (
            "must be at least 1"
        )


class TestBrokenTemplates:
    """Test escapes and error reporting"""

    def test_escape(self, builder):
        assert builder.render_template("\\{literal\\}", {}) == "{literal}"

    def test_trailing_escape_kept(self, builder):
        """Test that a lone escape at the end renders as itself"""
        assert builder.render_template("abc\\", {}) == "abc\\"
        assert builder.render_template("\\", {}) == "\\"

    def test_unbalanced_parenthesis(self, builder):
        assert builder.render_template("(abc", {}) == ERROR_MARKER + "(abc"

    def test_unclosed_argument(self, builder):
        assert builder.render_template("a{b", {}) == "a" + ERROR_MARKER + "{b"

    def test_special_character_in_argument_name(self, builder):
        assert builder.render_template("a{b<c}", {}) == "a{b" + ERROR_MARKER + "<c}"


class TestComponentMessages:
    """Test building messages for validation components"""

    def test_bundled_template(self, context):
        assert context.build_message(NotNull()) == "must not be null"

    def test_bounds_rendered_localized(self, context):
        """Test that numeric arguments are encoded with the context locale"""
        assert context.build_message(Range(min=1, max=10)) == "must be at least 1 at most 10"
        assert context.build_message(Range(max=10)) == "must be at most 10"
        assert context.build_message(Size(min=1000)) == "size must be at least 1,000"

    def test_german_bundle(self, factory):
        context = factory.new_context().locale("de_DE").build()
        assert context.build_message(Range(min=1000)) == "muss mindestens 1.000 sein"
        assert context.build_message(NotNull()) == "darf nicht null sein"

    def test_falls_back_to_root_bundle(self, factory):
        context = factory.new_context().locale("de").build()
        assert context.build_message(Size(max=3)) == "size must be at most 3"

    def test_component_list_argument(self, context):
        """Test that a list of components renders as their joined messages"""
        message = context.build_message(Conjunction(NotNull(), NotEmpty()))
        assert message == "must satisfy all of: must not be null,must not be empty"

    def test_unknown_key_has_no_message(self, context):
        class Unkeyed(CheckConstraint):
            def check(self, value, context):
                return True

        assert context.build_message(Unkeyed()) is None

    def test_override_as_key_or_text(self):
        """Test that a message override resolves as a key first, then as text"""
        factory = ValidatorFactory(resolvers=[DictMessageResolver({"default": {"app.required": "is required"}})])
        context = factory.new_context().build()

        assert context.build_message(MessageConstraint(NotNull(), "app.required")) == "is required"
        assert context.build_message(MessageConstraint(Range(max=5), "at most <max>!")) == "at most 5!"

    def test_blank_message_is_none(self, context):
        assert context.build_message(MessageConstraint(NotNull(), "   ")) is None

    def test_broken_component_template_does_not_break_violation(self, context, caplog):
        """Test that a violation is still built when its message cannot be"""

        class Broken(CheckConstraint):
            def message_template(self, context):
                raise RuntimeError("boom")

            def check(self, value, context):
                return False

        with caplog.at_level(logging.WARNING, logger="vouch.core.violations"):
            result = Broken().evaluate("v", context)

        assert not result.valid
        assert result.violation.message is None
        assert "Failed to build violation message" in caplog.text
