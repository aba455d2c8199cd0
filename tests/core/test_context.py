"""
Tests for the validation context

Tests cover:
- Scoped target/index overrides (restored on error)
- Child contexts: inherited parameters, root entity, cascade flag
- Format caching and locale handling
- Date patterns with month and weekday names
"""

from datetime import date
from decimal import Decimal

import pytest

from vouch.core import MalformedValue, Target, ValidationFailure, ValidatorFactory, parse_locale
from vouch.core.constraints import NotNull
from vouch.core.converters import DateConverter
from vouch.core.formats import DateFormat, IntegerFormat
from vouch.core.violations import ConstraintViolation
from vouch.config import VouchSettings


class TestScoped:
    """Test target/index scoping"""

    def test_overrides_and_restores(self, context):
        with context.scoped(target=Target.ELEMENTS, index=2):
            assert context.current_target is Target.ELEMENTS
            assert context.current_index == 2
            with context.scoped(index=3):
                assert context.current_target is Target.ELEMENTS
                assert context.current_index == 3
            assert context.current_index == 2
        assert context.current_target is Target.VALUE
        assert context.current_index is None

    def test_restores_on_error(self, context):
        with pytest.raises(RuntimeError):
            with context.scoped(target=Target.KEYS, index="k"):
                raise RuntimeError("boom")
        assert context.current_target is Target.VALUE
        assert context.current_index is None


class TestChildContext:
    """Test parent/child relations"""

    def test_inherits_parameters(self, factory):
        parent = factory.new_context().locale("de").groups("update").localized_convert().fail_fast().build()
        child = factory.get_validator().new_context(parent).build()

        assert child.parent is parent
        assert str(child.locale) == "de"
        assert child.groups == ("update",)
        assert child.localized_convert
        assert child.fail_fast

    def test_root_entity(self, factory):
        parent = factory.new_context().build()
        parent.current_entity = "root"
        child = factory.get_validator().new_context(parent).build()
        child.current_entity = "leaf"
        assert child.root_entity == "root"

    def test_cascade_flag(self, factory, context):
        child = factory.get_validator().new_context(context).build()
        violation = ConstraintViolation(NotNull(), child, None)

        child.add_violation(violation)
        with pytest.raises(ValidationFailure) as exc_info:
            child.raise_if_violated()
        assert exc_info.value.cascade is True

        context.add_violation(violation)
        with pytest.raises(ValidationFailure) as exc_info:
            context.raise_if_violated()
        assert exc_info.value.cascade is False

    def test_accepts_groups(self, factory):
        assert factory.new_context().build().accepts_groups(["a"])
        context = factory.new_context().groups("a", "b").build()
        assert context.accepts_groups(["b"])
        assert not context.accepts_groups(["c"])


class TestFormats:
    """Test locale-aware formats"""

    def test_default_formats_cached(self, context):
        assert context.integer_format() is context.integer_format()
        assert context.date_format() is context.date_format()
        assert context.integer_format("#,##0") is not context.integer_format()

    def test_patterns_from_settings(self):
        factory = ValidatorFactory(VouchSettings(date_pattern="dd.MM.yyyy", locale="de_DE"))
        context = factory.new_context().build()
        assert context.date_format().format(date(2024, 3, 9)) == "09.03.2024"
        assert context.date_format().parse_date("09.03.2024") == date(2024, 3, 9)

    def test_integer_format(self):
        fmt = IntegerFormat(parse_locale("en_US"))
        assert fmt.format(1234567) == "1,234,567"
        assert fmt.parse("1,234") == 1234
        with pytest.raises(ValueError):
            fmt.parse("1.5")

    def test_decimal_format(self, context):
        assert context.decimal_format().parse("1,234.5") == Decimal("1234.5")

    def test_date_style(self):
        fmt = DateFormat(parse_locale("en_US"), date_style="long")
        assert fmt.format(date(2024, 3, 9)) == "March 9, 2024"

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            DateFormat(parse_locale("en_US"), date_style="tiny")

    def test_parse_locale(self):
        assert str(parse_locale("de-DE")) == "de_DE"
        assert str(parse_locale(None)) == "en_US"


class TestDatePatterns:
    """Test parsing dates with explicit patterns"""

    def test_abbreviated_month_round_trip(self):
        fmt = DateFormat(parse_locale("en_US"), "d MMM y")
        assert fmt.format(date(2024, 1, 5)) == "5 Jan 2024"
        assert fmt.parse_date("5 Jan 2024") == date(2024, 1, 5)
        assert fmt.parse_date("5 jan 2024") == date(2024, 1, 5)

    def test_weekday_names_skipped(self):
        fmt = DateFormat(parse_locale("en_US"), "EEE, d MMM y")
        assert fmt.format(date(2024, 1, 5)) == "Fri, 5 Jan 2024"
        assert fmt.parse_date("Fri, 5 Jan 2024") == date(2024, 1, 5)

    def test_wide_month_german(self):
        fmt = DateFormat(parse_locale("de"), "d. MMMM y")
        assert fmt.format(date(2024, 1, 5)) == "5. Januar 2024"
        assert fmt.parse_date("5. Januar 2024") == date(2024, 1, 5)

    def test_two_digit_year(self):
        fmt = DateFormat(parse_locale("en_US"), "dd/MM/yy")
        assert fmt.parse_date("09/03/24") == date(2024, 3, 9)

    def test_quoted_literal(self):
        fmt = DateFormat(parse_locale("en_US"), "y 'week of' MM-dd")
        assert fmt.parse_date("2024 week of 03-09") == date(2024, 3, 9)

    def test_time_fields_ignored(self):
        fmt = DateFormat(parse_locale("en_US"), "yyyy-MM-dd HH:mm")
        assert fmt.parse_date("2024-03-09 14:30") == date(2024, 3, 9)

    @pytest.mark.parametrize("text", ["5 Foo 2024", "5 Jan", "2024-01-05"])
    def test_mismatch(self, text):
        with pytest.raises(ValueError):
            DateFormat(parse_locale("en_US"), "d MMM y").parse_date(text)

    @pytest.mark.parametrize("pattern", ["d MMM y G", "MM-dd", "y 'open"])
    def test_unusable_pattern(self, pattern):
        with pytest.raises(ValueError):
            DateFormat(parse_locale("en_US"), pattern).parse_date("5 Jan 2024")

    def test_localized_converter_round_trip(self):
        factory = ValidatorFactory(VouchSettings(date_pattern="d MMM y"))
        context = factory.new_context().localized_convert().build()
        converter = DateConverter()
        assert converter.encode(date(2024, 1, 5), context) == "5 Jan 2024"
        assert converter.decode("5 Jan 2024", context) == date(2024, 1, 5)

    def test_malformed_localized_text(self):
        factory = ValidatorFactory(VouchSettings(date_pattern="d MMM y"))
        context = factory.new_context().localized_convert().build()
        with pytest.raises(MalformedValue):
            DateConverter().decode("5 Foo 2024", context)
