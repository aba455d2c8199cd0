"""
Tests for property filters

Tests cover:
- Name based filters
- Combination with &, | and ~
- Filters limiting entity validation
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from vouch.core import ValidationFailure
from vouch.core.constraints import NotEmpty, NotNull
from vouch.core.metadata import (
    ALL,
    And,
    EntityMetaBuilder,
    NameEndsWith,
    NameSet,
    NameStartsWith,
    Not,
    Or,
)


@dataclass
class Contact:
    home_phone: Optional[str] = None
    work_phone: Optional[str] = None
    home_email: Optional[str] = None


CONTACT = (
    EntityMetaBuilder(Contact)
    .property("home_phone", str, constraint=NotNull())
    .property("work_phone", str, constraint=NotNull())
    .property("home_email", str, constraint=NotEmpty())
    .build()
)


def selected(property_filter):
    return [meta.name for meta in CONTACT if property_filter(meta)]


class TestNameFilters:
    """Test filters matching property names"""

    def test_all(self):
        assert selected(ALL) == ["home_phone", "work_phone", "home_email"]

    def test_starts_with(self):
        assert selected(NameStartsWith("home_")) == ["home_phone", "home_email"]

    def test_ends_with(self):
        assert selected(NameEndsWith("_phone")) == ["home_phone", "work_phone"]

    def test_name_set(self):
        assert selected(NameSet("work_phone", "absent")) == ["work_phone"]


class TestCombinations:
    """Test combined filters"""

    def test_explicit_classes(self):
        home, phone = NameStartsWith("home_"), NameEndsWith("_phone")
        assert selected(And(home, phone)) == ["home_phone"]
        assert selected(Or(NameSet("work_phone"), NameEndsWith("_email"))) == ["work_phone", "home_email"]
        assert selected(Not(home)) == ["work_phone"]

    def test_operators(self):
        home, phone = NameStartsWith("home_"), NameEndsWith("_phone")
        assert isinstance(home & phone, And)
        assert isinstance(home | phone, Or)
        assert isinstance(~home, Not)
        assert selected(home & ~phone) == ["home_email"]
        assert selected(~home | NameSet("home_email")) == ["work_phone", "home_email"]


class TestEntityValidation:
    """Test filters applied by the engine"""

    def test_only_selected_properties_validated(self, factory):
        validator = factory.get_validator(CONTACT)
        with pytest.raises(ValidationFailure) as exc_info:
            validator.new_context().property_filter(NameEndsWith("_phone")).validate_entity(Contact())

        assert sorted(v.element_name for v in exc_info.value.violations) == ["home_phone", "work_phone"]

    def test_excluded_properties_skipped(self, factory):
        validator = factory.get_validator(CONTACT)
        contact = Contact(home_phone="1", home_email="")
        builder = validator.new_context().property_filter(NameStartsWith("home_") & ~NameEndsWith("_email"))
        assert builder.validate_entity(contact) is contact
