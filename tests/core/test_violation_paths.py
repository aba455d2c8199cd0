"""
Tests for the violation model and path reconstruction

Tests cover:
- Index rendering of the default node formatter
- Key paths through mapping properties
- Custom separators
- Iterator state before the first next()
- Serialization and logging helpers
"""

import logging

import pytest

from vouch.core import DefaultNodeFormatter, Target, ValidationFailure
from vouch.core.constraints import CascadeConstraint, NotEmpty, NotNull, Size
from vouch.core.metadata import MappingMetaBuilder


INNER = MappingMetaBuilder().property("name", str, constraint=NotEmpty()).build()

OUTER = (
    MappingMetaBuilder()
    .property("tags", dict[str, int], constraint=Size(max=3), target=Target.KEYS)
    .property("inner", dict, constraint=CascadeConstraint(INNER))
    .property("label", str, constraint=NotNull())
    .build()
)


@pytest.fixture
def failure(factory):
    entity = {"tags": {"abcd": 1, "ok": 2}, "inner": {"name": ""}, "label": None}
    with pytest.raises(ValidationFailure) as exc_info:
        factory.get_validator(OUTER).validate_entity(entity)
    return exc_info.value


class TestFormatter:
    """Test index rendering"""

    @pytest.mark.parametrize(
        "index,text",
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (1.5, "1.5"),
            ("a", '"a"'),
        ],
    )
    def test_format_index(self, index, text):
        assert DefaultNodeFormatter().format_index(index) == text

    def test_other_index_rendered_as_hash(self):
        assert DefaultNodeFormatter().format_index(object()).startswith("@")


class TestPaths:
    """Test path reconstruction over a mixed hierarchy"""

    def test_paths(self, failure):
        assert failure.format_violations() == [
            'tags{"abcd"}: size must be at most 3',
            "inner.name: must not be empty",
            "label: must not be null",
        ]

    def test_custom_separator(self, failure):
        formatter = DefaultNodeFormatter("/", element_brackets=("<", ">"), key_brackets=("[", "]"))
        itr = failure.iterator(formatter)
        paths = [itr.path() for _ in itr]
        assert paths == ['tags["abcd"]', "inner/name", "label"]

    def test_nodes(self, failure):
        itr = failure.iterator()
        next(itr)
        next(itr)
        nodes = itr.nodes()
        assert [node.element_name for node in nodes] == ["inner", "name"]

    def test_path_before_next(self, failure):
        itr = failure.iterator()
        with pytest.raises(LookupError):
            itr.path()

    def test_first_violation(self, failure):
        assert failure.first_violation.element_name == "tags"
        assert len(failure) == 3


class TestReporting:
    """Test serialization and logging"""

    def test_to_dict(self, failure):
        data = failure.to_dict()
        assert data["cascade"] is False
        assert [item["path"] for item in data["violations"]] == ['tags{"abcd"}', "inner.name", "label"]
        assert data["violations"][0]["target"] == "keys"
        assert data["violations"][0]["index"] == "abcd"

    def test_log_violations(self, failure, caplog):
        log = logging.getLogger("tests.violations")
        with caplog.at_level(logging.INFO, logger="tests.violations"):
            failure.log_violations(log)
        assert "label: must not be null" in caplog.text

    def test_summary(self, failure):
        assert str(failure).startswith("3 violations")
