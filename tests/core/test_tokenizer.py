"""
Tests for tokenizers

Tests cover:
- Null tokens for empty fields between non-whitespace delimiters
- Whitespace runs as plain separators
- Empty input / empty output
- Round trip for null-free token lists
"""

import pytest

from vouch.core.converters import DEFAULT_TOKENIZER, SimpleTokenizer
from vouch.errors import DeclarationError


class TestDecode:
    """Test splitting text into tokens"""

    @pytest.mark.parametrize(
        "text,tokens",
        [
            ("a,b,c", ["a", "b", "c"]),
            ("a, b", ["a", "b"]),
            ("a  b", ["a", "b"]),
            ("a,,b", ["a", None, "b"]),
            (",a", [None, "a"]),
            ("a,", ["a", None]),
            (",,", [None, None, None]),
            ("a;b|c", ["a", "b", "c"]),
        ],
    )
    def test_default_delimiters(self, context, text, tokens):
        """Test decoding with the default delimiter set"""
        assert DEFAULT_TOKENIZER.decode(text, context) == tokens

    def test_blank_input_is_empty(self, context):
        """Test that blank or missing text yields no tokens"""
        assert DEFAULT_TOKENIZER.decode("", context) == []
        assert DEFAULT_TOKENIZER.decode("   ", context) == []
        assert DEFAULT_TOKENIZER.decode(None, context) == []

    def test_input_not_stripped(self, context):
        """Test that a trailing delimiter followed by whitespace adds no None token"""
        assert DEFAULT_TOKENIZER.decode("a, ", context) == ["a"]
        assert DEFAULT_TOKENIZER.decode(" ,a", context) == [None, "a"]

    def test_custom_delimiters(self, context):
        """Test that only the configured characters split"""
        tokenizer = SimpleTokenizer(";")
        assert tokenizer.decode("a;b c", context) == ["a", "b c"]

    def test_empty_delimiters_rejected(self):
        """Test that a tokenizer needs at least one delimiter"""
        with pytest.raises(DeclarationError):
            SimpleTokenizer("")


class TestEncode:
    """Test joining tokens into text"""

    def test_joins_with_first_delimiter(self, context):
        assert DEFAULT_TOKENIZER.encode(["a", "b"], context) == "a,b"
        assert SimpleTokenizer("; ").encode(["a", "b"], context) == "a;b"

    def test_empty_list(self, context):
        assert DEFAULT_TOKENIZER.encode([], context) == ""

    @pytest.mark.parametrize("tokens", [["x"], ["a", "b", "c"], ["1", "22", "333"]])
    def test_round_trip(self, context, tokens):
        """Test decode(encode(tokens)) == tokens for null-free lists"""
        assert DEFAULT_TOKENIZER.decode(DEFAULT_TOKENIZER.encode(tokens, context), context) == tokens

    def test_message_arguments_escape_delimiters(self, context):
        """Test that control characters are escaped in the delims argument"""
        arguments = {}
        SimpleTokenizer(",\t").append_message_arguments(context, arguments)
        assert arguments["delims"] == ",\\t"
