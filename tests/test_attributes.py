"""
Attribute parser tests

Tests quoting styles, numeric coercion, escaped quotes and degradation on
malformed attribute text.
"""

import pytest

from atcode.lib.attributes import attributes_parse, value_coerce


class TestQuoting:
    """Test the three value styles"""

    def test_double_quoted(self):
        """Double-quoted values keep inner spaces"""
        assert attributes_parse('quote="double quote"') == {"quote": "double quote"}

    def test_single_quoted(self):
        """Single-quoted values keep inner spaces"""
        assert attributes_parse("quote='single quote'") == {"quote": "single quote"}

    def test_bare(self):
        """Bare values run to the next whitespace"""
        assert attributes_parse("mode=fast other=x") == {"mode": "fast", "other": "x"}

    def test_mixed(self):
        """Styles can be mixed in one tag"""
        result = attributes_parse("a=\"one\" b='two' c=three")

        assert result == {"a": "one", "b": "two", "c": "three"}

    def test_spaces_around_equals(self):
        """Whitespace around = is allowed"""
        assert attributes_parse('key = "value"') == {"key": "value"}

    def test_empty_quoted_value_kept(self):
        """attr="" yields an empty string, not a missing key"""
        assert attributes_parse('only=""') == {"only": ""}
        assert attributes_parse("only=''") == {"only": ""}

    def test_special_characters_in_name(self):
        """Names may contain @ and -"""
        assert attributes_parse('attr@special="value" data-id=7') == {
            "attr@special": "value",
            "data-id": 7,
        }

    def test_duplicate_name_last_wins(self):
        """A repeated name keeps its last value"""
        assert attributes_parse("k=1 k=2") == {"k": 2}


class TestEscapedQuotes:
    """Test collapsing of backslash-escaped quotes"""

    def test_escaped_double_quotes(self):
        r"""search=\"test\" parses like search="test" """
        assert attributes_parse('search=\\"test\\"') == {"search": "test"}

    def test_multiple_backslashes(self):
        """Any run of backslashes before a quote collapses"""
        assert attributes_parse('search=\\\\\\"a b\\\\\\"') == {"search": "a b"}

    def test_escaped_single_quotes(self):
        r"""search=\'test\' parses like search='test' """
        assert attributes_parse("search=\\'x y\\'") == {"search": "x y"}


class TestNumericCoercion:
    """Test conversion of numeric-looking values"""

    def test_integer_and_string(self):
        """Numeric literal coerced, quoted word preserved"""
        assert attributes_parse('n=5 s="hi"') == {"n": 5, "s": "hi"}

    def test_quoted_number_coerced(self):
        """Quoting does not prevent coercion"""
        assert attributes_parse('n="42"') == {"n": 42}

    @pytest.mark.parametrize("raw, expected", [
        ("0", 0),
        ("-12", -12),
        ("3.25", 3.25),
        ("-0.5", -0.5),
        ("007", 7),
    ])
    def test_numbers(self, raw, expected):
        """Optional minus, digits, optional fraction"""
        value = value_coerce(raw)

        assert value == expected
        assert type(value) is type(expected)

    @pytest.mark.parametrize("raw", ["1e3", "+5", "1.", ".5", "1,000", "12px", "0x10", ""])
    def test_not_numbers(self, raw):
        """Anything else stays a string"""
        assert value_coerce(raw) == raw


class TestDegradation:
    """Test that malformed text never raises"""

    @pytest.mark.parametrize("raw", [None, "", "   ", "noequals", "=value", "key="])
    def test_empty_result(self, raw):
        """No name=value pairs gives an empty dict"""
        assert attributes_parse(raw) == {}

    def test_partial_garbage(self):
        """Valid pairs are kept when surrounded by garbage"""
        assert attributes_parse("junk ok=1 =bad") == {"ok": 1}
