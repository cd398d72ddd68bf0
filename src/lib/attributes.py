"""
Attribute parser for shortcode opening tags

Turns the raw attribute text of an occurrence such as
[@sc n=5 title="Hello" mode='a b'] into {"n": 5, "title": "Hello", "mode": "a b"}.

Values may be double-quoted, single-quoted or bare tokens. Backslash-escaped
quotes are collapsed before matching so values that arrive pre-escaped (for
example from JSON text) still parse. Values that look like numbers are
coerced to int or float.
"""

import re
from typing import Dict, Optional

from ..models.shortcode import AttributeValue


ATTRIBUTE_PATTERN = re.compile(
    r'''([A-Za-z0-9_@\-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|(\S+))'''
)
NUMBER_PATTERN = re.compile(r'-?[0-9]+(\.[0-9]+)?')
ESCAPED_DOUBLE_QUOTE = re.compile(r'\\+"')
ESCAPED_SINGLE_QUOTE = re.compile(r"\\+'")


def value_coerce(value: str) -> AttributeValue:
    """
    Convert a numeric-looking attribute value to a number

    Returns:
        int for "5" or "-12", float for "2.5", the string unchanged otherwise

    Example:
        >>> value_coerce("-3")
        -3
        >>> value_coerce("1.50")
        1.5
        >>> value_coerce("1e3")
        '1e3'
    """
    match = NUMBER_PATTERN.fullmatch(value)
    if not match:
        return value
    if match.group(1):
        return float(value)
    return int(value)


def attributes_parse(raw: Optional[str]) -> Dict[str, AttributeValue]:
    r"""
    Parse the raw attribute text of an opening tag

    Never raises: text with no name=value pairs yields an empty dict. When a
    name repeats, the last value wins. Empty quoted values are kept as "".

    Args:
        raw: Attribute text between the name and the closing ], or None

    Returns:
        Dict mapping attribute names to str, int or float values

    Example:
        >>> attributes_parse('n=5 s="hi"')
        {'n': 5, 's': 'hi'}
        >>> attributes_parse(r'search=\"test\"')
        {'search': 'test'}
        >>> attributes_parse('only=""')
        {'only': ''}
    """
    if not raw:
        return {}

    text = ESCAPED_DOUBLE_QUOTE.sub('"', raw)
    text = ESCAPED_SINGLE_QUOTE.sub("'", text)

    attributes: Dict[str, AttributeValue] = {}
    for match in ATTRIBUTE_PATTERN.finditer(text):
        name, double_quoted, single_quoted, bare = match.groups()
        value = double_quoted or single_quoted or bare or ''
        attributes[name] = value_coerce(value)
    return attributes
