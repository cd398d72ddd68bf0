r"""
Matcher for [@name attr="value"]content[/@name] syntax

Scans a string and produces the ordered list of shortcode occurrences
without invoking any handler.

Grammar of one occurrence:
    \?                      optional backslash, marks the occurrence escaped
    [@ \s*                  opening bracket, optional whitespace
    name                    one or more of [A-Za-z0-9_@-]
    (\s+ attributes)?       any run of characters other than [ and ]
    \s* ]                   optional whitespace, closing bracket
    (content [/@name])?     optional body, ended by the FIRST matching closer

An opening tag without a matching closer is self-closing (content is "").
Text that does not fit the grammar (for example "[@name" with no "]") is
not a match and stays literal.

Example:
    >>> [m.name for m in matches_find("a [@x]b[/@x] \\[@y] [@z")]
    ['x', 'y']
"""

import re
from typing import List

from ..models.shortcode import ShortcodeMatch
from .attributes import attributes_parse


SHORTCODE_PATTERN = re.compile(
    r'\\?\[@\s*([A-Za-z0-9_@\-]+)(?:\s+([^\[\]]+?))?\s*\](?:(.*?)\[/@\1\])?',
    re.DOTALL,
)
SHORTCODE_PREFIX = re.compile(r'\[@\s*[A-Za-z0-9_@\-]+')


def matches_find(source: str) -> List[ShortcodeMatch]:
    """
    Find every shortcode occurrence in source, left to right

    Occurrences never overlap. Escaped occurrences are included so the
    evaluator can strip their backslash.

    Args:
        source: Text to scan

    Returns:
        List of ShortcodeMatch in source order, each carrying its span

    Example:
        For source 'Hi [@sc n=5]body[/@sc]':
        [ShortcodeMatch(name="sc", content="body", attributes={"n": 5},
                        fullMatch="[@sc n=5]body[/@sc]", start=3, end=22)]
    """
    matches = []
    for found in SHORTCODE_PATTERN.finditer(source):
        name, raw_attributes, content = found.groups()
        matches.append(ShortcodeMatch(
            name=name,
            content=content or '',
            attributes=attributes_parse(raw_attributes),
            fullMatch=found.group(0),
            start=found.start(),
            end=found.end(),
        ))
    return matches


def shortcode_contains(source: str) -> bool:
    """
    Cheap check for an opening-tag prefix anywhere in source

    Used to skip full matching on strings that cannot contain a shortcode.
    A True result does not guarantee a complete occurrence (e.g. "[@x" with
    no closing bracket).
    """
    return SHORTCODE_PREFIX.search(source) is not None
