"""
Shortcode-specific data models

Type-safe structures for matcher and evaluator return values.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Union


AttributeValue = Union[str, int, float]


@dataclass
class ShortcodeMatch:
    r"""
    A single shortcode occurrence found in source text

    Returned by matches_find() for every [@name ...] pattern located in the
    input, in left-to-right order. No handler has been invoked yet.

    Attributes:
        name: The shortcode name (e.g., "cwd", "upper", "special@char")
        content: Raw text between the opening and closing tags, or "" for
                 a self-closing tag
        attributes: Parsed attributes (numeric-looking values coerced)
        fullMatch: Exact substring consumed, including a leading backslash
                   when the occurrence is escaped
        start: Position in the scanned input where fullMatch begins
        end: Position in the scanned input just past fullMatch

    Example:
        For source 'Hi [@sc n=5]body[/@sc]':
        ShortcodeMatch(
            name="sc",
            content="body",
            attributes={"n": 5},
            fullMatch="[@sc n=5]body[/@sc]",
            start=3,
            end=22
        )
    """
    name: str
    content: str
    attributes: Dict[str, AttributeValue]
    fullMatch: str
    start: int = 0
    end: int = 0

    @property
    def escaped(self) -> bool:
        r"""True if the occurrence was written as \[@...] and must render literally"""
        return self.fullMatch.startswith('\\')


@dataclass
class ParseResult:
    """
    Result of evaluating a string against a registry

    Attributes:
        text: Input with every recognised shortcode replaced by handler output
        matches: Every occurrence found at the top level of the input,
                 including escaped and unrecognised ones
    """
    text: str
    matches: List[ShortcodeMatch] = field(default_factory=list)
