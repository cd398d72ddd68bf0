"""
Models package for atcode

Contains data structures and type definitions for the shortcode engine
and its command line pipeline.
"""

from .state import ProgramState, pipeline
from .handlers import ShortcodeSpec, BUILTIN_SHORTCODES, handler_isAsync
from .shortcode import ShortcodeMatch, ParseResult, AttributeValue

__all__ = [
    "ProgramState",
    "pipeline",
    "ShortcodeSpec",
    "BUILTIN_SHORTCODES",
    "handler_isAsync",
    "ShortcodeMatch",
    "ParseResult",
    "AttributeValue",
]
