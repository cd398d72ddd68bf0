"""
atcode - Shortcode template engine

Recursive [@name attr="value"]content[/@name] substitution for strings and
nested objects, with synchronous and asynchronous handlers.
"""

__version__ = "1.0.0"
__author__ = "Rudolph Pienaar"
__email__ = "rudolph.pienaar@gmail.com"

from .lib import (
    Shortcodes,
    ShortcodeRegistry,
    ShortcodeError,
    InvalidNameError,
    AsyncNotAllowedError,
    HandlerError,
    LOG,
    state_connectToLogger,
)
from .models import ShortcodeMatch, ShortcodeSpec, ParseResult

__all__ = [
    "Shortcodes",
    "ShortcodeRegistry",
    "ShortcodeError",
    "InvalidNameError",
    "AsyncNotAllowedError",
    "HandlerError",
    "ShortcodeMatch",
    "ShortcodeSpec",
    "ParseResult",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
