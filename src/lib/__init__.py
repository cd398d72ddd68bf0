"""
atcode - Shortcode template engine

Recursive [@name attr="value"]content[/@name] substitution for strings and
nested objects.
"""

__version__ = "1.0.0"

from .shortcodes import Shortcodes
from .registry import ShortcodeRegistry
from .errors import ShortcodeError, InvalidNameError, AsyncNotAllowedError, HandlerError
from .log import LOG, ERROR, state_connectToLogger

__all__ = [
    "Shortcodes",
    "ShortcodeRegistry",
    "ShortcodeError",
    "InvalidNameError",
    "AsyncNotAllowedError",
    "HandlerError",
    "LOG",
    "ERROR",
    "state_connectToLogger",
    "__version__",
]
