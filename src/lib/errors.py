"""
Exception types raised by the shortcode engine

Unknown shortcode names and malformed tags are never errors; they pass
through as literal text. Only the conditions below surface to callers.
"""

from typing import Optional


class ShortcodeError(Exception):
    """Base class for every error raised by atcode"""
    pass


class InvalidNameError(ShortcodeError, ValueError):
    """Raised by shortcode_add() when a name is not made of [A-Za-z0-9_@-]"""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid shortcode name: {name!r}")


class AsyncNotAllowedError(ShortcodeError, RuntimeError):
    """Raised by the *Sync entry points when the registry holds an async handler"""

    def __init__(
        self, message: str = "Synchronous parsing is not possible when async shortcodes are present"
    ) -> None:
        super().__init__(message)


class HandlerError(ShortcodeError):
    """
    A registered handler raised while a string was being evaluated

    The handler's own exception is chained as __cause__.

    Attributes:
        name: Shortcode whose handler failed
        fullMatch: The occurrence being evaluated
    """

    def __init__(self, name: str, fullMatch: str, error: Optional[BaseException] = None) -> None:
        self.name = name
        self.fullMatch = fullMatch
        detail = f": {error}" if error is not None else ""
        super().__init__(f"Handler for '{name}' failed on {fullMatch!r}{detail}")
