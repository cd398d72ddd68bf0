"""
Shortcode handler specification models

Defines the metadata the registry keeps for every registered handler.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Set


@dataclass
class ShortcodeSpec:
    """
    Specification for a registered shortcode

    Attributes:
        name: Shortcode name as written after [@
        handler: Callable invoked as handler(content=, attributes=, fullMatch=)
        is_async: Whether invoking the handler yields an awaitable
        builtin: Whether this is one of the engine's own shortcodes
        description: Human-readable description
    """
    name: str
    handler: Callable[..., Any]
    is_async: bool = False
    builtin: bool = False
    description: str = ""

    @classmethod
    def spec_create(
        cls, name: str, handler: Callable[..., Any], builtin: bool = False, description: str = ""
    ) -> "ShortcodeSpec":
        """Build a spec, detecting whether the handler is asynchronous"""
        return cls(
            name=name,
            handler=handler,
            is_async=handler_isAsync(handler),
            builtin=builtin,
            description=description,
        )


def handler_isAsync(handler: Callable[..., Any]) -> bool:
    """
    Check whether a handler is declared asynchronous

    Covers plain `async def` functions, functools.partial wrappers of them
    and callable objects whose __call__ is `async def`.
    """
    if inspect.iscoroutinefunction(handler):
        return True
    call = getattr(handler, '__call__', None)
    return call is not None and inspect.iscoroutinefunction(call)


# Shortcodes seeded into every registry
BUILTIN_SHORTCODES: Set[str] = {
    'cwd',   # [@cwd] - configured working directory
    'date',  # [@date] - current date, host locale
    'time',  # [@time] - current time, host locale
}
