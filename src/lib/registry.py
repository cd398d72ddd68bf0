"""
Registry of shortcode handlers

Maps shortcode names to ShortcodeSpec objects and tracks whether any
registered handler is asynchronous. Every registry is seeded with the
built-in shortcodes [@cwd], [@date] and [@time].
"""

import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..config import appsettings
from ..models.handlers import ShortcodeSpec
from .errors import InvalidNameError
from .log import LOG


NAME_PATTERN = re.compile(r'[A-Za-z0-9_@\-]+')

ShortcodeDefault = Union[ShortcodeSpec, Tuple[str, Callable[..., Any]]]
ShortcodeDefaults = Union[Iterable[ShortcodeDefault], Mapping[str, Callable[..., Any]]]


def name_isValid(name: Any) -> bool:
    """Check a candidate shortcode name against [A-Za-z0-9_@-]+"""
    return isinstance(name, str) and NAME_PATTERN.fullmatch(name) is not None


class ShortcodeRegistry:
    """
    Registry of shortcode specifications and handlers

    The hasAsyncHandlers flag only ever goes from False to True while the
    registry lives; clear() is the one way to reset it.

    Attributes:
        cwd: String returned by the [@cwd] built-in ("" if None)
        defaults: Caller-supplied shortcodes re-registered by clear()
        specs: Registered specs keyed by name
        hasAsyncHandlers: True once any async handler has been added
    """

    def __init__(self, cwd: Optional[str] = None, defaults: Optional[ShortcodeDefaults] = None) -> None:
        """
        Initialize the registry and register the built-in and default shortcodes

        Args:
            cwd: Working directory reported by [@cwd]
            defaults: Extra shortcodes, as ShortcodeSpec objects, (name, handler)
                      pairs or a {name: handler} mapping
        """
        self.cwd = cwd
        if isinstance(defaults, Mapping):
            self.defaults: List[ShortcodeDefault] = list(defaults.items())
        else:
            self.defaults = list(defaults or [])
        self.specs: Dict[str, ShortcodeSpec] = {}
        self.hasAsyncHandlers = False
        self.builtins_register()
        self.defaults_register()

    def register(self, spec: ShortcodeSpec) -> None:
        """
        Register a shortcode specification

        Raises:
            InvalidNameError: spec.name is not made of [A-Za-z0-9_@-]
        """
        if not name_isValid(spec.name):
            raise InvalidNameError(spec.name)
        if not callable(spec.handler):
            raise TypeError(f"Handler for '{spec.name}' is not callable")

        self.specs[spec.name] = spec
        if spec.is_async:
            self.hasAsyncHandlers = True
        LOG(f"Registered shortcode '{spec.name}'{' (async)' if spec.is_async else ''}", level=3)

    def shortcode_add(self, name: str, handler: Callable[..., Any], description: str = "") -> None:
        """
        Register a handler under a name, replacing any existing one

        Args:
            name: Shortcode name, e.g. "upper" for [@upper]...[/@upper]
            handler: Callable invoked as handler(content=, attributes=, fullMatch=),
                     returning a string or an awaitable of one
            description: Optional human-readable description

        Raises:
            InvalidNameError: name is not made of [A-Za-z0-9_@-]
        """
        self.register(ShortcodeSpec.spec_create(name, handler, description=description))

    def get(self, name: str) -> Optional[Callable[..., Any]]:
        """Get the handler registered under name, or None"""
        spec = self.spec_get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[ShortcodeSpec]:
        """Get the full specification registered under name, or None"""
        return self.specs.get(name.strip())

    def names_list(self) -> List[str]:
        """Registered names in registration order"""
        return list(self.specs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self.specs

    def __len__(self) -> int:
        return len(self.specs)

    def clear(self) -> None:
        """
        Drop every handler, including built-ins, then re-seed

        Re-registers the built-ins and the defaults given at construction
        and resets hasAsyncHandlers (set again if a default is async).
        """
        self.specs = {}
        self.hasAsyncHandlers = False
        self.builtins_register()
        self.defaults_register()

    def builtins_register(self) -> None:
        """Register [@cwd], [@date] and [@time]"""

        def cwd_handler(**kwargs: Any) -> str:
            """Handle [@cwd] - configured working directory"""
            return self.cwd or ''

        def date_handler(**kwargs: Any) -> str:
            """Handle [@date] - current date in the host locale"""
            return appsettings.date_now()

        def time_handler(**kwargs: Any) -> str:
            """Handle [@time] - current time in the host locale"""
            return appsettings.time_now()

        self.register(ShortcodeSpec(
            name='cwd',
            handler=cwd_handler,
            builtin=True,
            description='Working directory the engine was configured with',
        ))
        self.register(ShortcodeSpec(
            name='date',
            handler=date_handler,
            builtin=True,
            description='Current date, formatted per the host locale',
        ))
        self.register(ShortcodeSpec(
            name='time',
            handler=time_handler,
            builtin=True,
            description='Current time, formatted per the host locale',
        ))

    def defaults_register(self) -> None:
        """Register the caller-supplied default shortcodes"""
        for default in self.defaults:
            if isinstance(default, ShortcodeSpec):
                self.register(ShortcodeSpec.spec_create(
                    default.name, default.handler, description=default.description
                ))
            else:
                name, handler = default
                self.shortcode_add(name, handler)
