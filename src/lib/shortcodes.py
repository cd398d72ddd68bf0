"""
Shortcodes - public entry point of the engine

Shortcodes use the format [@name attr="value"]content[/@name], or the
self-closing form [@name attr="value"]. Prefix with a backslash
(\\[@name]) to render one literally.

Example:
    processor = Shortcodes(cwd="/srv/site")
    processor.shortcode_add("upper", lambda content="", **kwargs: content.upper())

    processor.string_parseSync("Hello [@upper]world[/@upper]!").text
    # 'Hello WORLD!'

    await processor.object_parse({"root": "[@cwd]", "tags": ["[@upper]a[/@upper]"]})
    # {'root': '/srv/site', 'tags': ['A']}
"""

from typing import Any, Callable, Dict, List, Optional

from ..config import appsettings
from ..models.shortcode import AttributeValue, ParseResult, ShortcodeMatch
from .attributes import attributes_parse
from .errors import AsyncNotAllowedError
from .evaluator import evaluate_async, evaluate_sync
from .matcher import matches_find, shortcode_contains
from .registry import ShortcodeDefaults, ShortcodeRegistry
from .walker import tree_walk, tree_walkSync


class Shortcodes:
    """
    Shortcode processor for strings and nested objects

    Owns one ShortcodeRegistry. The registry may be reused across any number
    of parse calls, but must not be changed (shortcode_add/clear) while a
    parse is in flight.
    """

    def __init__(self, shortcodes: Optional[ShortcodeDefaults] = None, cwd: Optional[str] = None) -> None:
        """
        Initialize the processor

        Args:
            shortcodes: Shortcodes registered on top of the built-ins, and
                        registered again by clear(); ShortcodeSpec objects,
                        (name, handler) pairs or a {name: handler} mapping
            cwd: Value of [@cwd]; defaults to appsettings.cwd
        """
        self.registry = ShortcodeRegistry(
            cwd=cwd if cwd is not None else appsettings.cwd,
            defaults=shortcodes,
        )

    @property
    def hasAsyncHandlers(self) -> bool:
        """True if any registered handler is asynchronous"""
        return self.registry.hasAsyncHandlers

    def shortcode_add(self, name: str, handler: Callable[..., Any], description: str = "") -> None:
        """
        Register a new shortcode handler

        Args:
            name: Shortcode name ([A-Za-z0-9_@-]+)
            handler: Called as handler(content=, attributes=, fullMatch=);
                     may be `async def`

        Raises:
            InvalidNameError: The name is malformed
        """
        self.registry.shortcode_add(name, handler, description=description)

    def clear(self) -> None:
        """Clear all shortcodes and reset to the built-ins and constructor defaults"""
        self.registry.clear()

    def syncAllowed_check(self) -> None:
        """
        Refuse synchronous parsing if any async handler is registered

        The check is registry-wide, whether or not the input uses that handler.

        Raises:
            AsyncNotAllowedError: The registry holds an async handler
        """
        if self.registry.hasAsyncHandlers:
            raise AsyncNotAllowedError()

    async def string_parse(self, source: str) -> ParseResult:
        """
        Parse a string and process all shortcodes (async)

        Raises:
            HandlerError: A handler raised
        """
        return await evaluate_async(source, self.registry)

    def string_parseSync(self, source: str) -> ParseResult:
        """
        Parse a string and process all shortcodes (sync)

        Raises:
            AsyncNotAllowedError: The registry holds an async handler
            HandlerError: A handler raised
        """
        self.syncAllowed_check()
        return evaluate_sync(source, self.registry)

    async def object_parse(self, tree: Any) -> Any:
        """
        Process shortcodes in every string of a nested structure (async)

        Entries whose evaluation fails are logged and left out of the result.
        """
        return await tree_walk(tree, self.registry)

    def object_parseSync(self, tree: Any) -> Any:
        """
        Process shortcodes in every string of a nested structure (sync)

        Raises:
            AsyncNotAllowedError: The registry holds an async handler
        """
        self.syncAllowed_check()
        return tree_walkSync(tree, self.registry)

    def string_parseToMatches(self, source: str) -> List[ShortcodeMatch]:
        """Find shortcode occurrences without invoking any handler"""
        return matches_find(source)

    def attributes_parse(self, raw: Optional[str]) -> Dict[str, AttributeValue]:
        """Parse the raw attribute text of an opening tag"""
        return attributes_parse(raw)

    def shortcode_contains(self, source: str) -> bool:
        """Check whether source contains an opening-tag prefix"""
        return shortcode_contains(source)
