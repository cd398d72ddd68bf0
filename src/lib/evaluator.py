"""
Evaluator for shortcode matches

Rebuilds a string with every recognised shortcode replaced by its handler's
output. Nested shortcodes resolve inside-out: a match's content is fully
evaluated before that match's own handler is called.

The algorithm is written once, as the generator evaluation_steps(). It
never calls a handler itself; it yields a HandlerCall for every handler
invocation and expects the handler's result to be sent back. Two drivers
run it:

- evaluate_sync(): calls each handler and sends the result straight back
- evaluate_async(): calls each handler, awaits the result if needed, then
  sends it back; handlers therefore run strictly one after another in
  match order

Per match, in order:
1. Copy the literal gap since the previous match
2. Escaped (\\[@...]): emit fullMatch without its backslash
3. Unknown name: emit fullMatch unchanged
4. Evaluate the content recursively
5. Call the handler and splice its result
The tail after the last match is appended verbatim.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Dict, Generator, TYPE_CHECKING

from ..models.handlers import ShortcodeSpec
from ..models.shortcode import AttributeValue, ParseResult
from .errors import AsyncNotAllowedError, HandlerError
from .log import LOG
from .matcher import matches_find

if TYPE_CHECKING:
    from .registry import ShortcodeRegistry


@dataclass
class HandlerCall:
    """
    One pending handler invocation, yielded by evaluation_steps()

    Attributes:
        spec: Registered spec of the shortcode being evaluated
        content: Match content with nested shortcodes already substituted
        attributes: Parsed attributes of the match
        fullMatch: The occurrence as written in the input
    """
    spec: ShortcodeSpec
    content: str
    attributes: Dict[str, AttributeValue]
    fullMatch: str

    def invoke(self) -> Any:
        """
        Call the handler, wrapping anything it raises in HandlerError

        Returns:
            The handler's return value, which may be an awaitable
        """
        LOG(f"Calling handler '{self.spec.name}' for {self.fullMatch!r}", level=3)
        try:
            return self.spec.handler(
                content=self.content,
                attributes=self.attributes,
                fullMatch=self.fullMatch,
            )
        except HandlerError:
            raise
        except Exception as error:
            raise HandlerError(self.spec.name, self.fullMatch, error) from error


EvaluationSteps = Generator[HandlerCall, Any, ParseResult]


def result_render(result: Any) -> str:
    """Text spliced into the output for a handler's return value"""
    if result is None:
        return ''
    return str(result)


def evaluation_steps(source: str, registry: "ShortcodeRegistry") -> EvaluationSteps:
    """
    Evaluate source against registry, yielding every handler invocation

    Drive with evaluate_sync() or evaluate_async(); each yielded HandlerCall
    must be answered by sending the handler's (resolved) result.

    Args:
        source: Text to evaluate
        registry: Registry used for name lookup

    Returns:
        ParseResult (as the generator's return value) holding the rebuilt
        text and the top-level matches of source
    """
    matches = matches_find(source)
    if matches:
        LOG(f"Found {len(matches)} shortcode(s) in {len(source)} characters", level=3)

    parts = []
    position = 0

    for match in matches:
        parts.append(source[position:match.start])
        position = match.end

        if match.escaped:
            parts.append(match.fullMatch[1:])
            continue

        spec = registry.spec_get(match.name)
        if spec is None:
            LOG(f"No handler for '{match.name}', leaving it as text", level=3)
            parts.append(match.fullMatch)
            continue

        content = ''
        if match.content:
            inner = yield from evaluation_steps(match.content, registry)
            content = inner.text

        result = yield HandlerCall(
            spec=spec,
            content=content,
            attributes=match.attributes,
            fullMatch=match.fullMatch,
        )
        parts.append(result_render(result))

    parts.append(source[position:])
    return ParseResult(text=''.join(parts), matches=matches)


def evaluate_sync(source: str, registry: "ShortcodeRegistry") -> ParseResult:
    """
    Run evaluation_steps() without ever suspending

    Callers are expected to have rejected registries with async handlers
    already. A handler that still hands back an awaitable (e.g. a plain
    function returning a coroutine) raises AsyncNotAllowedError.

    Raises:
        HandlerError: A handler raised
        AsyncNotAllowedError: A handler returned an awaitable
    """
    steps = evaluation_steps(source, registry)
    result: Any = None
    while True:
        try:
            call = steps.send(result)
        except StopIteration as done:
            return done.value

        result = call.invoke()
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            steps.close()
            raise AsyncNotAllowedError(
                f"Handler for '{call.spec.name}' returned an awaitable during synchronous parsing"
            )


async def evaluate_async(source: str, registry: "ShortcodeRegistry") -> ParseResult:
    """
    Run evaluation_steps(), awaiting handlers that return awaitables

    Handlers are awaited one at a time in match order; nothing runs
    concurrently.

    Raises:
        HandlerError: A handler raised, directly or while being awaited
    """
    steps = evaluation_steps(source, registry)
    result: Any = None
    while True:
        try:
            call = steps.send(result)
        except StopIteration as done:
            return done.value

        result = call.invoke()
        if inspect.isawaitable(result):
            try:
                result = await result
            except HandlerError:
                raise
            except Exception as error:
                raise HandlerError(call.spec.name, call.fullMatch, error) from error
