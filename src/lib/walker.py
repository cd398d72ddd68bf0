"""
Object walker - shortcode substitution across nested data

Rebuilds a tree of mappings, lists, tuples and scalars with every string
leaf that contains a shortcode replaced by its evaluated text. Strings are
only evaluated when shortcode_contains() finds an opening-tag prefix.

Evaluation is best-effort per entry: when a value fails, the error is
logged, the key (or list element) is dropped, and its siblings carry on.
Only a failure at the root itself propagates.
"""

import asyncio
from typing import Any, Mapping, TYPE_CHECKING

from .evaluator import evaluate_async, evaluate_sync
from .log import ERROR
from .matcher import shortcode_contains

if TYPE_CHECKING:
    from .registry import ShortcodeRegistry


# Marks an entry whose evaluation failed and must be left out
DROPPED = object()


def entry_walkSync(label: str, node: Any, registry: "ShortcodeRegistry") -> Any:
    """Walk one entry, returning DROPPED instead of raising"""
    try:
        return tree_walkSync(node, registry)
    except Exception as error:
        ERROR(f"Error processing {label}", error)
        return DROPPED


def tree_walkSync(node: Any, registry: "ShortcodeRegistry") -> Any:
    """
    Synchronously substitute shortcodes throughout node

    Siblings are visited in order. The caller is responsible for rejecting
    registries with async handlers beforehand.

    Args:
        node: Mapping, list, tuple, string or any other value
        registry: Registry used for evaluation

    Returns:
        A new structure of the same shape, minus entries that failed
    """
    if isinstance(node, Mapping):
        result = {}
        for key, value in node.items():
            walked = entry_walkSync(str(key), value, registry)
            if walked is not DROPPED:
                result[key] = walked
        return result

    if isinstance(node, (list, tuple)):
        items = [entry_walkSync(f"item {index}", item, registry) for index, item in enumerate(node)]
        items = [item for item in items if item is not DROPPED]
        return tuple(items) if isinstance(node, tuple) else items

    if isinstance(node, str) and shortcode_contains(node):
        return evaluate_sync(node, registry).text

    return node


async def entry_walk(label: str, node: Any, registry: "ShortcodeRegistry") -> Any:
    """Walk one entry, returning DROPPED instead of raising"""
    try:
        return await tree_walk(node, registry)
    except Exception as error:
        ERROR(f"Error processing {label}", error)
        return DROPPED


async def tree_walk(node: Any, registry: "ShortcodeRegistry") -> Any:
    """
    Asynchronously substitute shortcodes throughout node

    Sibling entries are evaluated concurrently with asyncio.gather; within
    one string, handlers still run in order.

    Args:
        node: Mapping, list, tuple, string or any other value
        registry: Registry used for evaluation

    Returns:
        A new structure of the same shape, minus entries that failed
    """
    if isinstance(node, Mapping):
        keys = list(node.keys())
        values = await asyncio.gather(
            *(entry_walk(str(key), node[key], registry) for key in keys)
        )
        return {key: value for key, value in zip(keys, values) if value is not DROPPED}

    if isinstance(node, (list, tuple)):
        items = await asyncio.gather(
            *(entry_walk(f"item {index}", item, registry) for index, item in enumerate(node))
        )
        kept = [item for item in items if item is not DROPPED]
        return tuple(kept) if isinstance(node, tuple) else kept

    if isinstance(node, str) and shortcode_contains(node):
        return (await evaluate_async(node, registry)).text

    return node
