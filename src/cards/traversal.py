"""Depth-bounded traversal over untyped card trees."""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Mapping, Tuple

from schemas.internal.cards import Node

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64

# Container fields in the order children are visited.
CHILD_FIELDS: Tuple[str, ...] = (
    "content",
    "body",
    "items",
    "columns",
    "rows",
    "cells",
    "actions",
    "cards",
)
COLUMN_CHILD_FIELDS: Tuple[str, ...] = ("items", "content", "body")

# Dict/list levels kept by copy_tree; deep enough for DEFAULT_MAX_DEPTH nodes
# (each node adds a mapping and a child list) with room for attribute objects.
MAX_NESTING = 160


def node_type(node: Any) -> str:
    """Return the node's type tag, or an empty string."""
    if not isinstance(node, Mapping):
        return ""
    value = node.get("type")
    return value.strip() if isinstance(value, str) else ""


def walk(
    root: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    prefix: str = "",
    include_columns: bool = False,
) -> Iterator[Tuple[Node, str, int]]:
    """Yield ``(node, path, depth)`` for every mapping in pre-order.

    Lists are transparent: their elements share the depth of the list. Nodes at
    ``depth >= max_depth`` are not visited. Column wrappers are skipped unless
    ``include_columns`` is set; their children are visited either way.
    """
    stack: List[Tuple[Any, str, int]] = [(root, prefix, 0)]
    truncated = 0

    while stack:
        value, path, depth = stack.pop()
        if isinstance(value, list):
            for idx in range(len(value) - 1, -1, -1):
                stack.append((value[idx], f"{path}[{idx}]", depth))
            continue
        if not isinstance(value, Mapping):
            continue
        if depth >= max_depth:
            truncated += 1
            continue

        yield value, path, depth

        children = list(_iter_children(value, path, depth, include_columns))
        stack.extend(reversed(children))

    if truncated:
        logger.debug("Traversal truncated %d node(s) at depth %d", truncated, max_depth)


def flatten(node_or_list: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> List[Node]:
    """Collect every typed node in pre-order, ignoring column wrappers."""
    return [node for node, _path, _depth in walk(node_or_list, max_depth=max_depth) if node_type(node)]


def copy_tree(value: Any, *, max_nesting: int | None = MAX_NESTING) -> Any:
    """Copy a JSON-like tree with an explicit stack instead of recursion.

    Containers more than ``max_nesting`` dict/list levels below the root are
    dropped; scalars are shared, not copied.
    """
    if not isinstance(value, (Mapping, list)):
        return value

    root = _empty_like(value)
    stack: List[Tuple[Any, Any, int]] = [(value, root, 1)]
    dropped = 0

    while stack:
        source, target, nesting = stack.pop()
        entries = source.items() if isinstance(source, Mapping) else enumerate(source)
        for key, child in entries:
            if isinstance(child, (Mapping, list)):
                if max_nesting is not None and nesting >= max_nesting:
                    dropped += 1
                    continue
                child_copy = _empty_like(child)
                stack.append((child, child_copy, nesting + 1))
            else:
                child_copy = child
            if isinstance(target, dict):
                target[key] = child_copy
            else:
                target.append(child_copy)

    if dropped:
        logger.debug("Copy dropped %d container(s) nested past %d levels", dropped, max_nesting)
    return root


def _empty_like(value: Any) -> Any:
    return {} if isinstance(value, Mapping) else []


def _iter_children(
    node: Mapping[str, Any], path: str, depth: int, include_columns: bool
) -> Iterator[Tuple[Any, str, int]]:
    for field in CHILD_FIELDS:
        children = node.get(field)
        if not isinstance(children, list):
            continue
        field_path = _join(path, field)
        if field != "columns" or include_columns:
            yield children, field_path, depth + 1
            continue
        for idx, column in enumerate(children):
            if not isinstance(column, Mapping):
                continue
            for column_field in COLUMN_CHILD_FIELDS:
                items = column.get(column_field)
                if isinstance(items, list):
                    yield items, f"{field_path}[{idx}].{column_field}", depth + 2
                    break


def _join(path: str, field: str) -> str:
    return f"{path}.{field}" if path else field


__all__ = [
    "CHILD_FIELDS",
    "COLUMN_CHILD_FIELDS",
    "MAX_NESTING",
    "copy_tree",
    "DEFAULT_MAX_DEPTH",
    "flatten",
    "node_type",
    "walk",
]
