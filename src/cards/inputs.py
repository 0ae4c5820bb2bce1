"""Collect current/default values of interactive inputs keyed by input id."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from core.config import Settings, get_settings
from schemas.internal.cards import CardDocument, Node

from .traversal import DEFAULT_MAX_DEPTH, node_type, walk

logger = logging.getLogger(__name__)

INPUT_PREFIX = "Input."
TOGGLE_TYPE = "Input.Toggle"
CHOICE_SET_TYPE = "Input.ChoiceSet"

INPUT_KEY_FIELDS = ("id", "name", "inputId")
INPUT_VALUE_FIELDS = ("value", "defaultValue", "placeholder")


def extract_input_defaults(
    target: Any,
    *,
    value_separator: str | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    settings: Settings | None = None,
) -> Dict[str, Any]:
    """Map each keyed ``Input.*`` node to its current or default value.

    Later nodes with the same key overwrite earlier ones. A CardDocument is
    walked content first, then actions, each list starting at depth 0.
    """
    separator = value_separator or (settings or get_settings()).card_value_separator

    defaults: Dict[str, Any] = {}
    for node, path in _iter_nodes(target, max_depth):
        kind = node_type(node)
        if not kind.startswith(INPUT_PREFIX):
            continue
        key = input_key(node)
        if key is None:
            logger.debug("Skipping %s without id/name at %s", kind, path or "<root>")
            continue
        defaults[key] = input_value(node, separator=separator)
    return defaults


def input_key(node: Mapping[str, Any]) -> Optional[str]:
    for field in INPUT_KEY_FIELDS:
        value = node.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
    return None


def input_value(node: Mapping[str, Any], *, separator: str = ",") -> Any:
    kind = node_type(node)
    if kind == TOGGLE_TYPE:
        return node.get("value") or node.get("valueOn") or "true"
    if kind == CHOICE_SET_TYPE and node.get("isMultiSelect"):
        node_separator = node.get("valueSeparator")
        delimiter = node_separator if isinstance(node_separator, str) and node_separator else separator
        return _split_choices(node.get("value"), delimiter)

    for field in INPUT_VALUE_FIELDS:
        if field in node:
            return node[field]
    return None


def input_pairs(defaults: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Flatten a defaults map into ``[{"key": ..., "value": ...}]``."""
    return [{"key": key, "value": value} for key, value in defaults.items()]


def _iter_nodes(target: Any, max_depth: int) -> Iterator[Tuple[Node, str]]:
    if isinstance(target, CardDocument):
        roots: List[Tuple[str, Any]] = [("content", target.content), ("actions", target.actions)]
    else:
        roots = [("", target)]
    for prefix, root in roots:
        for node, path, _depth in walk(root, max_depth=max_depth, prefix=prefix, include_columns=True):
            yield node, path


def _split_choices(raw: Any, delimiter: str) -> List[str]:
    if isinstance(raw, list):
        items = [str(item).strip() for item in raw if item is not None]
    elif isinstance(raw, str) and raw:
        items = [item.strip() for item in raw.split(delimiter)]
    else:
        return []
    return [item for item in items if item]


__all__ = [
    "extract_input_defaults",
    "input_key",
    "input_pairs",
    "input_value",
]
