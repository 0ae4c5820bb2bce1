"""Locate nodes carrying spatial hints and normalize their boxes."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple

from schemas.internal.cards import CardDocument
from schemas.internal.geometry import CoordinateRecord

from .bbox import normalize_bbox
from .traversal import DEFAULT_MAX_DEPTH, copy_tree, node_type, walk

logger = logging.getLogger(__name__)

# Spatial hint fields, first present wins.
HINT_FIELDS = ("coordinates", "boundingBox", "bounds", "rect")


def collect_coordinates(
    document: CardDocument,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[CoordinateRecord]:
    """Return one record per node (content first, then actions) with a usable hint."""
    records: List[CoordinateRecord] = []
    for prefix, nodes in (("content", document.content), ("actions", document.actions)):
        for node, path, _depth in walk(
            nodes, max_depth=max_depth, prefix=prefix, include_columns=True
        ):
            hint = spatial_hint(node)
            if hint is None:
                continue
            rectangle = normalize_bbox(hint[1])
            if rectangle is None:
                logger.debug("Dropping unusable %s at %s", hint[0], path)
                continue
            records.append(
                CoordinateRecord(
                    id=_node_id(node),
                    type=node_type(node),
                    path=path,
                    rectangle=rectangle,
                    raw_source=copy_tree(hint[1]),
                )
            )
    return records


def spatial_hint(node: Mapping[str, Any]) -> Optional[Tuple[str, Any]]:
    """Return ``(field, raw value)`` of the first spatial hint on the node."""
    for field in HINT_FIELDS:
        value = node.get(field)
        if value is not None:
            return field, value
    return None


def _node_id(node: Mapping[str, Any]) -> Optional[str]:
    value = node.get("id")
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return str(value)
    return None


__all__ = ["HINT_FIELDS", "collect_coordinates", "spatial_hint"]
