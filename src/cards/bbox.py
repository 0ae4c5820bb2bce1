"""Bounding box reconciliation across the coordinate encodings seen in cards.

Accepted shapes::

    [10, 20, 100, 50]                          # x, y, width, height
    "[10, 20, 100, 50]"  /  '{"x": 10, ...}'   # JSON-encoded list or object
    "10,20,100,50"  /  "10 20 100 50"          # delimited numbers
    {"x": 10, "y": 20, "width": 100, "height": 50}
    {"left": 10, "top": 20, "right": 110, "bottom": 70}
    {"l": 10, "t": 20, "w": 100, "h": 50}      # any synonym mix

Missing members are derived per axis from whichever pair is present; explicit
values are never overwritten.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from schemas.internal.geometry import Rectangle

logger = logging.getLogger(__name__)

BBOX_KEY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "x": ("x", "left", "l", "x1", "minX"),
    "y": ("y", "top", "t", "y1", "minY"),
    "width": ("width", "w"),
    "height": ("height", "h"),
    "right": ("right", "r", "x2", "maxX"),
    "bottom": ("bottom", "b", "y2", "maxY"),
}

_DELIMITER_RE = re.compile(r"[\s,;]+")
_PX_SUFFIX_RE = re.compile(r"px$", re.IGNORECASE)


def normalize_bbox(raw: Any) -> Optional[Rectangle]:
    """Reconcile a raw spatial hint into a Rectangle, or None if unrecoverable."""
    values = _extract_values(raw)
    if values is None:
        logger.debug("Unrecognized bbox hint: %r", raw)
        return None
    if all(value is None for value in values.values()):
        return None

    x, width, right = _reconcile_axis(values["x"], values["width"], values["right"])
    y, height, bottom = _reconcile_axis(values["y"], values["height"], values["bottom"])
    return Rectangle(x=x, y=y, width=width, height=height, right=right, bottom=bottom)


def _extract_values(raw: Any) -> Optional[Dict[str, Optional[float]]]:
    if isinstance(raw, Mapping):
        return _values_from_mapping(raw)
    if isinstance(raw, str):
        return _values_from_string(raw)
    if isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)):
        return _values_from_sequence(raw)
    return None


def _values_from_mapping(raw: Mapping[str, Any]) -> Dict[str, Optional[float]]:
    values: Dict[str, Optional[float]] = {}
    for member, aliases in BBOX_KEY_ALIASES.items():
        values[member] = None
        for alias in aliases:
            if alias in raw:
                number = _to_number(raw[alias])
                if number is not None:
                    values[member] = number
                    break
    return values


def _values_from_sequence(raw: Sequence[Any]) -> Optional[Dict[str, Optional[float]]]:
    if len(raw) != 4:
        return None
    numbers = [_to_number(item) for item in raw]
    if any(number is None for number in numbers):
        return None
    x, y, width, height = numbers
    return {
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "right": None,
        "bottom": None,
    }


def _values_from_string(raw: str) -> Optional[Dict[str, Optional[float]]]:
    text = raw.strip()
    if not text:
        return None
    if text[0] in "[{":
        try:
            decoded = json.loads(text)
        except (json.JSONDecodeError, RecursionError):
            logger.debug("Unparseable JSON bbox hint: %.80s", text)
            return None
        if isinstance(decoded, (list, dict)):
            return _extract_values(decoded)
        return None
    parts = [part for part in _DELIMITER_RE.split(text) if part]
    return _values_from_sequence(parts)


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = _PX_SUFFIX_RE.sub("", value.strip()).strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _reconcile_axis(
    start: Optional[float], size: Optional[float], end: Optional[float]
) -> Tuple[Optional[float], Optional[float], Optional[float]]:
    if start is not None and size is not None and end is None:
        end = start + size
    elif start is not None and end is not None and size is None:
        size = end - start
    elif size is not None and end is not None and start is None:
        start = end - size
    return start, size, end


__all__ = ["BBOX_KEY_ALIASES", "normalize_bbox"]
