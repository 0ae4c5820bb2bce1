"""Helpers for recovering JSON card payloads from model output."""

from __future__ import annotations

import json
import re
from typing import Any, Iterator

_CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_OPENERS = {"{": "}", "[": "]"}


def extract_json(text: str, *, prefer_code_block: bool = True, allow_arrays: bool = True) -> Any:
    """Return the first decodable JSON object (or array) embedded in text.

    Strategy:
    - If prefer_code_block is True, scan fenced code blocks first.
    - Then scan the full text.
    - Candidates are bracket-balanced spans; a failed decode is retried once
      with trailing commas removed.
    - A candidate nested past the interpreter recursion limit aborts the scan
      with ValueError.
    """

    source = text or ""
    if prefer_code_block:
        for block in _iter_code_blocks(source):
            value = _first_json_value(block, allow_arrays=allow_arrays)
            if value is not None:
                return value

    value = _first_json_value(source, allow_arrays=allow_arrays)
    if value is not None:
        return value

    raise ValueError("No JSON value found in model output")


def _iter_code_blocks(text: str) -> Iterator[str]:
    for match in _CODE_BLOCK_RE.finditer(text):
        yield match.group(1)


def _first_json_value(text: str, *, allow_arrays: bool) -> Any:
    openers = "{[" if allow_arrays else "{"
    for start in _iter_openers(text, openers):
        end = _find_matching_bracket(text, start)
        if end is None:
            continue
        decoded = _decode(text[start : end + 1])
        if isinstance(decoded, dict) or (allow_arrays and isinstance(decoded, list)):
            return decoded
    return None


def _decode(candidate: str) -> Any:
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass
    except RecursionError as exc:
        # Inner spans are just as deep; give up on the whole text.
        raise ValueError("JSON value nested too deeply") from exc
    try:
        return json.loads(_TRAILING_COMMA_RE.sub(r"\1", candidate))
    except json.JSONDecodeError:
        return None


def _iter_openers(text: str, openers: str) -> Iterator[int]:
    for idx, char in enumerate(text):
        if char in openers:
            yield idx


def _find_matching_bracket(text: str, start: int) -> int | None:
    expected = [_OPENERS[text[start]]]
    in_string = False
    escape = False

    for idx in range(start + 1, len(text)):
        char = text[idx]
        if in_string:
            if escape:
                escape = False
            elif char == "\\":
                escape = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in _OPENERS:
            expected.append(_OPENERS[char])
        elif char in "}]":
            if char != expected[-1]:
                return None
            expected.pop()
            if not expected:
                return idx
    return None


__all__ = ["extract_json"]
