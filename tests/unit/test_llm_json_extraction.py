from __future__ import annotations

import pytest

from utils.llm_json import extract_json


def test_extract_json_prefers_code_block() -> None:
    text = (
        'prefix {noise} {"outside": true}\n'
        '```json\n'
        '{"inside": 1}\n'
        '```\n'
        '{tail}'
    )
    assert extract_json(text, prefer_code_block=True) == {"inside": 1}


def test_extract_json_can_skip_code_blocks() -> None:
    text = '{"outside": true}\n```json\n{"inside": 1}\n```'
    assert extract_json(text, prefer_code_block=False) == {"outside": True}


def test_extract_json_scans_body_after_invalid_brace() -> None:
    text = 'lead {not json} middle {"ok": 2} tail'
    assert extract_json(text) == {"ok": 2}


def test_extract_json_handles_braces_inside_strings() -> None:
    text = 'prefix {"a": "brace { inside ]", "b": 1} trailing'
    assert extract_json(text) == {"a": "brace { inside ]", "b": 1}


def test_extract_json_returns_arrays() -> None:
    text = 'Here are the cards: [{"type": "AdaptiveCard"}, {"type": "AdaptiveCard"}] done'
    assert extract_json(text) == [{"type": "AdaptiveCard"}, {"type": "AdaptiveCard"}]


def test_extract_json_objects_only() -> None:
    text = 'ids [1, 2] then {"b": [1]}'
    assert extract_json(text, allow_arrays=False) == {"b": [1]}


def test_extract_json_repairs_trailing_commas() -> None:
    text = '```\n{"type": "AdaptiveCard", "body": [{"type": "TextBlock",},],}\n```'
    assert extract_json(text) == {"type": "AdaptiveCard", "body": [{"type": "TextBlock"}]}


def test_extract_json_raises_when_missing() -> None:
    with pytest.raises(ValueError, match="No JSON value found"):
        extract_json("no json here")
    with pytest.raises(ValueError, match="No JSON value found"):
        extract_json('{"unterminated": ')


def test_extract_json_gives_up_on_runaway_nesting() -> None:
    text = "see " + "[" * 100000 + "]" * 100000
    with pytest.raises(ValueError, match="too deeply"):
        extract_json(text)
