from __future__ import annotations

import pytest

from cards.bbox import normalize_bbox


def _box(raw):
    rectangle = normalize_bbox(raw)
    assert rectangle is not None
    return rectangle.model_dump()


def test_edges_derive_width_and_height() -> None:
    assert _box({"left": 10, "top": 20, "right": 110, "bottom": 70}) == {
        "x": 10.0,
        "y": 20.0,
        "width": 100.0,
        "height": 50.0,
        "right": 110.0,
        "bottom": 70.0,
    }


@pytest.mark.parametrize(
    "raw",
    [
        "10,20,100,50",
        "10 20 100 50",
        "10; 20; 100; 50",
        [10, 20, 100, 50],
        ["10", "20", "100px", "50"],
        "[10, 20, 100, 50]",
        '{"x": 10, "y": 20, "w": 100, "h": 50}',
    ],
)
def test_positional_and_encoded_shapes(raw) -> None:
    box = _box(raw)
    assert (box["x"], box["y"], box["width"], box["height"]) == (10.0, 20.0, 100.0, 50.0)
    assert box["right"] == 110.0
    assert box["bottom"] == 70.0


def test_start_derived_from_size_and_end() -> None:
    box = _box({"w": 40, "x2": 100, "h": 10, "maxY": 30})
    assert box["x"] == 60.0
    assert box["y"] == 20.0


def test_synonyms_resolve_in_priority_order() -> None:
    box = _box({"left": 5, "x": 1, "top": 2, "width": 3, "height": 4})
    assert box["x"] == 1.0
    assert box["right"] == 4.0
    assert box["bottom"] == 6.0


def test_explicit_values_are_not_overwritten() -> None:
    box = _box({"x": 0, "width": 10, "right": 50})
    assert box["width"] == 10.0
    assert box["right"] == 50.0
    assert box["y"] is None
    assert box["height"] is None


def test_partial_box_keeps_missing_members_absent() -> None:
    box = _box({"x": 4, "top": "7px"})
    assert box == {
        "x": 4.0,
        "y": 7.0,
        "width": None,
        "height": None,
        "right": None,
        "bottom": None,
    }


def test_non_numeric_members_count_as_absent() -> None:
    box = _box({"x": True, "y": 3, "width": float("inf"), "height": "tall"})
    assert box["x"] is None
    assert box["y"] == 3.0
    assert box["width"] is None
    assert box["height"] is None


@pytest.mark.parametrize(
    "raw",
    [
        None,
        True,
        42,
        "",
        "   ",
        "abc",
        "[1, 2",
        '"just a string"',
        [1, 2, 3],
        [1, 2, 3, 4, 5],
        [1, "two", 3, 4],
        {},
        {"unrelated": 1},
        {"x": float("nan")},
    ],
)
def test_unrecoverable_hints_return_none(raw) -> None:
    assert normalize_bbox(raw) is None


def test_deeply_nested_json_hint_is_unusable() -> None:
    assert normalize_bbox("[" * 100000 + "]" * 100000) is None
