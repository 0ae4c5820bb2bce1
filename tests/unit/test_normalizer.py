from __future__ import annotations

import pytest

from cards.normalizer import normalize, normalize_many
from core.config import DEFAULT_CARD_VERSION, DEFAULT_SCHEMA_URI, Settings
from schemas.internal.cards import CARD_KIND, CardDocument


@pytest.mark.parametrize("raw", [None, 0, 3.5, True, "text", "", [], [1, 2]])
def test_non_object_input_degrades_to_empty_document(raw) -> None:
    document = normalize(raw)
    assert document.content == []
    assert document.actions == []
    assert document.kind == CARD_KIND
    assert document.schema_uri == DEFAULT_SCHEMA_URI
    assert document.version == DEFAULT_CARD_VERSION


def test_empty_object_is_an_empty_document() -> None:
    document = normalize({})
    assert document.content == []
    assert document.actions == []


def test_typed_card_keeps_fields_and_coerces_lists() -> None:
    raw = {
        "type": "AdaptiveCard",
        "$schema": "custom://schema",
        "version": 1.4,
        "body": [{"type": "TextBlock", "text": "hi"}],
        "actions": "not a list",
        "title": "Weekly report",
        "verticalAlignment": "center",
    }
    document = normalize(raw)

    assert document.content == [{"type": "TextBlock", "text": "hi"}]
    assert document.actions == []
    assert document.schema_uri == "custom://schema"
    assert document.version == "1.4"
    assert document.vertical_alignment == "center"
    assert document.extra_field("title") == "Weekly report"
    assert document.extra_field("body") is None


def test_typed_card_without_content_gets_empty_list() -> None:
    document = normalize({"type": "AdaptiveCard", "content": {"type": "TextBlock"}})
    assert document.content == []


def test_typed_card_missing_header_uses_defaults() -> None:
    document = normalize({"type": "AdaptiveCard", "content": [], "version": ""})
    assert document.schema_uri == DEFAULT_SCHEMA_URI
    assert document.version == DEFAULT_CARD_VERSION


def test_arbitrary_object_is_wrapped_using_first_list_field() -> None:
    raw = {
        "content": "nope",
        "items": [{"type": "Image", "url": "a.png"}],
        "actions": [{"type": "Action.OpenUrl", "url": "https://example.com"}],
        "$schema": "custom://schema",
        "version": "1.2",
    }
    document = normalize(raw)

    assert document.kind == CARD_KIND
    assert document.content == [{"type": "Image", "url": "a.png"}]
    assert document.actions == [{"type": "Action.OpenUrl", "url": "https://example.com"}]
    assert document.schema_uri == "custom://schema"
    assert document.version == "1.2"


def test_arbitrary_object_with_bad_header_uses_defaults() -> None:
    document = normalize({"body": [], "$schema": 3, "version": 2, "actions": {}})
    assert document.schema_uri == DEFAULT_SCHEMA_URI
    assert document.version == DEFAULT_CARD_VERSION
    assert document.actions == []


def test_normalize_does_not_mutate_input() -> None:
    raw = {"type": "AdaptiveCard", "content": [{"type": "TextBlock", "text": "a"}]}
    document = normalize(raw)
    document.content[0]["text"] = "changed"
    assert raw["content"][0]["text"] == "a"


def test_normalize_accepts_its_own_output() -> None:
    first = normalize({"type": "AdaptiveCard", "body": [{"type": "TextBlock"}], "title": "x"})
    second = normalize(first)
    assert isinstance(second, CardDocument)
    assert second == first
    assert second.to_payload() == first.to_payload()


def test_settings_supply_defaults() -> None:
    settings = Settings(CARD_VERSION="1.3", CARD_SCHEMA_URI="urn:cards")
    document = normalize(None, settings=settings)
    assert document.version == "1.3"
    assert document.schema_uri == "urn:cards"


def test_to_payload_uses_wire_names() -> None:
    payload = normalize({"type": "AdaptiveCard", "content": [], "minHeight": "80px"}).to_payload()
    assert payload["$schema"] == DEFAULT_SCHEMA_URI
    assert payload["type"] == CARD_KIND
    assert payload["minHeight"] == "80px"
    assert "backgroundImage" not in payload
    assert "id" not in payload


def test_normalize_many_shapes() -> None:
    assert len(normalize_many([])) == 1
    assert normalize_many([])[0].content == []

    documents = normalize_many([{"type": "AdaptiveCard", "content": [{"type": "TextBlock"}]}, 5])
    assert len(documents) == 2
    assert documents[0].content == [{"type": "TextBlock"}]
    assert documents[1].content == []

    assert len(normalize_many({"items": []})) == 1
    assert len(normalize_many(None)) == 1
