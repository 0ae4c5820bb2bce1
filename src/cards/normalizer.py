"""Coerce arbitrary card-like JSON into a well-typed CardDocument."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from core.config import Settings, get_settings
from schemas.internal.cards import CARD_KIND, CardDocument

from .traversal import copy_tree

logger = logging.getLogger(__name__)

# Fields consulted, in order, for the content list of a non-card object.
CONTENT_ALIASES = ("content", "body", "items")


def normalize(raw: Any, *, settings: Settings | None = None) -> CardDocument:
    """Return a CardDocument for any input; malformed shapes degrade to empty lists.

    * non-object input -> empty document with default schema/version;
    * an object already typed ``AdaptiveCard`` -> content/actions coerced to lists,
      everything else left as-is;
    * any other object -> treated as content wrapped in an implicit card.

    Raw input is copied without recursion and anything nested past
    ``MAX_NESTING`` dict/list levels is dropped; an existing CardDocument is copied whole.
    """
    resolved = settings or get_settings()
    if isinstance(raw, CardDocument):
        base: Dict[str, Any] = copy_tree(raw.to_payload(), max_nesting=None)
    elif isinstance(raw, Mapping):
        base = copy_tree(raw)
    else:
        logger.debug("Non-object card input (%s); using empty document", type(raw).__name__)
        return _empty_document(resolved)

    if base.get("type") == CARD_KIND:
        return _coerce_card(base, resolved)
    return _wrap_object(base, resolved)


def normalize_many(raw: Any, *, settings: Settings | None = None) -> List[CardDocument]:
    """Normalize an array element-wise; anything else becomes a single document."""
    if isinstance(raw, list):
        documents = [normalize(item, settings=settings) for item in raw]
        return documents or [normalize(None, settings=settings)]
    return [normalize(raw, settings=settings)]


def _coerce_card(base: Dict[str, Any], settings: Settings) -> CardDocument:
    if not isinstance(base.get("content"), list):
        body = base.pop("body", None)
        base["content"] = body if isinstance(body, list) else []
    if not isinstance(base.get("actions"), list):
        if "actions" in base:
            logger.debug("Card actions is %s; coercing to []", type(base["actions"]).__name__)
        base["actions"] = []

    if not isinstance(base.get("$schema"), str):
        base["$schema"] = settings.card_schema_uri
    base["version"] = _coerce_version(base.get("version"), settings)

    try:
        return CardDocument.model_validate(base)
    except ValidationError as exc:
        logger.debug("Card header failed validation; keeping content only: %s", exc)
        return CardDocument(
            schema_uri=base["$schema"],
            version=base["version"],
            content=base["content"],
            actions=base["actions"],
        )


def _wrap_object(base: Dict[str, Any], settings: Settings) -> CardDocument:
    content: List[Any] = []
    for key in CONTENT_ALIASES:
        candidate = base.get(key)
        if isinstance(candidate, list):
            content = candidate
            break
    actions = base.get("actions")
    schema_uri = base.get("$schema")
    version = base.get("version")

    return CardDocument(
        schema_uri=schema_uri if isinstance(schema_uri, str) else settings.card_schema_uri,
        version=version if isinstance(version, str) and version else settings.card_version,
        content=content,
        actions=actions if isinstance(actions, list) else [],
    )


def _coerce_version(value: Any, settings: Settings) -> str:
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return settings.card_version


def _empty_document(settings: Settings) -> CardDocument:
    return CardDocument(schema_uri=settings.card_schema_uri, version=settings.card_version)


__all__ = ["CONTENT_ALIASES", "normalize", "normalize_many"]
