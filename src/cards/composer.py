"""Merge several card documents into one document of styled sections."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from core.config import Settings, get_settings
from schemas.internal.cards import CardDocument, Node
from schemas.internal.descriptors import CardDescriptor
from schemas.internal.presentation import PresentationTables

from .presentation import get_presentation_tables
from .traversal import copy_tree, node_type

CONTAINER_TYPE = "Container"
ACTION_SET_TYPE = "ActionSet"
SECTION_ID_PREFIX = "section_"

# (document attribute, wire name) pairs copied onto sections.
_COSMETIC_FIELDS = (
    ("background_image", "backgroundImage"),
    ("vertical_alignment", "verticalContentAlignment"),
    ("min_height", "minHeight"),
    ("select_action", "selectAction"),
)


def compose(
    documents: Sequence[CardDocument],
    *,
    descriptors: Sequence[CardDescriptor] | None = None,
    tables: PresentationTables | None = None,
    settings: Settings | None = None,
) -> CardDocument:
    """Return the single document unchanged, or one section per document.

    Raises:
        ValueError: if ``documents`` is empty.
    """
    if not documents:
        raise ValueError("compose() requires at least one document")
    if len(documents) == 1:
        return documents[0]

    resolved = tables or get_presentation_tables()
    sections: List[Node] = []
    for index, document in enumerate(documents):
        descriptor = _descriptor_at(descriptors, index)
        theme = descriptor.theme if descriptor is not None else None
        sections.append(build_section(document, index, theme=theme, tables=resolved))

    resolved_settings = settings or get_settings()
    return CardDocument(
        schema_uri=resolved_settings.card_schema_uri,
        version=resolved_settings.card_version,
        content=sections,
    )


def build_section(
    document: CardDocument,
    index: int,
    *,
    theme: Optional[str] = None,
    tables: PresentationTables | None = None,
) -> Node:
    """Convert one document into a styled Container section."""
    resolved = tables or get_presentation_tables()
    section = _section_body(document)

    explicit_bleed = section.get("bleed")
    if explicit_bleed is None:
        explicit_bleed = document.extra_field("bleed")

    section["id"] = f"{SECTION_ID_PREFIX}{index}"
    section["style"] = resolved.section_style(index, theme)
    section["spacing"] = "large" if index == 0 else "medium"
    section["separator"] = index != 0
    section["bleed"] = explicit_bleed if isinstance(explicit_bleed, bool) else True

    for attribute, wire_name in _COSMETIC_FIELDS:
        value = getattr(document, attribute)
        if value is not None:
            section[wire_name] = copy_tree(value, max_nesting=None)
    return section


def _section_body(document: CardDocument) -> Node:
    content = document.content
    if len(content) == 1 and not document.actions and isinstance(content[0], dict):
        node = content[0]
        kind = node_type(node)
        if kind == CONTAINER_TYPE:
            return copy_tree(node, max_nesting=None)
        if kind:
            # Column sets, columns and any other lone typed node get wrapped.
            return {"type": CONTAINER_TYPE, "items": [copy_tree(node, max_nesting=None)]}

    items: List[Any] = copy_tree(list(content), max_nesting=None)
    if document.actions:
        actions = copy_tree(list(document.actions), max_nesting=None)
        items.append({"type": ACTION_SET_TYPE, "actions": actions})
    return {"type": CONTAINER_TYPE, "items": items}


def _descriptor_at(
    descriptors: Sequence[CardDescriptor] | None, index: int
) -> Optional[CardDescriptor]:
    if descriptors is None or index >= len(descriptors):
        return None
    return descriptors[index]


__all__ = ["build_section", "compose"]
