"""Top-level augmentation: normalize, classify, compose and add a hero summary."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from core.config import Settings, get_settings
from schemas.internal.cards import CardDocument, Node
from schemas.internal.descriptors import THEME_PRIORITY, CardDescriptor, ThemeName
from schemas.internal.presentation import PresentationTables
from schemas.requests import AugmentOptions
from schemas.responses import AugmentResult

from .classifier import classify
from .composer import CONTAINER_TYPE, compose
from .coordinates import collect_coordinates
from .inputs import extract_input_defaults
from .normalizer import normalize_many
from .presentation import get_presentation_tables

logger = logging.getLogger(__name__)

HERO_SENTINEL_ID = "hero_summary"
MULTI_LAYOUT = "multi"


def augment(
    raw: Any,
    *,
    options: AugmentOptions | None = None,
    tables: PresentationTables | None = None,
    settings: Settings | None = None,
) -> AugmentResult:
    """Turn raw card JSON (object, array or garbage) into one renderable document.

    Applying ``augment`` to its own output document returns the same document.
    """
    resolved_settings = settings or get_settings()
    opts = options or AugmentOptions()
    resolved_tables = tables or get_presentation_tables(opts.presentation_tables)
    max_depth = opts.max_depth or resolved_settings.card_max_depth
    separator = opts.value_separator or resolved_settings.card_value_separator
    hero_enabled = resolved_settings.card_hero_enabled if opts.hero is None else opts.hero

    documents = normalize_many(raw, settings=resolved_settings)
    descriptors = [
        classify(document, index=index, tables=resolved_tables, max_depth=max_depth)
        for index, document in enumerate(documents)
    ]
    document = compose(
        documents,
        descriptors=descriptors,
        tables=resolved_tables,
        settings=resolved_settings,
    )
    if hero_enabled:
        document = prepend_hero(document, descriptors, tables=resolved_tables)

    input_defaults = extract_input_defaults(
        document, value_separator=separator, max_depth=max_depth
    )
    coordinates = collect_coordinates(document, max_depth=max_depth)

    logger.info(
        "Augmented %d document(s): theme=%s inputs=%d coordinates=%d",
        len(documents),
        aggregate_theme(descriptors),
        len(input_defaults),
        len(coordinates),
    )
    return AugmentResult(
        document=document,
        descriptors=descriptors,
        input_defaults=input_defaults,
        coordinates=coordinates,
    )


def aggregate_theme(descriptors: Sequence[CardDescriptor]) -> ThemeName:
    """Highest-priority theme present across descriptors, else ``default``."""
    themes = {descriptor.theme for descriptor in descriptors}
    for theme in THEME_PRIORITY:
        if theme in themes:
            return theme
    return "default"


def has_hero(document: CardDocument) -> bool:
    if not document.content:
        return False
    first = document.content[0]
    return isinstance(first, dict) and first.get("id") == HERO_SENTINEL_ID


def prepend_hero(
    document: CardDocument,
    descriptors: Sequence[CardDescriptor],
    *,
    tables: PresentationTables | None = None,
) -> CardDocument:
    """Return a copy with the hero section first; documents that already have one pass through."""
    if has_hero(document) or not descriptors:
        return document
    hero = build_hero(descriptors, tables=tables)
    return document.model_copy(update={"content": [hero, *document.content]})


def build_hero(
    descriptors: Sequence[CardDescriptor],
    *,
    tables: PresentationTables | None = None,
) -> Node:
    resolved = tables or get_presentation_tables()
    count = len(descriptors)
    theme = aggregate_theme(descriptors)

    if count == 1:
        layout = descriptors[0].layout_type
        title = descriptors[0].title
        subtitle = descriptors[0].subtitle
    else:
        layout = MULTI_LAYOUT
        title = f"{count} cards"
        subtitle = resolved.subtitle_for(MULTI_LAYOUT)

    if theme != "default":
        icon = resolved.theme_icons.get(theme)
        badge = resolved.theme_badges.get(theme)
    else:
        icon = resolved.layout_icons.get(layout)
        badge = resolved.layout_badges.get(layout)
    icon = icon or resolved.layout_icons.get("default", "")

    columns: List[Node] = [
        {
            "type": "Column",
            "width": "auto",
            "verticalContentAlignment": "center",
            "items": [{"type": "TextBlock", "text": icon, "size": "extraLarge"}],
        },
        {
            "type": "Column",
            "width": "stretch",
            "items": [
                {
                    "type": "TextBlock",
                    "text": title,
                    "size": "large",
                    "weight": "bolder",
                    "wrap": True,
                },
                {
                    "type": "TextBlock",
                    "text": subtitle,
                    "isSubtle": True,
                    "wrap": True,
                    "spacing": "small",
                },
            ],
        },
    ]
    badge_column = _badge_column(badge, resolved.theme_colors.get(theme))
    if badge_column is not None:
        columns.append(badge_column)

    return {
        "type": CONTAINER_TYPE,
        "id": HERO_SENTINEL_ID,
        "style": resolved.theme_styles.get(theme, "emphasis"),
        "bleed": True,
        "items": [{"type": "ColumnSet", "columns": columns}],
    }


def _badge_column(badge: Optional[str], color: Optional[str]) -> Optional[Node]:
    if not badge:
        return None
    block: Dict[str, Any] = {
        "type": "TextBlock",
        "text": badge,
        "size": "small",
        "weight": "bolder",
    }
    if color:
        block["color"] = color
    return {
        "type": "Column",
        "width": "auto",
        "verticalContentAlignment": "center",
        "items": [block],
    }


__all__ = [
    "HERO_SENTINEL_ID",
    "aggregate_theme",
    "augment",
    "build_hero",
    "has_hero",
    "prepend_hero",
]
