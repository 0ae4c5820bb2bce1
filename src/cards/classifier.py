"""Heuristic layout/theme classification and headline extraction.

The results are presentation hints only. Layout priority is fixed:
video > audio > media > form > text > default.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Sequence

from schemas.internal.cards import CardDocument, Node
from schemas.internal.descriptors import (
    THEME_PRIORITY,
    CardDescriptor,
    CardStats,
    LayoutType,
    ThemeName,
)
from schemas.internal.presentation import PresentationTables

from .presentation import get_presentation_tables
from .traversal import DEFAULT_MAX_DEPTH, flatten, node_type

TEXT_TYPES = frozenset({"TextBlock", "RichTextBlock"})
MEDIA_TYPE = "Media"
IMAGE_TYPE = "Image"
COLUMN_SET_TYPE = "ColumnSet"
INPUT_PREFIX = "Input."
FILE_INPUT_TYPE = "Input.File"
TITLE_SIZES = frozenset({"extralarge", "large"})
TITLE_WEIGHT = "bolder"


def classify(
    document: CardDocument,
    *,
    index: int = 0,
    tables: PresentationTables | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> CardDescriptor:
    """Summarize one document. ``index`` is its position among siblings."""
    resolved = tables or get_presentation_tables()
    elements = flatten(document.content, max_depth=max_depth)
    layout = detect_layout(elements)
    return CardDescriptor(
        layout_type=layout,
        theme=detect_theme(document, elements, index=index, tables=resolved),
        title=extract_title(document, elements, tables=resolved),
        subtitle=extract_subtitle(document, elements, layout, tables=resolved),
        index=index,
        stats=collect_stats(document, elements),
    )


def detect_layout(elements: Sequence[Node]) -> LayoutType:
    media = [el for el in elements if node_type(el) == MEDIA_TYPE]
    mime_types = [mime for el in media for mime in _mime_types(el)]

    if any(mime.startswith("video") for mime in mime_types):
        return "video"
    if any(mime.startswith("audio") for mime in mime_types):
        return "audio"
    if media:
        return "media"
    if any(node_type(el).startswith(INPUT_PREFIX) for el in elements):
        return "form"
    if elements and all(node_type(el) in TEXT_TYPES for el in elements):
        return "text"
    return "default"


def detect_theme(
    document: CardDocument,
    elements: Sequence[Node],
    *,
    index: int = 0,
    tables: PresentationTables | None = None,
) -> ThemeName:
    """First keyword set (danger, warning, success, info) found in the card text wins."""
    resolved = tables or get_presentation_tables()
    corpus = _theme_corpus(document, elements, resolved.text_fields)
    if corpus:
        for theme in THEME_PRIORITY:
            keywords = resolved.theme_keywords.get(theme, [])
            if any(keyword.lower() in corpus for keyword in keywords if keyword):
                return theme
    return "info" if index % 2 == 0 else "default"


def extract_title(
    document: CardDocument,
    elements: Sequence[Node],
    *,
    tables: PresentationTables | None = None,
) -> str:
    explicit = _clean(document.extra_field("title"))
    if explicit:
        return explicit

    text_nodes = _text_nodes(elements)
    for node in text_nodes:
        size = str(node.get("size") or "").lower()
        weight = str(node.get("weight") or "").lower()
        if size in TITLE_SIZES or weight == TITLE_WEIGHT:
            return node_text(node)
    if text_nodes:
        return node_text(text_nodes[0])

    resolved = tables or get_presentation_tables()
    return resolved.fallback_title


def extract_subtitle(
    document: CardDocument,
    elements: Sequence[Node],
    layout: str,
    *,
    tables: PresentationTables | None = None,
) -> str:
    for field in ("subtitle", "summary"):
        explicit = _clean(document.extra_field(field))
        if explicit:
            return explicit

    text_nodes = _text_nodes(elements)
    if len(text_nodes) > 1:
        return node_text(text_nodes[1])

    resolved = tables or get_presentation_tables()
    return resolved.subtitle_for(layout)


def collect_stats(document: CardDocument, elements: Sequence[Node]) -> CardStats:
    types = [node_type(el) for el in elements]
    media = [el for el in elements if node_type(el) == MEDIA_TYPE]

    video_count = 0
    audio_count = 0
    for el in media:
        for mime in _mime_types(el):
            if mime.startswith("video"):
                video_count += 1
            elif mime.startswith("audio"):
                audio_count += 1

    file_upload_count = types.count(FILE_INPUT_TYPE)
    return CardStats(
        element_count=len(elements),
        action_count=len(document.actions),
        input_count=sum(1 for kind in types if kind.startswith(INPUT_PREFIX)),
        text_count=sum(1 for kind in types if kind in TEXT_TYPES),
        image_count=types.count(IMAGE_TYPE),
        column_set_count=types.count(COLUMN_SET_TYPE),
        video_count=video_count,
        audio_count=audio_count,
        file_upload_count=file_upload_count,
        has_media=bool(media),
        has_file_upload=file_upload_count > 0,
    )


def node_text(node: Mapping[str, Any]) -> str:
    """Visible text of a TextBlock, or the joined inline runs of a RichTextBlock."""
    text = _clean(node.get("text"))
    if text:
        return text
    inlines = node.get("inlines")
    if not isinstance(inlines, list):
        return ""
    parts: List[str] = []
    for inline in inlines:
        if isinstance(inline, str):
            parts.append(inline.strip())
        elif isinstance(inline, Mapping):
            parts.append(_clean(inline.get("text")))
    return " ".join(part for part in parts if part)


def _text_nodes(elements: Sequence[Node]) -> List[Node]:
    return [el for el in elements if node_type(el) in TEXT_TYPES and node_text(el)]


def _mime_types(node: Mapping[str, Any]) -> Iterator[str]:
    sources = node.get("sources")
    if not isinstance(sources, list):
        return
    for source in sources:
        if not isinstance(source, Mapping):
            continue
        mime = source.get("mimeType")
        if isinstance(mime, str):
            yield mime.strip().lower()


def _theme_corpus(
    document: CardDocument, elements: Sequence[Node], text_fields: Sequence[str]
) -> str:
    parts: List[str] = [_clean(document.extra_field(field)) for field in text_fields]
    for el in elements:
        parts.append(node_text(el))
        parts.extend(_clean(el.get(field)) for field in text_fields)
    return " ".join(part for part in parts if part).lower()


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


__all__ = [
    "classify",
    "collect_stats",
    "detect_layout",
    "detect_theme",
    "extract_subtitle",
    "extract_title",
    "node_text",
]
