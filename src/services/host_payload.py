"""Build the host chat application's card payload from raw card JSON."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Sequence

from cards.augment import MULTI_LAYOUT, augment
from cards.presentation import get_presentation_tables
from core.config import Settings
from schemas.internal.descriptors import CardDescriptor, CardStats
from schemas.internal.presentation import PresentationTables
from schemas.requests import AugmentOptions
from schemas.responses import (
    HostCardEntry,
    HostCardPayload,
    HostLayout,
    HostMetadata,
)

DEFAULT_CARD_ID = "generatedAdaptiveCard"


def build_host_payload(
    raw: Any,
    *,
    generated_at: datetime | None = None,
    options: AugmentOptions | None = None,
    tables: PresentationTables | None = None,
    settings: Settings | None = None,
) -> HostCardPayload:
    """Augment ``raw`` and wrap it in the host's ``adaptiveCardObject`` envelope."""
    resolved_tables = tables or get_presentation_tables(
        options.presentation_tables if options else None
    )
    result = augment(raw, options=options, tables=resolved_tables, settings=settings)
    document = result.document
    descriptors = result.descriptors

    if len(descriptors) == 1:
        title = descriptors[0].title
        subtitle = descriptors[0].subtitle
        layout_type = descriptors[0].layout_type
    else:
        title = f"{len(descriptors)} cards"
        subtitle = resolved_tables.subtitle_for(MULTI_LAYOUT)
        layout_type = MULTI_LAYOUT

    metadata = HostMetadata(
        title=title,
        subtitle=subtitle,
        layout_type=layout_type,
        stats=merge_stats(descriptors),
        version=document.version,
        schema_uri=document.schema_uri,
        generated_at=_timestamp(generated_at),
    )
    layout = HostLayout(column_title=title, descriptor_layout_type=layout_type)
    card_id = document.id if isinstance(document.id, str) and document.id else DEFAULT_CARD_ID

    entry = HostCardEntry(
        id=card_id,
        layout=layout,
        defaultdata=dict(result.input_defaults),
        adaptive_card_schema=document.to_payload(),
        metadata=metadata,
    )
    return HostCardPayload(
        adaptive_card_object=[entry],
        adaptive_card_data_object=result.input_pairs(),
        adaptive_answer_meta_data=metadata,
    )


def merge_stats(descriptors: Sequence[CardDescriptor]) -> CardStats:
    """Sum per-document counts; flags are true if any document sets them."""
    totals: Dict[str, Any] = {}
    for descriptor in descriptors:
        for name, value in descriptor.stats.model_dump().items():
            if isinstance(value, bool):
                totals[name] = totals.get(name, False) or value
            else:
                totals[name] = totals.get(name, 0) + value
    return CardStats.model_validate(totals)


def _timestamp(value: datetime | None) -> str:
    moment = value or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


__all__ = ["DEFAULT_CARD_ID", "build_host_payload", "merge_stats"]
