"""External response schemas for card augmentation."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from schemas.internal.cards import CardDocument
from schemas.internal.descriptors import CardDescriptor, CardStats
from schemas.internal.geometry import CoordinateRecord


class AugmentResult(BaseModel):
    document: CardDocument
    descriptors: List[CardDescriptor]
    input_defaults: Dict[str, Any] = Field(default_factory=dict)
    coordinates: List[CoordinateRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def input_pairs(self) -> List[Dict[str, Any]]:
        return [{"key": key, "value": value} for key, value in self.input_defaults.items()]

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready view using the camelCase names consumers expect."""
        return {
            "document": self.document.to_payload(),
            "descriptors": [item.model_dump(by_alias=True) for item in self.descriptors],
            "inputDefaults": dict(self.input_defaults),
            "coordinateRecords": [
                record.model_dump(by_alias=True) for record in self.coordinates
            ],
        }


class _HostModel(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class HostLayout(_HostModel):
    column_title: str
    is_popup_view: bool = False
    is_column_title_visible: bool = True
    descriptor_layout_type: str


class HostMetadata(_HostModel):
    title: str
    subtitle: str
    layout_type: str
    stats: CardStats
    version: str
    schema_uri: str = Field(alias="schema")
    generated_at: str


class HostCardEntry(_HostModel):
    id: str
    layout: HostLayout
    defaultdata: Dict[str, Any] = Field(default_factory=dict)
    adaptive_card_schema: Dict[str, Any]
    metadata: HostMetadata


class HostCardPayload(_HostModel):
    """Envelope consumed by the host chat application's card widget."""

    adaptive_card_object: List[HostCardEntry]
    adaptive_card_data_object: List[Dict[str, Any]] = Field(default_factory=list)
    adaptive_answer_meta_data: HostMetadata = Field(alias="AdaptiveAnswerMetaData")


__all__ = [
    "AugmentResult",
    "HostCardEntry",
    "HostCardPayload",
    "HostLayout",
    "HostMetadata",
]
