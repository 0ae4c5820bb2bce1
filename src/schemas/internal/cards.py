"""Canonical card document contract."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from core.config import DEFAULT_CARD_VERSION, DEFAULT_SCHEMA_URI

CARD_KIND = "AdaptiveCard"

Node = Dict[str, Any]

# Wire names of optional top-level fields dropped from payloads when unset.
_OPTIONAL_PAYLOAD_KEYS = (
    "id",
    "style",
    "backgroundImage",
    "verticalContentAlignment",
    "minHeight",
    "selectAction",
)


class CardDocument(BaseModel):
    """A normalized card: typed header plus content/action node lists.

    Nodes stay plain JSON mappings. Unknown top-level fields (``title``,
    ``summary``, ``bleed`` ...) are kept as extras so they survive re-emission.
    """

    schema_uri: str = Field(default=DEFAULT_SCHEMA_URI, alias="$schema")
    kind: str = Field(default=CARD_KIND, alias="type")
    version: str = DEFAULT_CARD_VERSION
    content: List[Any] = Field(default_factory=list)
    actions: List[Any] = Field(default_factory=list)

    id: Optional[Any] = None
    style: Optional[Any] = None
    background_image: Optional[Any] = Field(default=None, alias="backgroundImage")
    vertical_alignment: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices(
            "verticalContentAlignment", "verticalAlignment", "vertical_alignment"
        ),
        serialization_alias="verticalContentAlignment",
    )
    min_height: Optional[Any] = Field(default=None, alias="minHeight")
    select_action: Optional[Any] = Field(default=None, alias="selectAction")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def extra_field(self, name: str) -> Any:
        """Return an unmodelled top-level field, or None."""
        extras = self.model_extra or {}
        return extras.get(name)

    def to_payload(self) -> Dict[str, Any]:
        """Dump with wire names, omitting unset optional header fields."""
        payload = self.model_dump(by_alias=True)
        for key in _OPTIONAL_PAYLOAD_KEYS:
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload


__all__ = ["CARD_KIND", "CardDocument", "Node"]
