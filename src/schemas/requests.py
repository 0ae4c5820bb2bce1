"""External request schemas for card augmentation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GenerationEnvelope(BaseModel):
    """Upstream generation output: raw card JSON plus a rendering snippet."""

    card_json: Any = Field(alias="cardJson")
    card_page: str = Field(alias="cardPage")
    notes: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="after")
    def _validate_fields(self) -> "GenerationEnvelope":
        if self.card_json in (None, "", [], {}):
            raise ValueError("Envelope is missing cardJson.")
        if not self.card_page.strip():
            raise ValueError("Envelope is missing cardPage.")
        return self


class AugmentOptions(BaseModel):
    """Per-run overrides. All fields are optional and validated."""

    max_depth: int | None = Field(default=None, ge=1)
    value_separator: str | None = Field(default=None, min_length=1)
    hero: bool | None = None
    presentation_tables: str | None = None

    model_config = ConfigDict(extra="forbid")


__all__ = ["AugmentOptions", "GenerationEnvelope"]
