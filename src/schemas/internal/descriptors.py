"""Derived, read-only summaries of a card document."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

LayoutType = Literal["video", "audio", "media", "form", "text", "default"]
ThemeName = Literal["danger", "warning", "success", "info", "default"]

THEME_PRIORITY: tuple[ThemeName, ...] = ("danger", "warning", "success", "info")


class CardStats(BaseModel):
    """Aggregate content counts for one document."""

    element_count: int = Field(default=0, ge=0)
    action_count: int = Field(default=0, ge=0)
    input_count: int = Field(default=0, ge=0)
    text_count: int = Field(default=0, ge=0)
    image_count: int = Field(default=0, ge=0)
    column_set_count: int = Field(default=0, ge=0)
    video_count: int = Field(default=0, ge=0)
    audio_count: int = Field(default=0, ge=0)
    file_upload_count: int = Field(default=0, ge=0)
    has_media: bool = False
    has_file_upload: bool = False

    model_config = ConfigDict(
        extra="forbid", frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class CardDescriptor(BaseModel):
    """Layout, theme and headline summary of one document."""

    layout_type: LayoutType
    theme: ThemeName
    title: str
    subtitle: str
    index: int = Field(default=0, ge=0)
    stats: CardStats = Field(default_factory=CardStats)

    model_config = ConfigDict(
        extra="forbid", frozen=True, alias_generator=to_camel, populate_by_name=True
    )


__all__ = ["CardDescriptor", "CardStats", "LayoutType", "THEME_PRIORITY", "ThemeName"]
