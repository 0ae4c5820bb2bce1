"""Presentation lookup tables used by classification and hero synthesis."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .descriptors import THEME_PRIORITY


class PresentationTables(BaseModel):
    """Static keyword, fallback, style and icon tables.

    Keys of the theme tables are theme names; keys of the layout tables are
    layout types plus ``multi`` for composed documents.
    """

    version: str
    theme_keywords: Dict[str, List[str]]
    text_fields: List[str] = Field(
        default_factory=lambda: [
            "title",
            "subtitle",
            "summary",
            "status",
            "severity",
            "priority",
        ]
    )
    fallback_title: str = "Generated Adaptive Card"
    subtitle_fallbacks: Dict[str, str]
    alternating_styles: List[str] = Field(
        default_factory=lambda: ["default", "emphasis"], min_length=1
    )
    theme_styles: Dict[str, str] = Field(default_factory=dict)
    theme_icons: Dict[str, str] = Field(default_factory=dict)
    layout_icons: Dict[str, str] = Field(default_factory=dict)
    theme_badges: Dict[str, str] = Field(default_factory=dict)
    layout_badges: Dict[str, Optional[str]] = Field(default_factory=dict)
    theme_colors: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _validate_tables(self) -> "PresentationTables":
        missing = [theme for theme in THEME_PRIORITY if theme not in self.theme_keywords]
        if missing:
            raise ValueError(f"Missing theme keywords: {missing}")
        if "default" not in self.subtitle_fallbacks:
            raise ValueError("subtitle_fallbacks must define 'default'")
        return self

    def subtitle_for(self, layout: str) -> str:
        return self.subtitle_fallbacks.get(layout) or self.subtitle_fallbacks["default"]

    def section_style(self, index: int, theme: str | None = None) -> str:
        """Theme style when one is mapped, else the alternating style."""
        if theme and theme in self.theme_styles:
            return self.theme_styles[theme]
        return self.alternating_styles[index % len(self.alternating_styles)]


__all__ = ["PresentationTables"]
