"""Load presentation tables (keywords, fallbacks, styles, icons) from YAML."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml

from core.config import get_settings
from schemas.internal.presentation import PresentationTables

DEFAULT_PRESENTATION_TABLES = Path(__file__).resolve().parent / "presentation_tables.yaml"


def load_presentation_tables(path: Path | str | None = None) -> PresentationTables:
    """Load and validate presentation tables from YAML."""
    resolved = Path(path) if path else DEFAULT_PRESENTATION_TABLES
    if not resolved.exists():
        raise FileNotFoundError(f"Presentation tables not found: {resolved}")

    raw = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("Presentation tables must be a YAML mapping")

    return PresentationTables.model_validate(raw)


@lru_cache(maxsize=2)
def get_presentation_tables(path: str | None = None) -> PresentationTables:
    """Return cached tables; falls back to CARD_PRESENTATION_TABLES, then the bundled file."""
    configured = path or get_settings().card_presentation_tables
    resolved: Path | None = Path(configured) if configured else None
    return load_presentation_tables(resolved)


__all__ = [
    "DEFAULT_PRESENTATION_TABLES",
    "get_presentation_tables",
    "load_presentation_tables",
]
