"""Internal schema definitions."""

from .cards import CARD_KIND, CardDocument, Node  # noqa: F401
from .descriptors import (  # noqa: F401
    THEME_PRIORITY,
    CardDescriptor,
    CardStats,
    LayoutType,
    ThemeName,
)
from .geometry import CoordinateRecord, Rectangle  # noqa: F401
from .presentation import PresentationTables  # noqa: F401

__all__ = [
    "CARD_KIND",
    "CardDescriptor",
    "CardDocument",
    "CardStats",
    "CoordinateRecord",
    "LayoutType",
    "Node",
    "PresentationTables",
    "Rectangle",
    "THEME_PRIORITY",
    "ThemeName",
]
