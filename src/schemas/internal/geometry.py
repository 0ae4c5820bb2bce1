"""Spatial contracts for node coordinate hints."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class Rectangle(BaseModel):
    """Axis-aligned box; members are finite numbers or None."""

    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None

    model_config = ConfigDict(extra="forbid")


class CoordinateRecord(BaseModel):
    """A normalized spatial hint located in the card tree."""

    id: Optional[str] = None
    type: str
    path: str
    rectangle: Rectangle
    raw_source: Any = None

    model_config = ConfigDict(extra="forbid")


__all__ = ["CoordinateRecord", "Rectangle"]
