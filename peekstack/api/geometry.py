"""Overlay geometry value types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from peekstack.api.host import CursorPosition, WindowId, WindowRect
from peekstack.api.stack import StackItem

GeometrySource = Literal["calculated", "authoritative", "calculated_fallback"]


@dataclass(frozen=True, slots=True)
class PopupGeometry:
    """Overlay rectangle relative to ``anchor_window_id`` plus provenance."""

    width: int
    height: int
    row: int
    col: int
    z_index: int
    anchor_window_id: WindowId
    source: GeometrySource = "calculated"

    def with_source(self, source: GeometrySource) -> PopupGeometry:
        return replace(self, source=source)


@dataclass(frozen=True, slots=True)
class RootSizing:
    """Sizing rules for the first overlay of a stack."""

    size_ratio: float
    min_width: int
    min_height: int
    row_offset: int
    col_offset: int
    border_enabled: bool
    z_index_base: int


@dataclass(frozen=True, slots=True)
class StackedSizing:
    """Sizing rules for overlays opened from another overlay."""

    width_decrement: int
    height_decrement: int
    stack_row_offset: int
    stack_col_offset: int
    min_width: int
    min_height: int
    z_index_base: int


@dataclass(frozen=True, slots=True)
class RootPlacement:
    """Live host measurements for root-level placement."""

    anchor_window_id: WindowId
    anchor: WindowRect
    cursor: CursorPosition
    decoration_bar: bool = False


@dataclass(frozen=True, slots=True)
class StackedPlacement:
    """Parent overlay data for stacked placement."""

    parent: StackItem
    depth: int
    parent_decoration_bar: bool = False


__all__ = [
    "GeometrySource",
    "PopupGeometry",
    "RootPlacement",
    "RootSizing",
    "StackedPlacement",
    "StackedSizing",
]
