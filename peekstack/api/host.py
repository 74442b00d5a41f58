"""Host editor window contracts."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

type WindowId = int
type ContentId = int
type CloseHandler = Callable[[WindowId], None]


@dataclass(frozen=True, slots=True)
class WindowRect:
    """Window position and size on the host screen grid (0-based cells)."""

    row: int
    col: int
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class CursorPosition:
    """Cursor position on the host screen grid (0-based cells)."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class WindowGeometry:
    """Geometry read back from the host after window creation.

    Any field may be ``None`` when the host cannot report it. Row and column
    may be fractional for floating windows.
    """

    width: int | None = None
    height: int | None = None
    row: float | None = None
    col: float | None = None

    def is_complete(self) -> bool:
        return None not in (self.width, self.height, self.row, self.col)

    def floored(self) -> tuple[int, int, int, int]:
        """Return ``(width, height, row, col)`` with positions floored to cells."""
        width, height, row, col = self.width, self.height, self.row, self.col
        if width is None or height is None or row is None or col is None:
            raise ValueError("incomplete window geometry")
        return int(width), int(height), math.floor(row), math.floor(col)


@dataclass(frozen=True, slots=True)
class OverlayWindowRequest:
    """Floating window materialization request.

    ``row``/``col`` are relative to ``anchor_window_id``.
    """

    anchor_window_id: WindowId
    width: int
    height: int
    row: int
    col: int
    z_index: int
    border: str
    title: str
    title_pos: str = "center"
    focusable: bool = True
    enter: bool = True


class HostPort(Protocol):
    """Host editor primitives consumed by the overlay core."""

    def is_content_valid(self, content_id: ContentId) -> bool:
        """Return whether content can be shown in a window."""

    def open_overlay_window(
        self, content_id: ContentId, request: OverlayWindowRequest
    ) -> WindowId | None:
        """Open and focus a floating window; ``None`` when the host refuses."""

    def get_window_geometry(self, window_id: WindowId) -> WindowGeometry | None:
        """Return authoritative window geometry when available."""

    def close_window(self, window_id: WindowId, force: bool) -> None:
        """Close one window."""

    def is_window_valid(self, window_id: WindowId) -> bool:
        """Return whether a window still exists."""

    def get_cursor_screen_position(self, window_id: WindowId) -> CursorPosition | None:
        """Return cursor position of a window in screen coordinates."""

    def get_window_rect(self, window_id: WindowId) -> WindowRect | None:
        """Return screen rectangle of a window."""

    def has_decoration_bar(self, window_id: WindowId) -> bool:
        """Return whether a window shows a status/decoration row."""

    def set_cursor(self, window_id: WindowId, line: int, column: int) -> None:
        """Move cursor to 1-based line and 0-based column."""

    def center_view(self, window_id: WindowId) -> None:
        """Scroll a window so the cursor line is centered."""

    def subscribe_close(self, window_id: WindowId, on_close: CloseHandler) -> None:
        """Register a one-shot close notification for a window."""

    def suppress_close_notifications(self) -> None:
        """Stop delivering close notifications."""

    def resume_close_notifications(self) -> None:
        """Resume delivering close notifications."""

    def set_focus(self, window_id: WindowId) -> None:
        """Focus a window."""

    def get_focus(self) -> WindowId:
        """Return the focused window."""


__all__ = [
    "CloseHandler",
    "ContentId",
    "CursorPosition",
    "HostPort",
    "OverlayWindowRequest",
    "WindowGeometry",
    "WindowId",
    "WindowRect",
]
