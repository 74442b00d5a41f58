from __future__ import annotations

from dataclasses import dataclass

from peekstack.api.host import (
    CloseHandler,
    CursorPosition,
    OverlayWindowRequest,
    WindowGeometry,
    WindowRect,
)
from peekstack.runtime.config import UiConfig


@dataclass(slots=True)
class FakeWindow:
    rect: WindowRect
    content_id: int | None = None
    cursor: CursorPosition | None = None
    decoration_bar: bool = False
    request: OverlayWindowRequest | None = None


class FakeHost:
    """In-memory host recording every call the overlay core makes."""

    def __init__(self) -> None:
        self.windows: dict[int, FakeWindow] = {}
        self.valid_contents: set[int] = set()
        self.focus = 0
        self.calls: list[tuple[str, tuple]] = []
        self.close_calls: list[tuple[int, bool]] = []
        self.focus_calls: list[int] = []
        self.subscriptions: dict[int, CloseHandler] = {}
        self.suppressed = False
        self.suppress_calls = 0
        self.resume_calls = 0
        self.refuse_open = False
        self.geometry_mode = "complete"  # complete|none|partial|raise
        self.geometry_offset = (0.0, 0.0)
        self.close_window_on_center = False
        self._next_window_id = 1000

    def add_window(
        self,
        window_id: int,
        rect: WindowRect,
        *,
        cursor: CursorPosition | None = None,
        decoration_bar: bool = False,
        focus: bool = True,
    ) -> None:
        self.windows[window_id] = FakeWindow(rect=rect, cursor=cursor, decoration_bar=decoration_bar)
        if focus:
            self.focus = window_id

    def user_close(self, window_id: int) -> None:
        """Close a window the way a user would, firing notifications."""
        self.windows.pop(window_id, None)
        self._notify_closed(window_id)

    def drop_window(self, window_id: int) -> None:
        """Make a window disappear without any notification."""
        self.windows.pop(window_id, None)
        self.subscriptions.pop(window_id, None)

    def is_content_valid(self, content_id: int) -> bool:
        return content_id in self.valid_contents

    def open_overlay_window(self, content_id: int, request: OverlayWindowRequest) -> int | None:
        self.calls.append(("open_overlay_window", (content_id, request)))
        if self.refuse_open:
            return None
        window_id = self._next_window_id
        self._next_window_id += 1
        self.windows[window_id] = FakeWindow(
            rect=WindowRect(row=request.row, col=request.col, width=request.width, height=request.height),
            content_id=content_id,
            request=request,
        )
        if request.enter:
            self.focus = window_id
        return window_id

    def get_window_geometry(self, window_id: int) -> WindowGeometry | None:
        if self.geometry_mode == "none":
            return None
        if self.geometry_mode == "raise":
            raise RuntimeError("geometry unavailable")
        window = self.windows.get(window_id)
        if window is None:
            return None
        if self.geometry_mode == "partial":
            return WindowGeometry(width=window.rect.width, height=window.rect.height)
        row_offset, col_offset = self.geometry_offset
        return WindowGeometry(
            width=window.rect.width,
            height=window.rect.height,
            row=window.rect.row + row_offset,
            col=window.rect.col + col_offset,
        )

    def close_window(self, window_id: int, force: bool) -> None:
        self.close_calls.append((window_id, force))
        if window_id not in self.windows:
            raise RuntimeError(f"Invalid window id: {window_id}")
        del self.windows[window_id]
        self._notify_closed(window_id)

    def is_window_valid(self, window_id: int) -> bool:
        return window_id in self.windows

    def get_cursor_screen_position(self, window_id: int) -> CursorPosition | None:
        window = self.windows.get(window_id)
        return None if window is None else window.cursor

    def get_window_rect(self, window_id: int) -> WindowRect | None:
        window = self.windows.get(window_id)
        return None if window is None else window.rect

    def has_decoration_bar(self, window_id: int) -> bool:
        window = self.windows.get(window_id)
        return window is not None and window.decoration_bar

    def set_cursor(self, window_id: int, line: int, column: int) -> None:
        self.calls.append(("set_cursor", (window_id, line, column)))

    def center_view(self, window_id: int) -> None:
        self.calls.append(("center_view", (window_id,)))
        if self.close_window_on_center:
            self.windows.pop(window_id, None)

    def subscribe_close(self, window_id: int, on_close: CloseHandler) -> None:
        self.subscriptions[window_id] = on_close

    def suppress_close_notifications(self) -> None:
        self.suppressed = True
        self.suppress_calls += 1

    def resume_close_notifications(self) -> None:
        self.suppressed = False
        self.resume_calls += 1

    def set_focus(self, window_id: int) -> None:
        self.focus_calls.append(window_id)
        if window_id not in self.windows:
            raise RuntimeError(f"Invalid window id: {window_id}")
        self.focus = window_id

    def get_focus(self) -> int:
        return self.focus

    def _notify_closed(self, window_id: int) -> None:
        handler = self.subscriptions.pop(window_id, None)
        if handler is None or self.suppressed:
            return
        handler(window_id)


ROOT_WINDOW_ID = 1


def make_host(
    *,
    height: int = 40,
    width: int = 120,
    cursor_row: int = 5,
    cursor_col: int = 10,
    contents: tuple[int, ...] = (7, 8, 9),
) -> FakeHost:
    host = FakeHost()
    host.valid_contents.update(contents)
    host.add_window(
        ROOT_WINDOW_ID,
        WindowRect(row=0, col=0, width=width, height=height),
        cursor=CursorPosition(row=cursor_row, col=cursor_col),
    )
    return host


def make_config(**overrides: object) -> UiConfig:
    values: dict[str, object] = {
        "border": "rounded",
        "size_ratio": 0.5,
        "min_width": 20,
        "min_height": 10,
        "row_offset": 1,
        "col_offset": 2,
        "stack_row_offset": 1,
        "stack_col_offset": 2,
        "width_decrement": 4,
        "height_decrement": 2,
        "z_index_base": 30,
    }
    values.update(overrides)
    return UiConfig(**values)  # type: ignore[arg-type]
