"""Application-facing overlay service contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from peekstack.api.host import ContentId, HostPort, WindowId

if TYPE_CHECKING:
    from peekstack.runtime.config import UiConfig


@dataclass(frozen=True, slots=True)
class OverlayHandle:
    """Created overlay as seen by callers."""

    window_id: WindowId
    content_id: ContentId


class OverlayService(Protocol):
    """Peek overlay stack operations exposed to application logic."""

    def current_root(self) -> WindowId:
        """Return the root window for the focused window."""

    def create_overlay(
        self,
        content_id: ContentId,
        line: int,
        column: int,
        title: str | None = None,
    ) -> OverlayHandle | None:
        """Open an overlay previewing content at a location."""

    def close_all_overlays(
        self, root_window_id: WindowId | None = None, *, force: bool = False
    ) -> None:
        """Close every overlay of a root window and refocus the root."""

    def current_stack_depth(self, root_window_id: WindowId | None = None) -> int:
        """Return number of open overlays for a root window."""


def create_overlay_service(host: HostPort, *, config: UiConfig | None = None) -> OverlayService:
    """Create default overlay service implementation."""
    from peekstack.runtime.service import RuntimeOverlayService

    return RuntimeOverlayService(host, config=config)
