"""Public overlay stack API contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from peekstack.api.host import ContentId, WindowId

type WindowValidity = Callable[[WindowId], bool]


@dataclass(frozen=True, slots=True)
class StackItem:
    """One live overlay.

    Only the bottom-most overlay of a stack carries ``root_window_id``;
    stacked overlays are anchored to their parent overlay instead.
    """

    window_id: WindowId
    content_id: ContentId
    z_index: int
    width: int
    height: int
    row: int
    col: int
    root_window_id: WindowId | None = None


@dataclass(frozen=True, slots=True)
class CloseGroup:
    """Opaque close-subscription group token."""

    id: int
    label: str = ""


class OverlayStack(ABC):
    """Per-root-window overlay stack contract."""

    @property
    @abstractmethod
    def root_window_id(self) -> WindowId:
        """Return the root window this stack belongs to."""

    @property
    @abstractmethod
    def close_group(self) -> CloseGroup:
        """Return the close-subscription group of this stack."""

    @abstractmethod
    def size(self) -> int:
        """Return number of live items."""

    @abstractmethod
    def empty(self) -> bool:
        """Return whether the stack has no items."""

    @abstractmethod
    def top(self) -> StackItem | None:
        """Return most recent item."""

    @abstractmethod
    def push(self, item: StackItem) -> None:
        """Append a new top item."""

    @abstractmethod
    def pop(self) -> StackItem | None:
        """Remove top item if present."""

    @abstractmethod
    def remove(self, window_id: WindowId) -> bool:
        """Remove item by window, scanning top-down."""

    @abstractmethod
    def prune_invalid(self, is_valid: WindowValidity) -> tuple[StackItem, ...]:
        """Pop invalid top items until a valid top or empty."""

    @abstractmethod
    def clear(self) -> None:
        """Drop all items without closing windows."""

    @abstractmethod
    def contains(self, window_id: WindowId) -> bool:
        """Return whether a window is tracked."""

    @abstractmethod
    def items(self) -> tuple[StackItem, ...]:
        """Return bottom-to-top snapshot."""


class StackRegistry(ABC):
    """Process-scoped root-window to stack mapping."""

    @abstractmethod
    def get_or_create(self, root_window_id: WindowId) -> OverlayStack:
        """Return stack for a root window, creating it on first access."""

    @abstractmethod
    def get(self, root_window_id: WindowId) -> OverlayStack | None:
        """Return stack for a root window if one exists."""

    @abstractmethod
    def root_for(self, window_id: WindowId) -> WindowId:
        """Resolve the root window for a focused window."""

    @abstractmethod
    def find_stack(self, window_id: WindowId) -> OverlayStack | None:
        """Return the stack holding an overlay window."""

    @abstractmethod
    def stacks(self) -> tuple[OverlayStack, ...]:
        """Return all known stacks."""


__all__ = [
    "CloseGroup",
    "OverlayStack",
    "StackItem",
    "StackRegistry",
    "WindowValidity",
]
