"""Per-root-window overlay stacks."""

from __future__ import annotations

from peekstack.api.host import WindowId
from peekstack.api.stack import (
    CloseGroup,
    OverlayStack,
    StackItem,
    StackRegistry,
    WindowValidity,
)
from peekstack.runtime.close_watch import RuntimeCloseWatchRegistry


class RuntimeOverlayStack(OverlayStack):
    """Ordered overlays of one root window, bottom first."""

    def __init__(self, root_window_id: WindowId, close_group: CloseGroup) -> None:
        self._root_window_id = root_window_id
        self._close_group = close_group
        self._items: list[StackItem] = []

    @property
    def root_window_id(self) -> WindowId:
        return self._root_window_id

    @property
    def close_group(self) -> CloseGroup:
        return self._close_group

    def size(self) -> int:
        """Return number of overlays."""
        return len(self._items)

    def empty(self) -> bool:
        """Return whether no overlay is open."""
        return not self._items

    def top(self) -> StackItem | None:
        """Return topmost overlay."""
        if not self._items:
            return None
        return self._items[-1]

    def push(self, item: StackItem) -> None:
        """Push an overlay above the current top."""
        self._items.append(item)

    def pop(self) -> StackItem | None:
        """Pop topmost overlay."""
        if not self._items:
            return None
        return self._items.pop()

    def remove(self, window_id: WindowId) -> bool:
        """Remove an overlay at any depth; false when it is not held."""
        for index in range(len(self._items) - 1, -1, -1):
            if self._items[index].window_id == window_id:
                del self._items[index]
                return True
        return False

    def prune_invalid(self, is_valid: WindowValidity) -> tuple[StackItem, ...]:
        """Pop invalid overlays off the top until a valid one is reached."""
        pruned: list[StackItem] = []
        while self._items:
            if is_valid(self._items[-1].window_id):
                break
            pruned.append(self._items.pop())
        return tuple(pruned)

    def clear(self) -> None:
        """Remove all overlays."""
        self._items.clear()

    def contains(self, window_id: WindowId) -> bool:
        """Return whether the stack holds a window."""
        return any(item.window_id == window_id for item in self._items)

    def items(self) -> tuple[StackItem, ...]:
        """Return bottom-first overlay snapshot."""
        return tuple(self._items)


class RuntimeStackRegistry(StackRegistry):
    """Process-scoped root-window to stack mapping.

    Created once per host session and kept for its whole lifetime. Stacks are
    never dropped; an emptied stack is reused by later overlays on the same
    root window.
    """

    def __init__(self, close_watches: RuntimeCloseWatchRegistry) -> None:
        self._close_watches = close_watches
        self._stacks: dict[WindowId, RuntimeOverlayStack] = {}

    def get_or_create(self, root_window_id: WindowId) -> RuntimeOverlayStack:
        stack = self._stacks.get(root_window_id)
        if stack is None:
            group = self._close_watches.allocate_group(f"overlay-close:{root_window_id}")
            stack = RuntimeOverlayStack(root_window_id, group)
            self._stacks[root_window_id] = stack
        return stack

    def get(self, root_window_id: WindowId) -> RuntimeOverlayStack | None:
        return self._stacks.get(root_window_id)

    def root_for(self, window_id: WindowId) -> WindowId:
        stack = self.find_stack(window_id)
        if stack is None:
            return window_id
        return stack.root_window_id

    def find_stack(self, window_id: WindowId) -> RuntimeOverlayStack | None:
        for stack in self._stacks.values():
            if stack.contains(window_id):
                return stack
        return None

    def stacks(self) -> tuple[RuntimeOverlayStack, ...]:
        return tuple(self._stacks.values())
