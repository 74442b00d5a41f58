"""Close-callback registry keyed by overlay window."""

from __future__ import annotations

from dataclasses import dataclass

from peekstack.api.host import WindowId
from peekstack.api.stack import CloseGroup


@dataclass(frozen=True, slots=True)
class CloseWatch:
    """One pending one-shot close notification."""

    window_id: WindowId
    group: CloseGroup
    root_window_id: WindowId


class RuntimeCloseWatchRegistry:
    """Inspectable set of windows waiting for a close notification."""

    def __init__(self) -> None:
        self._next_group_id = 1
        self._watches: dict[WindowId, CloseWatch] = {}

    def allocate_group(self, label: str = "") -> CloseGroup:
        """Allocate a new subscription group token."""
        group = CloseGroup(id=self._next_group_id, label=label)
        self._next_group_id += 1
        return group

    def watch(self, window_id: WindowId, group: CloseGroup, root_window_id: WindowId) -> CloseWatch:
        """Watch a window, replacing any previous watch for the same window."""
        watch = CloseWatch(window_id=window_id, group=group, root_window_id=root_window_id)
        self._watches[window_id] = watch
        return watch

    def is_watched(self, window_id: WindowId) -> bool:
        return window_id in self._watches

    def take(self, window_id: WindowId) -> CloseWatch | None:
        """Remove and return a watch; ``None`` when the window is not watched."""
        return self._watches.pop(window_id, None)

    def release_group(self, group: CloseGroup) -> int:
        """Drop every watch of a group and return how many were dropped."""
        released = [window_id for window_id, watch in self._watches.items() if watch.group == group]
        for window_id in released:
            del self._watches[window_id]
        return len(released)

    def watched_windows(self, group: CloseGroup | None = None) -> tuple[WindowId, ...]:
        """Return watched windows, optionally limited to one group."""
        return tuple(
            window_id
            for window_id, watch in self._watches.items()
            if group is None or watch.group == group
        )


CloseWatchRegistry = RuntimeCloseWatchRegistry
