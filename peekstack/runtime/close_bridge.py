"""Host close notifications to stack bookkeeping."""

from __future__ import annotations

import logging

from peekstack.api.host import HostPort, WindowId
from peekstack.api.stack import OverlayStack, StackItem, StackRegistry
from peekstack.runtime.close_watch import RuntimeCloseWatchRegistry
from peekstack.runtime.errors import RECOVERABLE_HOST_ERRORS, log_recoverable

logger = logging.getLogger(__name__)


class CloseEventBridge:
    """Keeps stacks in sync with overlay windows closed by the host or the user.

    Notifications may arrive late, twice, or in any order relative to
    creation; removing a window that is no longer tracked is a no-op.
    """

    def __init__(
        self,
        host: HostPort,
        registry: StackRegistry,
        close_watches: RuntimeCloseWatchRegistry,
    ) -> None:
        self._host = host
        self._registry = registry
        self._close_watches = close_watches

    def watch(self, item: StackItem, stack: OverlayStack) -> None:
        """Subscribe once to the close of an overlay pushed onto ``stack``."""
        self._close_watches.watch(item.window_id, stack.close_group, stack.root_window_id)
        self._host.subscribe_close(item.window_id, self.dispatch_close)

    def is_watched(self, window_id: WindowId) -> bool:
        return self._close_watches.is_watched(window_id)

    def forget(self, window_id: WindowId) -> None:
        """Drop the watch of an overlay that vanished without a close notification."""
        self._close_watches.take(window_id)

    def dispatch_close(self, window_id: WindowId) -> None:
        """Host-facing close callback."""
        if self._close_watches.take(window_id) is None:
            logger.debug("close notification ignored for unwatched window=%s", window_id)
            return
        self.on_close(window_id)

    def on_close(self, window_id: WindowId) -> bool:
        """Remove a closed overlay from whichever stack holds it."""
        self._close_watches.take(window_id)
        stack = self._registry.find_stack(window_id)
        if stack is None:
            return False
        removed = stack.remove(window_id)
        logger.debug(
            "overlay closed window=%s root=%s depth=%s",
            window_id,
            stack.root_window_id,
            stack.size(),
        )
        return removed

    def close_all(self, root_window_id: WindowId, *, force: bool = False) -> int:
        """Close every overlay of a root window, top first.

        Close notifications are suppressed for the duration. Focus returns to
        the root window even when there was nothing to close. Returns the
        number of close requests issued.
        """
        stack = self._registry.get(root_window_id)
        closed = 0
        if stack is not None and not stack.empty():
            self._host.suppress_close_notifications()
            try:
                top = stack.top()
                while top is not None:
                    self._close_window(top.window_id, force)
                    closed += 1
                    stack.pop()
                    top = stack.top()
            finally:
                self._host.resume_close_notifications()
        self._restore_focus(root_window_id)
        if stack is not None:
            released = self._close_watches.release_group(stack.close_group)
            logger.debug(
                "closed overlays root=%s closed=%s released_watches=%s",
                root_window_id,
                closed,
                released,
                extra={"root_window": root_window_id},
            )
        return closed

    def _close_window(self, window_id: WindowId, force: bool) -> None:
        try:
            self._host.close_window(window_id, force)
        except RECOVERABLE_HOST_ERRORS:
            log_recoverable(logger, "overlay close failed window=%s", window_id)

    def _restore_focus(self, window_id: WindowId) -> None:
        try:
            self._host.set_focus(window_id)
        except RECOVERABLE_HOST_ERRORS:
            log_recoverable(logger, "focus restore failed window=%s", window_id)
