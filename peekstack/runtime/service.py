"""Overlay service composition."""

from __future__ import annotations

from peekstack.api.host import ContentId, HostPort, WindowId
from peekstack.api.overlays import OverlayHandle, OverlayService
from peekstack.runtime.close_bridge import CloseEventBridge
from peekstack.runtime.close_watch import RuntimeCloseWatchRegistry
from peekstack.runtime.config import UiConfig, get_ui_config
from peekstack.runtime.popup import PopupLifecycleController, PopupRequest
from peekstack.runtime.stack import RuntimeStackRegistry


class RuntimeOverlayService(OverlayService):
    """Overlay stacks of one host session.

    Build one per host at startup and keep it for the whole session; it owns
    the stack registry and every close watch.
    """

    def __init__(self, host: HostPort, *, config: UiConfig | None = None) -> None:
        self._host = host
        self._config = config if config is not None else get_ui_config()
        self._close_watches = RuntimeCloseWatchRegistry()
        self._registry = RuntimeStackRegistry(self._close_watches)
        self._bridge = CloseEventBridge(host, self._registry, self._close_watches)
        self._controller = PopupLifecycleController(host, self._registry, self._bridge, self._config)

    @property
    def config(self) -> UiConfig:
        return self._config

    @property
    def registry(self) -> RuntimeStackRegistry:
        return self._registry

    @property
    def bridge(self) -> CloseEventBridge:
        return self._bridge

    @property
    def controller(self) -> PopupLifecycleController:
        return self._controller

    def current_root(self) -> WindowId:
        return self._registry.root_for(self._host.get_focus())

    def create_overlay(
        self,
        content_id: ContentId,
        line: int,
        column: int,
        title: str | None = None,
    ) -> OverlayHandle | None:
        item = self._controller.create(
            PopupRequest(content_id=content_id, line=line, column=column, title=title)
        )
        if item is None:
            return None
        return OverlayHandle(window_id=item.window_id, content_id=item.content_id)

    def close_all_overlays(
        self, root_window_id: WindowId | None = None, *, force: bool = False
    ) -> None:
        root = self.current_root() if root_window_id is None else root_window_id
        self._bridge.close_all(root, force=force)

    def current_stack_depth(self, root_window_id: WindowId | None = None) -> int:
        root = self.current_root() if root_window_id is None else root_window_id
        stack = self._registry.get(root)
        if stack is None:
            return 0
        return stack.size()
