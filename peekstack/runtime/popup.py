"""Overlay construction lifecycle.

One ``create`` call walks a linear phase table::

    init -> geometry_determined -> opened -> configured -> validated -> ready

Any phase may move to ``failed``. Each phase hands a value to the next one,
so a registered overlay always has final geometry. Stacks are mutated only
in the ``ready`` step; a failure after the window exists closes it and gives
focus back to the window that had it before.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from peekstack.api.flow import FlowTransition
from peekstack.api.geometry import (
    GeometrySource,
    PopupGeometry,
    RootPlacement,
    StackedPlacement,
)
from peekstack.api.host import ContentId, HostPort, OverlayWindowRequest, WindowId
from peekstack.api.stack import StackItem, StackRegistry
from peekstack.runtime.close_bridge import CloseEventBridge
from peekstack.runtime.config import UiConfig
from peekstack.runtime.errors import (
    RECOVERABLE_HOST_ERRORS,
    GeometryUnavailableError,
    InvalidContentError,
    PopupError,
    WindowCreationFailedError,
    log_recoverable,
)
from peekstack.runtime.flow import RuntimeFlowMachine
from peekstack.runtime.geometry import place_root_overlay, place_stacked_overlay

logger = logging.getLogger(__name__)

PopupPhase = Literal[
    "init",
    "geometry_determined",
    "opened",
    "configured",
    "validated",
    "ready",
    "failed",
]

_TERMINAL_PHASES: frozenset[PopupPhase] = frozenset({"ready", "failed"})


@dataclass(frozen=True, slots=True)
class PopupRequest:
    """Content location to preview."""

    content_id: ContentId
    line: int
    column: int
    title: str | None = None


@dataclass(frozen=True, slots=True)
class PlannedPopup:
    """Geometry decided, nothing created yet."""

    request: PopupRequest
    root_window_id: WindowId
    is_root: bool
    geometry: PopupGeometry
    window_request: OverlayWindowRequest


@dataclass(frozen=True, slots=True)
class OpenedPopup:
    """Window materialized by the host."""

    plan: PlannedPopup
    window_id: WindowId
    pre_open_window_id: WindowId


@dataclass(frozen=True, slots=True)
class ValidatedPopup:
    """Window with final geometry, ready to register."""

    opened: OpenedPopup
    geometry: PopupGeometry

    def to_stack_item(self) -> StackItem:
        plan = self.opened.plan
        return StackItem(
            window_id=self.opened.window_id,
            content_id=plan.request.content_id,
            z_index=self.geometry.z_index,
            width=self.geometry.width,
            height=self.geometry.height,
            row=self.geometry.row,
            col=self.geometry.col,
            root_window_id=plan.root_window_id if plan.is_root else None,
        )


_PHASE_TABLE: tuple[FlowTransition[PopupPhase], ...] = (
    FlowTransition(trigger="plan", source="init", target="geometry_determined"),
    FlowTransition(trigger="open", source="geometry_determined", target="opened"),
    FlowTransition(trigger="configure", source="opened", target="configured"),
    FlowTransition(trigger="validate", source="configured", target="validated"),
    FlowTransition(trigger="register", source="validated", target="ready"),
    FlowTransition(
        trigger="fail",
        source=None,
        target="failed",
        guard=lambda context: context.source not in _TERMINAL_PHASES,
    ),
)


class PopupLifecycleController:
    """Builds overlays and registers them on the current root's stack."""

    def __init__(
        self,
        host: HostPort,
        registry: StackRegistry,
        bridge: CloseEventBridge,
        config: UiConfig,
    ) -> None:
        self._host = host
        self._registry = registry
        self._bridge = bridge
        self._config = config
        self._machine: RuntimeFlowMachine[PopupPhase] = RuntimeFlowMachine("init", _PHASE_TABLE)
        self._last_failure: PopupError | None = None
        self._last_geometry_source: GeometrySource | None = None

    @property
    def phase(self) -> PopupPhase:
        """Return the phase reached by the latest attempt."""
        return self._machine.state

    @property
    def last_failure(self) -> PopupError | None:
        return self._last_failure

    @property
    def last_geometry_source(self) -> GeometrySource | None:
        return self._last_geometry_source

    def create(self, request: PopupRequest) -> StackItem | None:
        """Open, validate and register one overlay; ``None`` on failure."""
        self._machine = RuntimeFlowMachine("init", _PHASE_TABLE)
        self._last_failure = None
        self._last_geometry_source = None
        try:
            self._validate_content(request)
            plan = self._determine_geometry(request)
            self._advance("plan")
            opened = self._open_window(plan)
            self._advance("open")
            self._configure_window(opened)
            self._advance("configure")
            validated = self._validate_geometry(opened)
            self._advance("validate")
            item = self._register(validated)
            self._advance("register")
        except PopupError as exc:
            failed_in = self._machine.state
            self._machine.trigger("fail", payload=exc)
            self._last_failure = exc
            logger.warning(
                "overlay creation failed kind=%s reason=%s",
                exc.kind,
                exc,
                extra={"content": request.content_id, "phase": failed_in, "failure_kind": exc.kind},
            )
            return None
        logger.debug(
            "overlay ready window=%s content=%s z=%s source=%s",
            item.window_id,
            item.content_id,
            item.z_index,
            self._last_geometry_source,
            extra={
                "window": item.window_id,
                "content": item.content_id,
                "geometry_source": self._last_geometry_source,
            },
        )
        return item

    def _advance(self, trigger: str) -> None:
        if not self._machine.trigger(trigger):
            raise RuntimeError(f"illegal popup transition {trigger!r} from {self._machine.state!r}")

    def _validate_content(self, request: PopupRequest) -> None:
        if not self._host.is_content_valid(request.content_id):
            raise InvalidContentError(f"content {request.content_id!r} cannot be shown")

    def _determine_geometry(self, request: PopupRequest) -> PlannedPopup:
        root_window_id = self._registry.root_for(self._host.get_focus())
        stack = self._registry.get_or_create(root_window_id)
        pruned = stack.prune_invalid(self._host.is_window_valid)
        for stale in pruned:
            self._bridge.forget(stale.window_id)
        if pruned:
            logger.debug(
                "pruned stale overlays root=%s windows=%s",
                root_window_id,
                [item.window_id for item in pruned],
            )

        parent = stack.top()
        if parent is None:
            geometry = self._root_geometry(root_window_id)
        else:
            geometry = place_stacked_overlay(
                StackedPlacement(
                    parent=parent,
                    depth=stack.size(),
                    parent_decoration_bar=self._host.has_decoration_bar(parent.window_id),
                ),
                self._config.stacked_sizing(),
            )

        window_request = OverlayWindowRequest(
            anchor_window_id=geometry.anchor_window_id,
            width=geometry.width,
            height=geometry.height,
            row=geometry.row,
            col=geometry.col,
            z_index=geometry.z_index,
            border=self._config.border,
            title=request.title or self._config.default_title,
            title_pos=self._config.title_pos,
        )
        return PlannedPopup(
            request=request,
            root_window_id=root_window_id,
            is_root=parent is None,
            geometry=geometry,
            window_request=window_request,
        )

    def _root_geometry(self, root_window_id: WindowId) -> PopupGeometry:
        anchor = self._host.get_window_rect(root_window_id)
        cursor = self._host.get_cursor_screen_position(root_window_id)
        if anchor is None or cursor is None:
            raise GeometryUnavailableError(f"window {root_window_id!r} cannot be measured")
        return place_root_overlay(
            RootPlacement(
                anchor_window_id=root_window_id,
                anchor=anchor,
                cursor=cursor,
                decoration_bar=self._host.has_decoration_bar(root_window_id),
            ),
            self._config.root_sizing(),
        )

    def _open_window(self, plan: PlannedPopup) -> OpenedPopup:
        pre_open_window_id = self._host.get_focus()
        try:
            window_id = self._host.open_overlay_window(plan.request.content_id, plan.window_request)
        except RECOVERABLE_HOST_ERRORS:
            log_recoverable(logger, "host raised while opening overlay", level=logging.WARNING)
            window_id = None
        if window_id is None or not self._host.is_window_valid(window_id):
            self._restore_focus(pre_open_window_id)
            raise WindowCreationFailedError(f"host refused overlay for content {plan.request.content_id!r}")
        return OpenedPopup(plan=plan, window_id=window_id, pre_open_window_id=pre_open_window_id)

    def _configure_window(self, opened: OpenedPopup) -> None:
        request = opened.plan.request
        try:
            self._host.set_cursor(opened.window_id, request.line, max(0, request.column - 1))
            self._host.center_view(opened.window_id)
        except RECOVERABLE_HOST_ERRORS:
            log_recoverable(logger, "cursor setup failed window=%s", opened.window_id)

    def _validate_geometry(self, opened: OpenedPopup) -> ValidatedPopup:
        if not self._host.is_window_valid(opened.window_id):
            self._rollback(opened)
            raise GeometryUnavailableError(f"window {opened.window_id!r} closed before validation")

        calculated = opened.plan.geometry
        try:
            reported = self._host.get_window_geometry(opened.window_id)
        except RECOVERABLE_HOST_ERRORS:
            log_recoverable(logger, "geometry read-back failed window=%s", opened.window_id)
            reported = None

        if reported is not None and reported.is_complete():
            width, height, row, col = reported.floored()
            geometry = PopupGeometry(
                width=width,
                height=height,
                row=row,
                col=col,
                z_index=calculated.z_index,
                anchor_window_id=calculated.anchor_window_id,
                source="authoritative",
            )
        else:
            geometry = calculated.with_source("calculated_fallback")
        self._last_geometry_source = geometry.source
        return ValidatedPopup(opened=opened, geometry=geometry)

    def _register(self, validated: ValidatedPopup) -> StackItem:
        stack = self._registry.get_or_create(validated.opened.plan.root_window_id)
        item = validated.to_stack_item()
        stack.push(item)
        self._bridge.watch(item, stack)
        return item

    def _rollback(self, opened: OpenedPopup) -> None:
        try:
            if self._host.is_window_valid(opened.window_id):
                self._host.close_window(opened.window_id, True)
        except RECOVERABLE_HOST_ERRORS:
            log_recoverable(logger, "rollback close failed window=%s", opened.window_id)
        self._restore_focus(opened.pre_open_window_id)

    def _restore_focus(self, window_id: WindowId) -> None:
        try:
            if self._host.is_window_valid(window_id):
                self._host.set_focus(window_id)
        except RECOVERABLE_HOST_ERRORS:
            log_recoverable(logger, "focus restore failed window=%s", window_id)
