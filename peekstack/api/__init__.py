"""Public peekstack API contracts."""

from peekstack.api.flow import FlowContext, FlowMachine, FlowTransition, create_flow_machine
from peekstack.api.geometry import (
    GeometrySource,
    PopupGeometry,
    RootPlacement,
    RootSizing,
    StackedPlacement,
    StackedSizing,
)
from peekstack.api.host import (
    CloseHandler,
    ContentId,
    CursorPosition,
    HostPort,
    OverlayWindowRequest,
    WindowGeometry,
    WindowId,
    WindowRect,
)
from peekstack.api.logging import LoggingConfig
from peekstack.api.overlays import OverlayHandle, OverlayService, create_overlay_service
from peekstack.api.stack import CloseGroup, OverlayStack, StackItem, StackRegistry

__all__ = [
    "CloseGroup",
    "CloseHandler",
    "ContentId",
    "CursorPosition",
    "FlowContext",
    "FlowMachine",
    "FlowTransition",
    "GeometrySource",
    "HostPort",
    "LoggingConfig",
    "OverlayHandle",
    "OverlayService",
    "OverlayStack",
    "OverlayWindowRequest",
    "PopupGeometry",
    "RootPlacement",
    "RootSizing",
    "StackItem",
    "StackRegistry",
    "StackedPlacement",
    "StackedSizing",
    "WindowGeometry",
    "WindowId",
    "WindowRect",
    "create_flow_machine",
    "create_overlay_service",
]
