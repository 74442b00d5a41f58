"""Overlay stack runtime modules."""

from peekstack.api.stack import StackItem
from peekstack.runtime.bootstrap import start_overlay_session
from peekstack.runtime.close_bridge import CloseEventBridge
from peekstack.runtime.close_watch import CloseWatch, CloseWatchRegistry
from peekstack.runtime.config import UiConfig, get_ui_config, load_ui_config
from peekstack.runtime.errors import (
    GeometryUnavailableError,
    InvalidContentError,
    PopupError,
    WindowCreationFailedError,
)
from peekstack.runtime.flow import FlowMachine
from peekstack.runtime.geometry import place_root_overlay, place_stacked_overlay
from peekstack.runtime.logging import configure_logging, setup_logging
from peekstack.runtime.popup import PopupLifecycleController, PopupPhase, PopupRequest
from peekstack.runtime.service import RuntimeOverlayService
from peekstack.runtime.stack import RuntimeOverlayStack, RuntimeStackRegistry

__all__ = [
    "CloseEventBridge",
    "CloseWatch",
    "CloseWatchRegistry",
    "FlowMachine",
    "GeometryUnavailableError",
    "InvalidContentError",
    "PopupError",
    "PopupLifecycleController",
    "PopupPhase",
    "PopupRequest",
    "RuntimeOverlayService",
    "RuntimeOverlayStack",
    "RuntimeStackRegistry",
    "StackItem",
    "UiConfig",
    "WindowCreationFailedError",
    "start_overlay_session",
    "configure_logging",
    "get_ui_config",
    "load_ui_config",
    "place_root_overlay",
    "place_stacked_overlay",
    "setup_logging",
]
