"""Stacked peek overlays anchored to host editor windows."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from peekstack.api.host import HostPort
    from peekstack.api.logging import LoggingConfig
    from peekstack.api.overlays import OverlayService
    from peekstack.runtime.config import UiConfig


def create_overlay_service(host: "HostPort", *, config: "UiConfig | None" = None) -> "OverlayService":
    """Create an overlay service bound to one host."""
    from peekstack.api.overlays import create_overlay_service as _create

    return _create(host, config=config)


def start_overlay_session(
    host: "HostPort",
    *,
    env: Mapping[str, str] | None = None,
    logging_config: "LoggingConfig | None" = None,
) -> "OverlayService":
    """Set up logging and config from the environment, then create the service."""
    from peekstack.runtime.bootstrap import start_overlay_session as _start

    return _start(host, env=env, logging_config=logging_config)


__all__ = ["create_overlay_service", "start_overlay_session"]
