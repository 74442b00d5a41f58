"""Overlay core startup for one host editor session."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from peekstack.api.host import HostPort
from peekstack.api.logging import LoggingConfig
from peekstack.runtime.config import initialize_ui_config
from peekstack.runtime.logging import configure_logging, setup_logging
from peekstack.runtime.service import RuntimeOverlayService

logger = logging.getLogger(__name__)


def start_overlay_session(
    host: HostPort,
    *,
    env: Mapping[str, str] | None = None,
    logging_config: LoggingConfig | None = None,
) -> RuntimeOverlayService:
    """Configure logging and UI settings, then build the session's overlay service.

    Without ``logging_config`` the package logger only gets a console handler
    when it has none yet, at the level named by ``PEEKSTACK_LOG_LEVEL``.
    """
    if logging_config is None:
        setup_logging(env=env)
    else:
        configure_logging(logging_config)
    config = initialize_ui_config(env=env)
    service = RuntimeOverlayService(host, config=config)
    logger.info(
        "overlay session started border=%s size_ratio=%s z_base=%s",
        config.border,
        config.size_ratio,
        config.z_index_base,
        extra={"root_window": host.get_focus()},
    )
    return service
