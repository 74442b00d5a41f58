"""Popup error kinds and host exception policy."""

from __future__ import annotations

import logging
from typing import TypeAlias

# Explicitly bounded set tolerated from host calls during rollback/teardown.
RecoverableHostErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_HOST_ERRORS: RecoverableHostErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    LookupError,
)


class PopupError(RuntimeError):
    """Overlay construction failure reported to callers as absence."""

    kind = "popup_error"


class InvalidContentError(PopupError):
    """Requested content cannot be addressed."""

    kind = "invalid_content"


class GeometryUnavailableError(PopupError):
    """No usable geometry for the overlay."""

    kind = "geometry_unavailable"


class WindowCreationFailedError(PopupError):
    """Host refused to materialize the overlay window."""

    kind = "window_creation_failed"


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *args: object,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated host exceptions."""
    logger.log(level, message, *args, exc_info=True)
