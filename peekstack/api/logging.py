"""Public logging configuration API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Handlers installed on the ``peekstack`` logger.

    ``propagate`` keeps records flowing to the host's root handlers as well;
    off by default so an embedding editor does not see every line twice.
    """

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json
    propagate: bool = False
