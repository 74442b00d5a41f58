"""Centralized overlay configuration sourced from environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from peekstack.api.geometry import RootSizing, StackedSizing

_MIN_SIZE_RATIO = 0.05


@dataclass(frozen=True, slots=True)
class UiConfig:
    """Immutable overlay sizing and decoration configuration."""

    border: str = "rounded"
    size_ratio: float = 0.65
    min_width: int = 10
    min_height: int = 3
    row_offset: int = 2
    col_offset: int = 5
    stack_row_offset: int = 1
    stack_col_offset: int = 2
    width_decrement: int = 2
    height_decrement: int = 1
    z_index_base: int = 30
    default_title: str = "Peek"
    title_pos: str = "center"

    @property
    def border_enabled(self) -> bool:
        return self.border.strip().lower() != "none"

    def root_sizing(self) -> RootSizing:
        return RootSizing(
            size_ratio=self.size_ratio,
            min_width=self.min_width,
            min_height=self.min_height,
            row_offset=self.row_offset,
            col_offset=self.col_offset,
            border_enabled=self.border_enabled,
            z_index_base=self.z_index_base,
        )

    def stacked_sizing(self) -> StackedSizing:
        return StackedSizing(
            width_decrement=self.width_decrement,
            height_decrement=self.height_decrement,
            stack_row_offset=self.stack_row_offset,
            stack_col_offset=self.stack_col_offset,
            min_width=self.min_width,
            min_height=self.min_height,
            z_index_base=self.z_index_base,
        )


_UI_CONFIG: ContextVar[UiConfig | None] = ContextVar("peekstack_ui_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(name: str, default: float, *, env: Mapping[str, str] | None = None) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        return float(default)
    try:
        return float(raw.strip())
    except ValueError:
        return float(default)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("PEEKSTACK_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = default
    return value.strip().upper()


def load_ui_config(*, env: Mapping[str, str] | None = None) -> UiConfig:
    defaults = UiConfig()
    size_ratio = _float("PEEKSTACK_UI_SIZE_RATIO", defaults.size_ratio, env=env)
    return UiConfig(
        border=_text("PEEKSTACK_UI_BORDER", defaults.border, env=env).lower(),
        size_ratio=min(1.0, max(_MIN_SIZE_RATIO, size_ratio)),
        min_width=_int("PEEKSTACK_UI_MIN_WIDTH", defaults.min_width, minimum=1, env=env),
        min_height=_int("PEEKSTACK_UI_MIN_HEIGHT", defaults.min_height, minimum=1, env=env),
        row_offset=_int("PEEKSTACK_UI_ROW_OFFSET", defaults.row_offset, env=env),
        col_offset=_int("PEEKSTACK_UI_COL_OFFSET", defaults.col_offset, env=env),
        stack_row_offset=_int("PEEKSTACK_UI_STACK_ROW_OFFSET", defaults.stack_row_offset, env=env),
        stack_col_offset=_int("PEEKSTACK_UI_STACK_COL_OFFSET", defaults.stack_col_offset, env=env),
        width_decrement=_int(
            "PEEKSTACK_UI_WIDTH_DECREMENT", defaults.width_decrement, minimum=0, env=env
        ),
        height_decrement=_int(
            "PEEKSTACK_UI_HEIGHT_DECREMENT", defaults.height_decrement, minimum=0, env=env
        ),
        z_index_base=_int("PEEKSTACK_UI_Z_INDEX_BASE", defaults.z_index_base, minimum=1, env=env),
        default_title=_text("PEEKSTACK_UI_DEFAULT_TITLE", defaults.default_title, env=env),
        title_pos=_text("PEEKSTACK_UI_TITLE_POS", defaults.title_pos, env=env).lower(),
    )


def initialize_ui_config(*, env: Mapping[str, str] | None = None) -> UiConfig:
    config = load_ui_config(env=env)
    _UI_CONFIG.set(config)
    return config


def set_ui_config(config: UiConfig) -> UiConfig:
    _UI_CONFIG.set(config)
    return config


def get_ui_config() -> UiConfig:
    config = _UI_CONFIG.get()
    if config is not None:
        return config
    return initialize_ui_config()


__all__ = [
    "UiConfig",
    "get_ui_config",
    "initialize_ui_config",
    "load_ui_config",
    "resolve_log_level_name",
    "set_ui_config",
]
