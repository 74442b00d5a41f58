from __future__ import annotations

from peekstack.runtime.config import (
    UiConfig,
    get_ui_config,
    load_ui_config,
    resolve_log_level_name,
    set_ui_config,
)


def test_load_ui_config_defaults_without_env() -> None:
    cfg = load_ui_config(env={})
    assert cfg == UiConfig()
    assert cfg.border_enabled


def test_load_ui_config_parses_env_values() -> None:
    cfg = load_ui_config(
        env={
            "PEEKSTACK_UI_BORDER": "None",
            "PEEKSTACK_UI_SIZE_RATIO": "0.8",
            "PEEKSTACK_UI_MIN_WIDTH": "30",
            "PEEKSTACK_UI_MIN_HEIGHT": "8",
            "PEEKSTACK_UI_ROW_OFFSET": "-1",
            "PEEKSTACK_UI_STACK_COL_OFFSET": "4",
            "PEEKSTACK_UI_WIDTH_DECREMENT": "6",
            "PEEKSTACK_UI_Z_INDEX_BASE": "100",
            "PEEKSTACK_UI_DEFAULT_TITLE": "Definition",
            "PEEKSTACK_UI_TITLE_POS": "LEFT",
        }
    )
    assert cfg.border == "none"
    assert not cfg.border_enabled
    assert cfg.size_ratio == 0.8
    assert cfg.min_width == 30
    assert cfg.min_height == 8
    assert cfg.row_offset == -1
    assert cfg.stack_col_offset == 4
    assert cfg.width_decrement == 6
    assert cfg.z_index_base == 100
    assert cfg.default_title == "Definition"
    assert cfg.title_pos == "left"


def test_load_ui_config_clamps_and_ignores_garbage() -> None:
    cfg = load_ui_config(
        env={
            "PEEKSTACK_UI_SIZE_RATIO": "7",
            "PEEKSTACK_UI_MIN_WIDTH": "0",
            "PEEKSTACK_UI_MIN_HEIGHT": "tall",
            "PEEKSTACK_UI_HEIGHT_DECREMENT": "-3",
            "PEEKSTACK_UI_BORDER": "   ",
        }
    )
    assert cfg.size_ratio == 1.0
    assert cfg.min_width == 1
    assert cfg.min_height == UiConfig().min_height
    assert cfg.height_decrement == 0
    assert cfg.border == "rounded"

    tiny = load_ui_config(env={"PEEKSTACK_UI_SIZE_RATIO": "0"})
    assert tiny.size_ratio == 0.05


def test_load_ui_config_reads_process_env(monkeypatch) -> None:
    monkeypatch.setenv("PEEKSTACK_UI_MIN_WIDTH", "42")
    assert load_ui_config().min_width == 42


def test_ui_config_builds_sizing_records() -> None:
    cfg = UiConfig(border="none", size_ratio=0.5, min_width=12, min_height=4, z_index_base=50)
    root = cfg.root_sizing()
    stacked = cfg.stacked_sizing()
    assert not root.border_enabled
    assert root.size_ratio == 0.5
    assert root.z_index_base == 50
    assert stacked.min_width == 12
    assert stacked.min_height == 4
    assert stacked.width_decrement == cfg.width_decrement


def test_set_ui_config_overrides_context_value() -> None:
    previous = get_ui_config()
    custom = UiConfig(min_width=99)
    try:
        set_ui_config(custom)
        assert get_ui_config() is custom
    finally:
        set_ui_config(previous)


def test_resolve_log_level_prefers_package_prefix(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("PEEKSTACK_LOG_LEVEL", "error")
    assert resolve_log_level_name() == "ERROR"
    monkeypatch.delenv("PEEKSTACK_LOG_LEVEL")
    assert resolve_log_level_name() == "WARNING"
    assert resolve_log_level_name(env={}) == "INFO"
