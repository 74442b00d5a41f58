from __future__ import annotations

from peekstack.api.host import WindowRect
from peekstack.api.stack import StackItem
from peekstack.runtime.close_bridge import CloseEventBridge
from peekstack.runtime.close_watch import CloseWatchRegistry
from peekstack.runtime.stack import RuntimeStackRegistry
from tests.peekstack.conftest import ROOT_WINDOW_ID, FakeHost, make_host


def _bridge(host: FakeHost) -> tuple[CloseEventBridge, RuntimeStackRegistry, CloseWatchRegistry]:
    watches = CloseWatchRegistry()
    registry = RuntimeStackRegistry(watches)
    return CloseEventBridge(host, registry, watches), registry, watches


def _push_overlays(
    host: FakeHost, bridge: CloseEventBridge, registry: RuntimeStackRegistry, window_ids: tuple[int, ...]
) -> None:
    stack = registry.get_or_create(ROOT_WINDOW_ID)
    for depth, window_id in enumerate(window_ids):
        host.add_window(window_id, WindowRect(row=1, col=1, width=40, height=20))
        item = StackItem(
            window_id=window_id,
            content_id=7,
            z_index=30 + depth,
            width=40,
            height=20,
            row=1,
            col=1,
            root_window_id=ROOT_WINDOW_ID if depth == 0 else None,
        )
        stack.push(item)
        bridge.watch(item, stack)


def test_close_notification_removes_middle_overlay() -> None:
    host = make_host()
    bridge, registry, _ = _bridge(host)
    _push_overlays(host, bridge, registry, (10, 11, 12))

    host.user_close(11)

    stack = registry.get_or_create(ROOT_WINDOW_ID)
    assert [item.window_id for item in stack.items()] == [10, 12]
    assert not bridge.is_watched(11)


def test_forget_drops_watch_of_vanished_overlay() -> None:
    host = make_host()
    bridge, registry, watches = _bridge(host)
    _push_overlays(host, bridge, registry, (10, 11))
    stack = registry.get_or_create(ROOT_WINDOW_ID)

    bridge.forget(11)
    bridge.forget(11)

    assert watches.watched_windows(stack.close_group) == (10,)
    bridge.dispatch_close(11)
    assert stack.size() == 2


def test_duplicate_close_notifications_are_ignored() -> None:
    host = make_host()
    bridge, registry, _ = _bridge(host)
    _push_overlays(host, bridge, registry, (10, 11))

    bridge.dispatch_close(11)
    bridge.dispatch_close(11)
    assert not bridge.on_close(11)
    bridge.dispatch_close(999)

    assert [item.window_id for item in registry.get_or_create(ROOT_WINDOW_ID).items()] == [10]


def test_close_all_closes_every_overlay_and_restores_focus() -> None:
    host = make_host()
    bridge, registry, watches = _bridge(host)
    _push_overlays(host, bridge, registry, (10, 11, 12))
    host.drop_window(11)
    host.focus = 12

    closed = bridge.close_all(ROOT_WINDOW_ID)

    assert closed == 3
    assert [window_id for window_id, _ in host.close_calls] == [12, 11, 10]
    assert registry.get_or_create(ROOT_WINDOW_ID).empty()
    assert host.focus == ROOT_WINDOW_ID
    assert host.suppress_calls == 1
    assert host.resume_calls == 1
    assert not host.suppressed
    assert watches.watched_windows() == ()


def test_close_all_passes_force_flag() -> None:
    host = make_host()
    bridge, registry, _ = _bridge(host)
    _push_overlays(host, bridge, registry, (10,))

    bridge.close_all(ROOT_WINDOW_ID, force=True)

    assert host.close_calls == [(10, True)]


def test_close_all_on_empty_stack_only_restores_focus() -> None:
    host = make_host()
    bridge, registry, _ = _bridge(host)
    registry.get_or_create(ROOT_WINDOW_ID)

    assert bridge.close_all(ROOT_WINDOW_ID) == 0
    assert bridge.close_all(ROOT_WINDOW_ID) == 0

    assert host.close_calls == []
    assert host.suppress_calls == 0
    assert host.focus_calls == [ROOT_WINDOW_ID, ROOT_WINDOW_ID]


def test_close_all_tolerates_closed_root_window() -> None:
    host = make_host()
    bridge, registry, _ = _bridge(host)
    _push_overlays(host, bridge, registry, (10,))
    host.drop_window(ROOT_WINDOW_ID)

    assert bridge.close_all(ROOT_WINDOW_ID) == 1
    assert registry.get_or_create(ROOT_WINDOW_ID).empty()


def test_late_notification_after_close_all_is_noop() -> None:
    host = make_host()
    bridge, registry, _ = _bridge(host)
    _push_overlays(host, bridge, registry, (10, 11))
    bridge.close_all(ROOT_WINDOW_ID)

    bridge.dispatch_close(10)

    assert registry.get_or_create(ROOT_WINDOW_ID).empty()
