from __future__ import annotations

from types import SimpleNamespace

from sqlalchemy import create_engine

from jarvis_api.db.connection import ConnectionMonitor, ConnectionState


def test_state_transitions():
    state = ConnectionState()
    assert state.label == "disconnected"
    assert state.ever_connected is False

    assert state.mark_connected() is True
    assert state.mark_connected() is False
    assert state.label == "connected"
    assert state.mark_disconnected() is True
    assert state.mark_disconnected() is False
    assert state.ever_connected is True


def test_connect_once_marks_connected_and_runs_hook(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'ok.db'}")
    state = ConnectionState()
    seen = []
    monitor = ConnectionMonitor(engine, state, on_connect=seen.append)

    assert monitor.connect_once() is True
    assert state.connected is True
    assert seen == [engine]
    engine.dispose()


def test_failed_attempt_schedules_retry_with_fixed_delay(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing-dir' / 'db.sqlite'}")
    state = ConnectionState()
    monitor = ConnectionMonitor(engine, state, retry_delay=5.0)
    delays = []
    monitor._schedule = delays.append  # type: ignore[method-assign]

    monitor._attempt()
    monitor._attempt()

    assert state.connected is False
    assert delays == [5.0, 5.0]


def test_stop_cancels_pending_retry(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing-dir' / 'db.sqlite'}")
    monitor = ConnectionMonitor(engine, ConnectionState(), retry_delay=60.0)

    monitor.start()
    monitor.stop()

    assert monitor._timer is None
    assert monitor._listening is False


def test_engine_events_track_disconnect_and_reconnect(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'events.db'}")
    state = ConnectionState()
    monitor = ConnectionMonitor(engine, state)
    assert monitor.connect_once() is True

    monitor._on_engine_error(SimpleNamespace(is_disconnect=True))
    assert state.connected is False

    monitor._on_pool_connect(None, None)
    assert state.connected is True

    monitor._on_engine_error(SimpleNamespace(is_disconnect=False))
    assert state.connected is True
    engine.dispose()


def test_pool_connect_before_first_success_is_ignored(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'early.db'}")
    state = ConnectionState()
    monitor = ConnectionMonitor(engine, state)

    monitor._on_pool_connect(None, None)

    assert state.connected is False
    engine.dispose()
