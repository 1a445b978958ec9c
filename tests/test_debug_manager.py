from __future__ import annotations

import time

import pytest

from FPT.debug.debug_manager import Debug, DebugManager, LogLevel, get_debug, set_debug
from FPT.modules.profiler import profile, profile_context


def test_facade_routes_to_installed_manager(quiet_debug) -> None:
    assert get_debug() is quiet_debug
    Debug.log("sampled", "Renderer")
    Debug.log_info("ready")
    Debug.log_warning("careful", "Config")
    levels = [e.level for e in quiet_debug.entries()]
    assert levels == [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARNING]
    assert [e.message for e in quiet_debug.entries(LogLevel.INFO)] == ["ready", "careful"]
    assert [e.message for e in quiet_debug.entries(category="Config")] == ["careful"]


def test_multiline_message_becomes_one_entry_per_line(quiet_debug) -> None:
    Debug.log_info("first\nsecond")
    assert [e.message for e in quiet_debug.entries()] == ["first", "second"]


def test_entries_carry_frame_count(quiet_debug) -> None:
    quiet_debug.next_frame()
    quiet_debug.next_frame()
    Debug.log("tick")
    assert quiet_debug.entries()[0].frame_count == 2


def test_disabled_manager_records_nothing() -> None:
    manager = DebugManager(auto_save_logs=False, echo=False)
    manager.enabled = False
    manager.log(LogLevel.CRITICAL, "ignored")
    assert manager.entries() == []


def test_log_is_bounded() -> None:
    manager = DebugManager(max_log_entries=3, auto_save_logs=False, echo=False)
    for i in range(5):
        manager.log(LogLevel.INFO, str(i))
    assert [e.message for e in manager.entries()] == ["2", "3", "4"]


def test_errors_are_appended_to_log_file(tmp_path) -> None:
    log_file = tmp_path / "errors.txt"
    manager = DebugManager(log_file=str(log_file), auto_save_logs=True, echo=False)
    set_debug(manager)
    Debug.log_info("not saved")
    manager.log(LogLevel.ERROR, "broken plot", "Renderer")
    content = log_file.read_text(encoding="utf-8")
    assert "[ERROR] Renderer: broken plot" in content
    assert "Stack trace:" in content
    assert "not saved" not in content


def test_log_exception_keeps_traceback(quiet_debug) -> None:
    try:
        raise ZeroDivisionError("boom")
    except ZeroDivisionError:
        Debug.log_exception("evaluation failed", "Renderer")
    entry = quiet_debug.entries(LogLevel.CRITICAL)[0]
    assert any("ZeroDivisionError" in line for line in entry.stack_trace)


def test_echo_prints_level_and_category(capsys) -> None:
    manager = DebugManager(auto_save_logs=False, echo=True)
    manager.log(LogLevel.INFO, "done", "App")
    assert "[INFO] App: done" in capsys.readouterr().out


def test_stats(quiet_debug) -> None:
    Debug.increment_stat("frames")
    Debug.increment_stat("frames", 2)
    assert Debug.get_stat("frames") == 3
    assert Debug.get_stat("missing") == 0


def test_profile_decorator_publishes_counter(quiet_debug) -> None:
    @profile("work", "tests")
    def work():
        time.sleep(0.01)
        return 7

    assert work() == 7
    assert work.__name__ == "work"
    assert quiet_debug.performance_counters["tests/work"] >= 10 * 0.5


def test_profile_records_even_on_error(quiet_debug) -> None:
    @profile("fails")
    def fails():
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        fails()
    assert "fails" in quiet_debug.performance_counters


def test_profile_context(quiet_debug) -> None:
    with profile_context("frame", "app"):
        pass
    assert quiet_debug.performance_counters["app/frame"] >= 0
