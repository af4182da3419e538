"""Tests for the DebugManager logging wrapper."""

import logging

import pytest

from tictac4.debug import TRACE_LEVEL, DebugLevel, DebugManager


@pytest.fixture
def manager():
    return DebugManager(logger_name="tictac4.test")


def test_messages_below_level_are_dropped(manager, caplog):
    manager.configure(level=DebugLevel.INFO)
    with caplog.at_level(logging.DEBUG, logger="tictac4.test"):
        manager.debug("hidden", "board")
        manager.info("shown", "board")
    assert "[board] shown" in caplog.text
    assert "hidden" not in caplog.text


def test_component_filter(manager, caplog):
    manager.configure(level=DebugLevel.DEBUG, components=["meta"])
    with caplog.at_level(logging.DEBUG, logger="tictac4.test"):
        manager.info("from board", "board")
        manager.info("from meta", "meta")
    assert "from meta" in caplog.text
    assert "from board" not in caplog.text


def test_disabled_manager_is_silent(manager, caplog):
    manager.configure(level=DebugLevel.TRACE, enabled=False)
    with caplog.at_level(logging.DEBUG, logger="tictac4.test"):
        manager.error("nothing")
    assert caplog.text == ""


def test_set_from_string(manager):
    assert manager.set_from_string("trace")
    assert manager.level == DebugLevel.TRACE
    assert not manager.set_from_string("loud")
    assert manager.level == DebugLevel.TRACE


def test_timer(manager):
    assert manager.end_timer("never") is None
    manager.start_timer("work")
    elapsed = manager.end_timer("work")
    assert elapsed is not None and elapsed >= 0


def test_log_file(manager, tmp_path):
    path = tmp_path / "tictac4.log"
    manager.configure(level=DebugLevel.INFO, log_file=str(path))
    manager.info("to file", "cli")
    manager.configure(log_file="")
    assert "[cli] to file" in path.read_text()


def test_trace_has_its_own_level(manager, caplog):
    manager.configure(level=DebugLevel.TRACE)
    with caplog.at_level(TRACE_LEVEL, logger="tictac4.test"):
        manager.trace("fine detail", "board")
        manager.debug("coarse detail", "board")
    levels = {record.getMessage(): record.levelname for record in caplog.records}
    assert levels["[board] fine detail"] == "TRACE"
    assert levels["[board] coarse detail"] == "DEBUG"
    assert TRACE_LEVEL < logging.DEBUG


def test_debug_level_hides_trace(manager, caplog):
    manager.configure(level=DebugLevel.DEBUG)
    with caplog.at_level(TRACE_LEVEL, logger="tictac4.test"):
        manager.trace("fine detail")
        manager.debug("coarse detail")
    assert "coarse detail" in caplog.text
    assert "fine detail" not in caplog.text
