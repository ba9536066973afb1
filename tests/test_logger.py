"""
Tests for logging setup: levels, async queue and Airbrake wiring.
"""

import logging
import queue

import pytest

from diskmon.airbrake import AirbrakeHandler
from diskmon.config import LoggerConfig
from diskmon.logger import CRASH, LEVELS, TRACE, DroppingQueueHandler, crash, setup_logging


@pytest.fixture
def handles():
    created = []
    yield created
    for handle in created:
        handle.close()


def test_custom_levels_registered():
    assert logging.getLevelName(TRACE) == "TRACE"
    assert logging.getLevelName(CRASH) == "CRASH"
    assert TRACE < logging.DEBUG
    assert CRASH > logging.CRITICAL


def test_every_config_level_is_mapped():
    assert set(LEVELS) == {"CRASH", "ERROR", "WARN", "INFO", "DEBUG", "TRACE"}
    assert LEVELS["WARN"] == logging.WARNING


@pytest.mark.parametrize("level,expected", [(None, logging.INFO), ("DEBUG", logging.DEBUG), ("TRACE", TRACE)])
def test_level(level, expected, handles):
    handles.append(setup_logging(LoggerConfig(level=level, is_async=False)))
    assert logging.getLogger("diskmon").level == expected


def test_sync_logging_writes_to_stderr(handles, capsys):
    handles.append(setup_logging(LoggerConfig(is_async=False)))

    logging.getLogger("diskmon.test").info("hello %s", "world")

    err = capsys.readouterr().err
    assert "diskmon.test - INFO - hello world" in err


def test_async_logging_flushes(handles, capsys):
    handle = setup_logging(LoggerConfig(is_async=True, chan_size=8))
    handles.append(handle)
    assert handle.listener is not None

    logging.getLogger("diskmon.test").error("queued")
    handle.flush()

    assert "diskmon.test - ERROR - queued" in capsys.readouterr().err


def make_record(msg):
    return logging.LogRecord("diskmon.test", logging.INFO, __file__, 0, msg, None, None)


def test_full_queue_counts_drops_quietly(capsys):
    records = queue.Queue(maxsize=2)
    handler = DroppingQueueHandler(records)

    for i in range(4):
        handler.handle(make_record(f"record {i}"))

    assert handler.dropped == 2
    assert records.qsize() == 2
    assert "Logging error" not in capsys.readouterr().err


def test_drop_summary_queued_when_room_frees_up():
    records = queue.Queue(maxsize=2)
    handler = DroppingQueueHandler(records)
    for i in range(4):
        handler.handle(make_record(f"record {i}"))
    records.get_nowait()
    records.get_nowait()

    handler.handle(make_record("after"))

    assert records.get_nowait().getMessage() == "after"
    summary = records.get_nowait()
    assert summary.levelno == logging.WARNING
    assert summary.getMessage() == "dropped 2 log record(s), queue full"
    assert handler.dropped == 0


def test_flush_reports_pending_drops(handles, capsys):
    handle = setup_logging(LoggerConfig(is_async=True, chan_size=8))
    handles.append(handle)
    handle.queue_handler.dropped = 3

    handle.flush()

    assert "WARNING - dropped 3 log record(s), queue full" in capsys.readouterr().err
    assert handle.queue_handler.dropped == 0


def test_crash_level(handles, capsys):
    handles.append(setup_logging(LoggerConfig(is_async=False, level="CRASH")))

    logging.getLogger("diskmon").error("filtered out")
    crash("going down: %s", "boom")

    err = capsys.readouterr().err
    assert "filtered out" not in err
    assert "CRASH - going down: boom" in err


def test_airbrake_handler_attached_when_configured(handles):
    handle = setup_logging(
        LoggerConfig(
            is_async=False,
            airbrake_host="https://airbrake.example.com",
            airbrake_project_id="1",
            airbrake_project_key="key",
            airbrake_environment="test",
        )
    )
    handles.append(handle)

    airbrake = [h for h in handle.handlers if isinstance(h, AirbrakeHandler)]
    assert len(airbrake) == 1
    assert airbrake[0].environment == "test"
    assert airbrake[0].level == logging.ERROR


def test_airbrake_needs_all_credentials(handles):
    handle = setup_logging(LoggerConfig(is_async=False, airbrake_host="https://airbrake.example.com"))
    handles.append(handle)
    assert not any(isinstance(h, AirbrakeHandler) for h in handle.handlers)


def test_close_restores_propagation(handles):
    handle = setup_logging(LoggerConfig(is_async=False))
    assert logging.getLogger("diskmon").propagate is False

    handle.close()

    assert logging.getLogger("diskmon").propagate is True
    assert logging.getLogger("diskmon").handlers == []
