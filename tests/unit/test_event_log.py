import re

import pytest

from statusboard.services.telemetry.event_log import EventLog
from statusboard.services.telemetry.models import LocalizedMessage, Severity


def _msg(i: int) -> LocalizedMessage:
    return LocalizedMessage(en=f"event {i}", zh=f"事件 {i}")


def test_append_records_entry():
    log = EventLog(capacity=5)
    entry = log.append(_msg(1), Severity.WARN)

    assert len(log) == 1
    assert log.latest == entry
    assert entry.severity == Severity.WARN
    assert entry.message.en == "event 1"
    assert entry.message.zh == "事件 1"
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", entry.timestamp)


def test_never_exceeds_capacity_and_drops_oldest():
    log = EventLog(capacity=20)
    for i in range(35):
        log.append(_msg(i))

    assert len(log) == 20
    assert [e.message.en for e in log.entries] == [f"event {i}" for i in range(15, 35)]


def test_preserves_insertion_order():
    log = EventLog(capacity=3)
    for i in range(3):
        log.append(_msg(i))
    assert [e.message.en for e in log] == ["event 0", "event 1", "event 2"]


def test_entries_is_a_snapshot():
    log = EventLog(capacity=3)
    log.append(_msg(1))
    snapshot = log.entries
    log.append(_msg(2))
    assert len(snapshot) == 1


def test_consecutive_identical_failures_collapse():
    log = EventLog()
    failure = LocalizedMessage(en="API CONNECTION ERROR: RETRYING...", zh="API 连接错误: 重试中...")

    assert log.append_failure(failure) is not None
    assert log.append_failure(failure) is None

    assert len(log) == 1
    assert log.latest.severity == Severity.CRIT


def test_different_failures_both_appear():
    log = EventLog()
    log.append_failure(_msg(1))
    log.append_failure(_msg(2))
    assert [e.message.en for e in log] == ["event 1", "event 2"]


def test_failure_repeats_after_other_entry():
    log = EventLog()
    log.append_failure(_msg(1))
    log.append(_msg(2))
    log.append_failure(_msg(1))
    assert len(log) == 3


def test_empty_log():
    log = EventLog()
    assert log.latest is None
    assert log.entries == ()
    assert log.capacity == 20


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        EventLog(capacity=0)
