import sys
import json
import logging
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

import pytest

from seqlist import observability
from seqlist.sequential_list import SequentialList


def test_counter_render():
    counter = observability.Counter("demo_total", "Demo counter")
    counter.inc()
    counter.inc(2)
    assert counter.render() == (
        "# HELP demo_total Demo counter\n"
        "# TYPE demo_total counter\n"
        "demo_total 3.0\n"
    )


def test_generate_metrics_lists_all_counters():
    body = observability.generate_metrics().decode()
    assert "seqlist_out_of_range_total" in body
    assert "seqlist_transforms_total" in body


def test_out_of_range_increments_counter():
    before = observability.OUT_OF_RANGE_COUNTER.value
    with pytest.raises(IndexError):
        SequentialList([1]).remove(2)
    assert observability.OUT_OF_RANGE_COUNTER.value == before + 1


def test_rejection_is_logged_with_details(caplog):
    caplog.set_level(logging.INFO, logger="seqlist.sequential_list")
    with pytest.raises(IndexError):
        SequentialList([1, 2]).replace(7, "x")
    record = next(r for r in caplog.records if r.getMessage() == "Rejected position")
    assert record.operation == "replace"
    assert record.position == 7
    assert record.length == 2


def test_threshold_warning(monkeypatch, caplog):
    monkeypatch.setitem(observability.THRESHOLDS, "seqlist_transforms_total", 1)
    caplog.set_level(logging.WARNING, logger="seqlist.observability")
    observability.inc_transform()
    assert "seqlist_transforms_total threshold 1 reached" in caplog.text


def test_no_warning_when_threshold_disabled(monkeypatch, caplog):
    monkeypatch.setitem(observability.THRESHOLDS, "seqlist_out_of_range_total", 0)
    caplog.set_level(logging.WARNING, logger="seqlist.observability")
    observability.inc_out_of_range()
    assert "threshold" not in caplog.text


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {
            "name": "seqlist.test",
            "levelname": "INFO",
            "msg": "moved %s",
            "args": ("entry",),
            "correlation_id": "abc123",
            "position": 3,
        }
    )
    data = json.loads(observability.JSONFormatter().format(record))
    assert data["level"] == "INFO"
    assert data["logger"] == "seqlist.test"
    assert data["message"] == "moved entry"
    assert data["correlation_id"] == "abc123"
    assert data["position"] == 3
    assert "msg" not in data
    assert "args" not in data


def test_configure_logging_uses_settings_level(monkeypatch):
    calls = {}
    monkeypatch.setenv("SEQLIST_LOG_LEVEL", "warning")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    observability.configure_logging()
    assert calls["level"] == "WARNING"
    assert calls["force"] is True
    handler = calls["handlers"][0]
    assert isinstance(handler.formatter, observability.JSONFormatter)
