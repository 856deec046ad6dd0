"""Structured Logging — JSON formatter fields and setup idempotence."""

import json
import logging

from asana_time_tracking.infrastructure.observability import (
    JSONFormatter,
    PackageLogHandler,
    setup_logging,
)


def _record(**extra):
    record = logging.LogRecord(
        "asana_time_tracking.infrastructure.asana_api_client", logging.WARNING,
        __file__, 1, "Rate limit exceeded, retrying in %ss", (3,), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "asana_time_tracking.infrastructure.asana_api_client"
    assert out["message"] == "Rate limit exceeded, retrying in 3s"
    assert "timestamp" in out


def test_json_formatter_surfaces_request_extras():
    out = json.loads(JSONFormatter().format(
        _record(method="GET", path="time_tracking_entries", retry_count=1, unrelated="x"),
    ))
    assert out["method"] == "GET"
    assert out["path"] == "time_tracking_entries"
    assert out["retry_count"] == 1
    assert "unrelated" not in out


def test_setup_logging_replaces_its_own_handler():
    logger = setup_logging("DEBUG", "json", logger_name="asana_time_tracking.test_setup")
    setup_logging("WARNING", "text", logger_name="asana_time_tracking.test_setup")

    own = [h for h in logger.handlers if isinstance(h, PackageLogHandler)]
    assert len(own) == 1
    assert not isinstance(own[0].formatter, JSONFormatter)
    assert logger.level == logging.WARNING
    logger.removeHandler(own[0])


def test_setup_logging_stops_propagation_to_root():
    logger = setup_logging("INFO", "json", logger_name="asana_time_tracking.test_propagate")

    assert logger.propagate is False
    own = [h for h in logger.handlers if isinstance(h, PackageLogHandler)]
    assert len(own) == 1
    logger.removeHandler(own[0])
