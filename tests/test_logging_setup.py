"""Tests for logging_setup.py."""

from __future__ import annotations

import json
import logging

import pytest

from fare_engine.logging_setup import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("fare_engine.engine.quote", logging.WARNING, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_plain_format(restore_root_logger):
    setup_logging("debug")
    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, JSONFormatter)


def test_json_format_selected(restore_root_logger):
    setup_logging("WARNING", json_output=True, environment="staging")
    formatter = restore_root_logger.handlers[0].formatter
    assert isinstance(formatter, JSONFormatter)
    assert formatter.environment == "staging"
    assert restore_root_logger.level == logging.WARNING


def test_unknown_level_rejected(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging("chatty")


def test_json_line_survives_quotes_in_message():
    line = JSONFormatter().format(_record("route %r -> %r unusable", 'Ikeja "GRA"', "Lekki"))
    payload = json.loads(line)
    assert payload["message"] == "route 'Ikeja \"GRA\"' -> 'Lekki' unusable"
    assert payload["level"] == "WARNING"
    assert payload["service_name"] == "fare-engine"
    assert payload["environment"] == "development"


def test_quote_context_lifted_to_top_level():
    record = _record("quoted", conditions_source="measured", vehicle_type="Bus", unrelated="x")
    payload = json.loads(JSONFormatter().format(record))
    assert payload["conditions_source"] == "measured"
    assert payload["vehicle_type"] == "Bus"
    assert "unrelated" not in payload
