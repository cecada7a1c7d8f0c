"""Structured Logging: browse context in JSON and text output, single root handler."""

import json
import logging
import sys

import pytest

from docbrowser.infrastructure.observability import (
    ContextFormatter, JSONFormatter, setup_logging,
)


def _record(exc_info=None, **extra):
    record = logging.LogRecord(
        "docbrowser.test", logging.ERROR, __file__, 1, "find failed", None, exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    pymongo_level = logging.getLogger("pymongo").level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("pymongo").setLevel(pymongo_level)


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "ERROR"
    assert out["logger"] == "docbrowser.test"
    assert out["message"] == "find failed"
    assert "timestamp" in out
    assert "operation" not in out


def test_json_formatter_surfaces_context_only():
    out = json.loads(JSONFormatter().format(
        _record(operation="find", collection="users", unrelated="x"),
    ))
    assert out["operation"] == "find"
    assert out["collection"] == "users"
    assert "unrelated" not in out


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("cursor lost")
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())
    out = json.loads(JSONFormatter().format(record))
    assert "cursor lost" in out["exception"]


def test_context_formatter_appends_pairs():
    line = ContextFormatter().format(_record(operation="count_documents", collection="users"))
    assert line.endswith("find failed [operation=count_documents collection=users]")


def test_context_formatter_without_context_is_plain():
    line = ContextFormatter().format(_record())
    assert line.endswith("docbrowser.test: find failed")


def test_setup_logging_replaces_its_own_handler(restore_root_logging):
    root = restore_root_logging
    first = setup_logging("info", "json")
    second = setup_logging("warning", "text")
    assert first not in root.handlers
    assert second in root.handlers
    assert isinstance(second.formatter, ContextFormatter)
    assert root.level == logging.WARNING


def test_setup_logging_quiets_driver_unless_debug(restore_root_logging):
    setup_logging("info", "json")
    assert logging.getLogger("pymongo").level == logging.WARNING
    setup_logging("debug", "json")
    assert logging.getLogger("pymongo").level == logging.DEBUG
