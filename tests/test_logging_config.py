import io
import json
import logging
import sys

import pytest

from unprotected_openings.geometry import AspectRatioCategory
from unprotected_openings.interpolation import interpolate
from unprotected_openings.logging_config import (
    LOG_LEVEL_ENV,
    JSONFormatter,
    resolve_level,
    setup_logging,
)
from unprotected_openings.selection import TableCode


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_level_falls_back_to_env_then_info(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert resolve_level() == logging.INFO

    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert resolve_level() == logging.DEBUG
    assert resolve_level("warning") == logging.WARNING

    monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
    assert resolve_level() == logging.INFO


def test_setup_uses_env_level(monkeypatch, restore_root_logger):
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    handler = setup_logging(stream=io.StringIO())
    assert restore_root_logger.level == logging.DEBUG
    assert restore_root_logger.handlers == [handler]


def test_plain_output(restore_root_logger):
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)
    logging.getLogger("unprotected_openings.test").info("loaded %d tables", 4)
    logging.getLogger("unprotected_openings.test").debug("hidden")

    output = stream.getvalue()
    assert "[unprotected_openings.test] INFO: loaded 4 tables" in output
    assert "hidden" not in output


def test_json_output_carries_context(restore_root_logger):
    stream = io.StringIO()
    setup_logging("DEBUG", json_output=True, stream=stream)
    logging.getLogger("unprotected_openings.test").debug(
        "lookup done", extra={"table": "B", "area": 287.55}
    )

    entry = json.loads(stream.getvalue().strip())
    assert entry["level"] == "DEBUG"
    assert entry["logger"] == "unprotected_openings.test"
    assert entry["message"] == "lookup done"
    assert entry["table"] == "B" and entry["area"] == 287.55
    assert "distance" not in entry


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad row")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    entry = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad row" in entry["exception"]

def test_interpolation_logs_lookup_context(tables, restore_root_logger):
    stream = io.StringIO()
    setup_logging("DEBUG", json_output=True, stream=stream)
    interpolate(tables[TableCode.B], 287.55, 17.48, AspectRatioCategory.NARROW)

    entries = [json.loads(line) for line in stream.getvalue().splitlines()]
    lookup = [e for e in entries if e["logger"] == "unprotected_openings.interpolation"]
    assert len(lookup) == 1
    assert lookup[0]["table"] == "B"
    assert lookup[0]["category"] == "narrow"
    assert lookup[0]["distance"] == 17.48

