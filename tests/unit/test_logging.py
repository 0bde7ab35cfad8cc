"""Tests for structured logging setup."""

import json
import logging

import pytest

from utils.logging import clear_request_context, set_request_context, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_stdlib_records_carry_request_id(capsys, restore_root_logger):
    setup_logging("INFO", json_output=True)
    set_request_context("abc123")
    try:
        logging.getLogger("services.video_library").info("Added video v1")
    finally:
        clear_request_context()

    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "Added video v1"
    assert event["request_id"] == "abc123"
    assert event["level"] == "info"
    assert event["logger"] == "services.video_library"
    assert "timestamp" in event


def test_no_request_id_outside_requests(capsys, restore_root_logger):
    setup_logging("INFO", json_output=True)
    clear_request_context()

    logging.getLogger("services.kv_store").warning("standalone")

    event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert "request_id" not in event
