import json
import logging
import sys
from pathlib import Path

from solar_insights.common.constants import JSON_LOG_FIELDS
from solar_insights.common.ids import generate_run_id, generate_submission_id
from solar_insights.common.logging import JsonLineFormatter, build_logger, log_event
from solar_insights.common.time_utils import utc_timestamp_iso


def test_generate_ids():
    run_id = generate_run_id()
    assert run_id.startswith("run-")
    assert generate_submission_id(run_id, 3) == f"{run_id}-0003"


def test_utc_timestamp_has_milliseconds_and_offset():
    value = utc_timestamp_iso()
    assert value.endswith("+00:00")
    assert "." in value


def test_json_line_formatter_emits_stable_fields():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "stage end", None, None)
    record.stage = "geocode"
    record.http_status = 200

    payload = json.loads(JsonLineFormatter().format(record))

    assert set(payload) == set(JSON_LOG_FIELDS)
    assert payload["stage"] == "geocode"
    assert payload["http_status"] == 200
    assert payload["message"] == "stage end"
    assert payload["error_code"] is None
    assert payload["exc_info"] is None


def test_json_line_formatter_includes_traceback():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "unexpected failure", None, sys.exc_info())

    payload = json.loads(JsonLineFormatter().format(record))

    assert payload["message"] == "unexpected failure"
    assert payload["exc_info"].startswith("Traceback")
    assert "RuntimeError: boom" in payload["exc_info"]


def test_build_logger_writes_jsonl_file(tmp_path: Path):
    logger = build_logger("run-test", level="INFO", log_dir=tmp_path)
    log_event(logger, "stage start", stage="validate", event="STAGE_START", status="ok")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run-test.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event"] == "STAGE_START"

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
