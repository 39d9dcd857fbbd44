"""
Tests for the JSON log formatter.
"""

import json
import logging
import sys
from datetime import date

from employee_records.logging_utils import JsonFormatter


def make_record(msg="audit_event", exc_info=None, **extra):
    logger = logging.getLogger("employee_records.test")
    return logger.makeRecord(
        logger.name, logging.INFO, __file__, 10, msg, (), exc_info, extra=extra
    )


class TestJsonFormatter:

    def test_one_json_object_with_core_fields(self):
        line = JsonFormatter().format(make_record())
        payload = json.loads(line)

        assert payload["level"] == "INFO"
        assert payload["logger"] == "employee_records.test"
        assert payload["message"] == "audit_event"
        assert "timestamp" in payload

    def test_extra_fields_become_top_level_keys(self):
        """Context passed with extra= is searchable without parsing the message."""
        payload = json.loads(JsonFormatter().format(
            make_record(request_id="req-1", actor_id=7)
        ))

        assert payload["request_id"] == "req-1"
        assert payload["actor_id"] == 7
        assert "pathname" not in payload
        assert "args" not in payload

    def test_non_json_values_are_stringified(self):
        payload = json.loads(JsonFormatter().format(
            make_record(joined=date(2023, 10, 19))
        ))
        assert payload["joined"] == "2023-10-19"

    def test_exception_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record("audit_log_write_failed", exc_info=sys.exc_info())

        payload = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in payload["exception"]
