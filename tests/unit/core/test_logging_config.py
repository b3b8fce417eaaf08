from __future__ import annotations

import json
import logging

from app.core.logging_config import JsonFormatter


def test_json_formatter_lifts_extra_fields():
    record = logging.makeLogRecord(
        {
            "name": "app.services.contract_service",
            "levelname": "INFO",
            "msg": "contract.signed",
            "event": "contract.signed",
            "contract_id": "c-1",
        }
    )
    line = json.loads(JsonFormatter(service="Teckion").format(record))
    assert line["service"] == "Teckion"
    assert line["message"] == "contract.signed"
    assert line["event"] == "contract.signed"
    assert line["contract_id"] == "c-1"
    assert "exception" not in line


def test_json_formatter_includes_exception_text():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys

        record = logging.makeLogRecord({"msg": "failed", "levelname": "ERROR", "exc_info": sys.exc_info()})
    line = json.loads(JsonFormatter(service="Teckion").format(record))
    assert "RuntimeError: boom" in line["exception"]
