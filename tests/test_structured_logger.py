"""
Structured logging tests.
"""

import json
import logging

from consultscribe.core.structured_logger import (
    ROOT_LOGGER_NAME,
    JSONFormatter,
    configure_logging,
    get_logger,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_json_formatter_merges_extra_data():
    logger = logging.getLogger("formatter-test")
    record = logger.makeRecord(
        "formatter-test", logging.INFO, __file__, 10, "Attributed %d turns", (4,), None,
        extra={"extra_data": {"turns": 4}, "request_id": "req-1"},
    )
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "Attributed 4 turns"
    assert payload["level"] == "INFO"
    assert payload["turns"] == 4
    assert payload["request_id"] == "req-1"


def test_structured_logger_passes_fields():
    handler = ListHandler()
    base = logging.getLogger("structured-test")
    base.addHandler(handler)
    base.setLevel(logging.INFO)
    try:
        get_logger("structured-test").info("Attributed turns", turns=3, language="en-IN")
        get_logger("structured-test").warning("plain")
    finally:
        base.removeHandler(handler)

    assert handler.records[0].extra_data == {"turns": 3, "language": "en-IN"}
    assert handler.records[1].levelno == logging.WARNING
    assert not hasattr(handler.records[1], "extra_data")


def test_configure_logging_is_idempotent():
    configure_logging("INFO", "json")
    logger = configure_logging("DEBUG", "text")
    tagged = [h for h in logger.handlers if getattr(h, "_consultscribe", False)]
    assert logger.name == ROOT_LOGGER_NAME
    assert len(tagged) == 1
    assert logger.level == logging.DEBUG
    assert not isinstance(tagged[0].formatter, JSONFormatter)
    configure_logging("INFO", "json")
