import logging

import pytest

from utils.logging_utils import (
    StructuredLogger,
    get_logging_context,
    log_operation,
    logging_context,
)

logger = StructuredLogger(__name__)


class FakeService:
    entity_name = "Widget"

    @log_operation("get_by_id")
    def get_by_id(self, id):
        logger.info("Looking up widget")
        return id

    @log_operation("explode")
    def explode(self):
        raise RuntimeError("boom")


def test_context_is_added_to_records(caplog):
    caplog.set_level(logging.INFO, logger="records.test")

    with logging_context(request_id="abc-123"):
        StructuredLogger("records.test").info("hello", extra={"entity": "Widget"})
        assert get_logging_context() == {"request_id": "abc-123"}

    record = caplog.records[-1]
    assert record.request_id == "abc-123"
    assert record.entity == "Widget"
    assert get_logging_context() == {}


def test_nested_context_is_restored():
    with logging_context(entity="Widget"):
        with logging_context(record_id=3):
            assert get_logging_context() == {"entity": "Widget", "record_id": 3}
        assert get_logging_context() == {"entity": "Widget"}


def test_log_operation_records_entity_and_id(caplog):
    caplog.set_level(logging.DEBUG, logger=__name__)

    assert FakeService().get_by_id(7) == 7

    started = caplog.records[0]
    assert started.getMessage() == "Starting get_by_id"
    assert started.entity == "Widget"
    assert started.record_id == 7


def test_operation_context_reaches_inner_log_calls(caplog):
    caplog.set_level(logging.INFO, logger=__name__)

    FakeService().get_by_id(7)

    inner = [r for r in caplog.records if r.getMessage() == "Looking up widget"][0]
    assert inner.operation == "get_by_id"
    assert inner.entity == "Widget"
    assert inner.record_id == 7
    assert get_logging_context() == {}


def test_log_operation_logs_and_reraises(caplog):
    caplog.set_level(logging.ERROR, logger=__name__)

    with pytest.raises(RuntimeError):
        FakeService().explode()

    failed = caplog.records[-1]
    assert failed.getMessage() == "Failed explode"
    assert failed.operation == "explode"
    assert failed.error_type == "RuntimeError"
    assert get_logging_context() == {}
