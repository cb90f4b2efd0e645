"""
Structured logging: correlation IDs on service log lines and redaction.
"""

import logging

import pytest

from src.shared.infrastructure.logging import (
    REDACTED,
    CorrelationIdFilter,
    correlation_id_var,
    redact,
)

from tests.conftest import COMPLAINT_PAYLOAD


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)
    record.__dict__.update(extra)
    return record


class TestCorrelationIdFilter:
    def test_stamps_current_correlation_id(self):
        token = correlation_id_var.set("req-42")
        try:
            record = make_record()
            CorrelationIdFilter().filter(record)
        finally:
            correlation_id_var.reset(token)
        assert record.correlation_id == "req-42"

    def test_explicit_value_wins(self):
        token = correlation_id_var.set("req-42")
        try:
            record = make_record(correlation_id="from-extra")
            CorrelationIdFilter().filter(record)
        finally:
            correlation_id_var.reset(token)
        assert record.correlation_id == "from-extra"

    def test_outside_a_request_nothing_is_added(self):
        record = make_record()
        CorrelationIdFilter().filter(record)
        assert not hasattr(record, "correlation_id")


@pytest.mark.asyncio
async def test_service_logs_carry_request_correlation_id(client, user, caplog):
    caplog.set_level(logging.INFO)
    resp = await client.post(
        "/api/complaints",
        json=COMPLAINT_PAYLOAD,
        headers={**user.headers, "X-Correlation-ID": "complaint-req-1"},
    )
    assert resp.status_code == 201

    created = [r for r in caplog.records if r.getMessage() == "Complaint created"]
    assert created
    assert created[0].correlation_id == "complaint-req-1"


def test_redact_masks_credentials():
    record = {"password": "hunter2", "access_token": "abc", "email": "a@example.com", "secret": None}
    redact(record)
    assert record["password"] == REDACTED
    assert record["access_token"] == REDACTED
    assert record["email"] == "a@example.com"
    assert record["secret"] is None
