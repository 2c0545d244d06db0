"""Contract tests for structured observability fields."""

from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from ura_validator.main import app


def _client() -> TestClient:
    return TestClient(app)


def _records_by_component(caplog, component: str) -> list[logging.LogRecord]:  # type: ignore[no-untyped-def]
    return [record for record in caplog.records if getattr(record, "component", None) == component]


def _assert_request_fields(record: logging.LogRecord, *, request_id: str) -> None:
    assert getattr(record, "requestId", None) == request_id
    assert isinstance(getattr(record, "operation", None), str)
    assert getattr(record, "operation", None) != ""


def test_structured_fields_for_validation_flow(caplog) -> None:
    client = _client()
    caplog.set_level(logging.INFO)
    caplog.clear()

    response = client.post(
        "/v1/validate",
        headers={"X-Request-Id": "req-obs-validate-001"},
        json={
            "validationType": "DESCI_PLAGIARISM",
            "data": {"title": "Paper", "content": "Findings (Lovelace, 1843) hold."},
            "ruleSetId": "desci-plagiarism-v1",
        },
    )
    assert response.status_code == 200

    api_records = _records_by_component(caplog, "api")
    service_records = _records_by_component(caplog, "validation_service")
    engine_records = _records_by_component(caplog, "validation_engine")

    assert [getattr(record, "operation") for record in api_records][-2:] == ["request_started", "request_completed"]
    for record in api_records[-2:]:
        _assert_request_fields(record, request_id="req-obs-validate-001")
        assert getattr(record, "resourceId", None) == "/v1/validate"
    assert getattr(api_records[-1], "statusCode", None) == 200

    _assert_request_fields(service_records[-1], request_id="req-obs-validate-001")
    assert getattr(service_records[-1], "ruleSetId", None) == "desci-plagiarism-v1"
    assert getattr(service_records[-1], "domain", None) == "DESCI_PLAGIARISM"

    completed = engine_records[-1]
    _assert_request_fields(completed, request_id="req-obs-validate-001")
    assert getattr(completed, "domain", None) == "DESCI_PLAGIARISM"
    assert getattr(completed, "state", None) == "completed"


def test_structured_fields_for_rejected_and_batch_requests(caplog) -> None:
    client = _client()
    caplog.set_level(logging.INFO)
    caplog.clear()

    rejected = client.post(
        "/v1/validate",
        headers={"X-Request-Id": "req-obs-rejected-001"},
        json={"validationType": "WEB3_SOCIAL", "data": {"content": "gm"}, "ruleSetId": "missing-rule-set"},
    )
    batch = client.post(
        "/v1/validate/batch",
        headers={"X-Request-Id": "req-obs-batch-001"},
        json={"requests": [{"validationType": "WEB3_SOCIAL", "data": {"content": "gm"}, "ruleSetId": "web3-social-v1"}]},
    )
    assert rejected.status_code == 404
    assert batch.status_code == 200

    service_records = _records_by_component(caplog, "validation_service")
    rejection = next(record for record in service_records if getattr(record, "requestId", None) == "req-obs-rejected-001")
    assert getattr(rejection, "errorCode", None) == "RULESET_NOT_FOUND"
    assert rejection.levelno == logging.WARNING

    batch_record = next(record for record in service_records if getattr(record, "operation", None) == "batch_validate")
    _assert_request_fields(batch_record, request_id="req-obs-batch-001")
    assert getattr(batch_record, "itemCount", None) == 1

    engine_records = _records_by_component(caplog, "validation_engine")
    assert any(getattr(record, "requestId", None) == "req-obs-batch-001-0" for record in engine_records)
