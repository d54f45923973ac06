"""
Tests for the quality gate HTTP API.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from web.app import create_app


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.delenv("QUALITY_REQUIRED_FIELDS_RATE", raising=False)
    monkeypatch.delenv("QUALITY_IMAGE_VALID_RATE", raising=False)
    return TestClient(create_app())


def _sample(required: str = "Y") -> dict:
    return {
        "sample_status": "SUCCESS",
        "requiredFields": required,
        "contract_violations": 0,
        "parse_error": None,
        "images_cnt": 2,
        "images_valid_cnt": 2,
    }


def _results() -> dict:
    return {
        "runMeta": {"runId": "run-42"},
        "platforms": [
            {"name": "zigbang", "mode": "API", "samples": [_sample() for _ in range(4)]},
            {"name": "dabang", "samples": []},
        ],
    }


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_validate_contract_reports_issues(client: TestClient) -> None:
    response = client.post("/api/contract/validate", json={"source_url": "/relative"})
    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert body["counts"]["ERROR"] >= 1
    codes = {issue["code"] for issue in body["errors"]}
    assert "URL_INVALID" in codes
    assert "REQ_FIELD_MISSING" in codes


def test_validate_contract_rejects_non_object(client: TestClient) -> None:
    response = client.post("/api/contract/validate", json=[1, 2, 3])
    assert response.status_code == 400
    assert "JSON object" in response.json()["detail"]


def test_evaluate_quality(client: TestClient) -> None:
    response = client.post("/api/quality/evaluate", json=_results())
    assert response.status_code == 200
    body = response.json()
    assert body["runId"] == "run-42"
    assert body["totalSample"] == 4
    assert [p["platform"] for p in body["platforms"]] == ["zigbang", "dabang"]
    assert body["platforms"][0]["pass"] is True
    assert body["platforms"][1] == {"platform": "dabang", "total": 0, "reason": "no-samples"}


def test_evaluate_uses_env_then_document_thresholds(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("QUALITY_IMAGE_VALID_RATE", "0.5")
    payload = _results()
    payload["thresholds"] = {"requiredFieldsRate": 0.7}
    body = client.post("/api/quality/evaluate", json=payload).json()
    assert body["thresholds"]["imageValidRate"] == 0.5
    assert body["thresholds"]["requiredFieldsRate"] == 0.7


def test_evaluate_rejects_bad_shape(client: TestClient) -> None:
    response = client.post("/api/quality/evaluate", json={"platforms": "nope"})
    assert response.status_code == 422


def test_report_pdf(client: TestClient) -> None:
    response = client.post("/api/quality/report.pdf", json=_results())
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


def test_evaluate_malformed_thresholds_fall_back(client: TestClient) -> None:
    response = client.post("/api/quality/evaluate", json={"thresholds": "strict", "platforms": []})
    assert response.status_code == 200
    assert response.json()["thresholds"] == {
        "requiredFieldsRate": 0.85,
        "violationRate": 0.08,
        "parseFailRate": 0.08,
        "imageValidRate": 0.90,
    }
