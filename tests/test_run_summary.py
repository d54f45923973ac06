"""
Tests for the Run Summary Builder
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.contract import MalformedInputError
from core.quality import (
    DEFAULT_THRESHOLDS,
    QualityThresholds,
    build_run_summary,
    evaluate_sampling_results,
)
from core.quality.summary import format_timestamp


GENERATED_AT = datetime(2024, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)


def good_sample():
    return {
        "sample_status": "SUCCESS",
        "requiredFields": "Y",
        "contract_violations": 0,
        "parse_error": None,
        "images_cnt": 2,
        "images_valid_cnt": 2,
    }


@pytest.fixture
def sampling_results():
    return {
        "runMeta": {"runId": "run-2024-03-01"},
        "platforms": [
            {"name": "zigbang", "mode": "API", "samples": [good_sample() for _ in range(3)]},
            {"name": "dabang", "samples": []},
            {
                "name": "naver",
                "mode": "STEALTH_AUTOMATION",
                "samples": [dict(good_sample(), requiredFields="N"), good_sample()],
            },
        ],
    }


class TestBuildRunSummary:
    def test_platform_order_preserved(self, sampling_results):
        summary = evaluate_sampling_results(sampling_results, generated_at=GENERATED_AT)
        names = [p["platform"] for p in summary.to_dict()["platforms"]]
        assert names == ["zigbang", "dabang", "naver"]

    def test_total_sample_sums_all_platforms(self, sampling_results):
        summary = evaluate_sampling_results(sampling_results, generated_at=GENERATED_AT)
        assert summary.total_sample == 5
        assert summary.to_dict()["totalSample"] == 5

    def test_output_shape(self, sampling_results):
        data = evaluate_sampling_results(sampling_results, generated_at=GENERATED_AT).to_dict()
        assert list(data) == ["runId", "generatedAt", "thresholds", "totalSample", "platforms"]
        assert data["runId"] == "run-2024-03-01"
        assert data["generatedAt"] == "2024-03-01T09:30:15.123Z"
        assert data["thresholds"] == DEFAULT_THRESHOLDS.to_dict()
        assert data["platforms"][1] == {"platform": "dabang", "total": 0, "reason": "no-samples"}

    def test_run_passes_only_when_every_platform_passes(self, sampling_results):
        summary = evaluate_sampling_results(sampling_results, generated_at=GENERATED_AT)
        assert summary.passed is False
        assert [p.platform for p in summary.failing_platforms] == ["dabang", "naver"]

        sampling_results["platforms"] = sampling_results["platforms"][:1]
        assert evaluate_sampling_results(sampling_results).passed is True

    def test_empty_run_does_not_pass(self):
        summary = build_run_summary("r", DEFAULT_THRESHOLDS, [])
        assert summary.total_sample == 0
        assert summary.platforms == ()
        assert summary.passed is False

    def test_generated_at_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        summary = build_run_summary("r", DEFAULT_THRESHOLDS, [])
        assert before <= summary.generated_at <= before + timedelta(minutes=1)
        assert summary.to_dict()["generatedAt"].endswith("Z")


class TestThresholdResolution:
    def test_document_thresholds_override_defaults(self, sampling_results):
        sampling_results["thresholds"] = {"requiredFieldsRate": 0.5}
        summary = evaluate_sampling_results(sampling_results)
        assert summary.thresholds.required_fields_rate == 0.5
        assert summary.thresholds.violation_rate == 0.08
        naver = summary.platforms[2]
        assert naver.passed is True

    def test_document_thresholds_layer_over_supplied(self, sampling_results):
        supplied = QualityThresholds(violation_rate=0.2, required_fields_rate=0.4)
        sampling_results["thresholds"] = {"requiredFieldsRate": 0.6}
        summary = evaluate_sampling_results(sampling_results, supplied)
        assert summary.thresholds.required_fields_rate == 0.6
        assert summary.thresholds.violation_rate == 0.2

    def test_broken_thresholds_fall_back(self, sampling_results):
        sampling_results["thresholds"] = "strict"
        summary = evaluate_sampling_results(sampling_results)
        assert summary.thresholds == DEFAULT_THRESHOLDS


class TestMalformedDocuments:
    @pytest.mark.parametrize("document", [None, [], "results", 42])
    def test_non_object_document(self, document):
        with pytest.raises(MalformedInputError):
            evaluate_sampling_results(document)

    def test_missing_parts_are_tolerated(self):
        summary = evaluate_sampling_results({})
        assert summary.run_id is None
        assert summary.platforms == ()

    def test_non_object_platform_entry(self):
        summary = evaluate_sampling_results({"platforms": [None]})
        assert summary.to_dict()["platforms"] == [
            {"platform": None, "total": 0, "reason": "no-samples"}
        ]


class TestFormatTimestamp:
    def test_converts_to_utc(self):
        kst = timezone(timedelta(hours=9))
        value = datetime(2024, 3, 1, 18, 0, 0, tzinfo=kst)
        assert format_timestamp(value) == "2024-03-01T09:00:00.000Z"

    def test_naive_is_taken_as_utc(self):
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"
