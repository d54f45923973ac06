"""
Tests for environment-driven configuration.
"""

import pytest

from core.quality import DEFAULT_THRESHOLDS
from utils.config import Config


THRESHOLD_VARS = (
    "QUALITY_REQUIRED_FIELDS_RATE",
    "QUALITY_VIOLATION_RATE",
    "QUALITY_PARSE_FAIL_RATE",
    "QUALITY_IMAGE_VALID_RATE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in THRESHOLD_VARS + ("PORT", "LOG_LEVEL", "REPORTS_DIR"):
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    def test_defaults(self):
        config = Config.load()
        assert config.port == 8000
        assert config.log_level == "INFO"
        assert config.reports_dir == "./reports"
        assert config.quality_thresholds() == DEFAULT_THRESHOLDS

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("QUALITY_VIOLATION_RATE", "0.05")
        config = Config.load()
        assert config.port == 9001
        assert config.log_level == "DEBUG"
        thresholds = config.quality_thresholds()
        assert thresholds.violation_rate == 0.05
        assert thresholds.parse_fail_rate == 0.08

    def test_non_numeric_threshold_ignored(self, monkeypatch):
        monkeypatch.setenv("QUALITY_REQUIRED_FIELDS_RATE", "most")
        config = Config.load()
        assert config.required_fields_rate is None
        assert config.quality_thresholds().required_fields_rate == 0.85

    def test_to_dict(self):
        data = Config.load().to_dict()
        assert data["image_valid_rate"] is None
        assert set(data) >= {"host", "port", "debug", "log_level", "reports_dir"}
