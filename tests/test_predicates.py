"""
Tests for Field Predicates and the safe-navigation accessor.
"""

import math

import pytest

from core.contract.predicates import (
    MISSING,
    get_path,
    is_absolute_url,
    is_number_or_null,
    is_parseable_datetime,
    is_truthy,
    is_yes_marker,
    parses_as_number,
)


class TestGetPath:
    """Safe navigation returns MISSING instead of raising."""

    def test_nested_value(self):
        record = {"payload": {"price": {"deposit": 1000}}}
        assert get_path(record, "payload", "price", "deposit") == 1000

    def test_explicit_null_is_not_missing(self):
        assert get_path({"a": None}, "a") is None

    def test_absent_key(self):
        assert get_path({"payload": {}}, "payload", "price", "deposit") is MISSING

    def test_non_mapping_hop(self):
        assert get_path({"payload": "text"}, "payload", "price") is MISSING
        assert get_path(None, "anything") is MISSING

    def test_missing_is_falsy(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"


class TestIsAbsoluteUrl:
    @pytest.mark.parametrize("url", ["https://x.test/1", "http://a", "https://직방.kr/room/1"])
    def test_accepts(self, url):
        assert is_absolute_url(url) is True

    @pytest.mark.parametrize("url", ["", "https://", "x.test", "//x.test", "mailto:a@b", None, 1])
    def test_rejects(self, url):
        assert is_absolute_url(url) is False


class TestIsParseableDatetime:
    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-01",
            "2024-01-01T00:00:00Z",
            "2024-01-01T00:00:00.1Z",
            "2024-01-01 12:00:00",
            "Tue, 02 Jan 2024 03:04:05 +0900",
        ],
    )
    def test_accepts(self, value):
        assert is_parseable_datetime(value) is True

    @pytest.mark.parametrize("value", ["", "   ", "2024-13-01", "soon", 20240101, None])
    def test_rejects(self, value):
        assert is_parseable_datetime(value) is False


class TestNumbers:
    def test_number_or_null(self):
        assert is_number_or_null(None) is True
        assert is_number_or_null(0) is True
        assert is_number_or_null(12.5) is True
        assert is_number_or_null("12") is False
        assert is_number_or_null(False) is False
        assert is_number_or_null(MISSING) is False

    @pytest.mark.parametrize("value", [0, 35, 35.5, "1200", " 33.1 ", "-5"])
    def test_parses_as_number(self, value):
        assert parses_as_number(value) is True

    @pytest.mark.parametrize(
        "value", [None, MISSING, "", "1,000", "협의", math.inf, math.nan, 10**400, "1e400", True, [1]]
    )
    def test_does_not_parse(self, value):
        assert parses_as_number(value) is False


class TestSampleFlags:
    @pytest.mark.parametrize("value", [True, 1, 3, "timeout", [], {"x": 1}])
    def test_truthy(self, value):
        assert is_truthy(value) is True

    @pytest.mark.parametrize("value", [None, False, 0, 0.0, "", math.nan, MISSING])
    def test_falsy(self, value):
        assert is_truthy(value) is False

    @pytest.mark.parametrize("value", [True, "Y", "y"])
    def test_yes_markers(self, value):
        assert is_yes_marker(value) is True

    @pytest.mark.parametrize("value", [False, "N", "yes", 1, None])
    def test_not_yes_markers(self, value):
        assert is_yes_marker(value) is False
