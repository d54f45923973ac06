"""
Contract Validator - Raw Collection Record Checks

Walks one raw collection record and its normalized projection and
returns a ValidationReport. Defects in the data are reported as issues;
processing always continues to the next rule. The validator only raises
MalformedInputError when the input is not an object at all.

Rule order is fixed and determines issue order:
1. Top-level required fields
2. Absolute URLs (record and normalized listing)
3. collected_at timestamp
4. Raw payload recommendations (WARN only)
5. Presence of the normalized listing
6. Normalized listing fields
7. Normalized images, by index
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Union

from core.contract.predicates import (
    MISSING,
    as_list,
    as_mapping,
    get_path,
    is_absolute_url,
    is_non_empty_string,
    is_number_or_null,
    is_parseable_datetime,
    is_truthy,
    parses_as_number,
)
from core.contract.report import build_report
from core.contract.schema import (
    IMAGE_STATUS_VALUES,
    LEASE_TYPE_VALUES,
    NORMALIZED_NUMERIC_FIELDS,
    NORMALIZED_REQUIRED_STRING_FIELDS,
    REQUIRED_RECORD_STRING_FIELDS,
    IssueCode,
    IssueLevel,
    MalformedInputError,
    ValidationIssue,
    ValidationReport,
)


logger = logging.getLogger(__name__)


class _IssueList:
    """Append-only issue accumulator for one validation pass."""

    def __init__(self) -> None:
        self._issues: list[ValidationIssue] = []

    def add(
        self,
        code: IssueCode,
        message: str,
        path: str,
        level: IssueLevel = IssueLevel.ERROR,
    ) -> None:
        self._issues.append(
            ValidationIssue(code=code, level=level, path=path, message=message)
        )

    def ensure(
        self,
        condition: bool,
        code: IssueCode,
        message: str,
        path: str,
        level: IssueLevel = IssueLevel.ERROR,
    ) -> None:
        if not condition:
            self.add(code, message, path, level)

    def __iter__(self):
        return iter(self._issues)


# =============================================================================
# Rule Groups
# =============================================================================


def _check_required_string(
    issues: _IssueList, value: Any, name: str, path: str
) -> None:
    """Absent, null or empty is missing; any other non-string is a mismatch."""
    if value is MISSING or value is None or value == "":
        issues.add(IssueCode.REQ_FIELD_MISSING, f"{name} required", path)
    elif not isinstance(value, str):
        issues.add(
            IssueCode.REQ_FIELD_TYPE_MISMATCH,
            f"{name} must be a string, got {type(value).__name__}",
            path,
        )


def _check_top_level(issues: _IssueList, record: Mapping) -> None:
    for name in REQUIRED_RECORD_STRING_FIELDS:
        _check_required_string(issues, get_path(record, name), name, f"/{name}")

    # Absent or null counts as a type mismatch
    issues.ensure(
        isinstance(get_path(record, "payload"), Mapping),
        IssueCode.REQ_FIELD_TYPE_MISMATCH,
        "payload must be object",
        "/payload",
    )


def _check_urls(issues: _IssueList, record: Mapping) -> None:
    issues.ensure(
        is_absolute_url(get_path(record, "source_url")),
        IssueCode.URL_INVALID,
        "source_url must be absolute url",
        "/source_url",
    )
    normalized = get_path(record, "normalized")
    if isinstance(normalized, Mapping):
        issues.ensure(
            is_absolute_url(get_path(normalized, "source_url")),
            IssueCode.URL_INVALID,
            "normalized.source_url must be absolute url",
            "/normalized/source_url",
        )


def _check_collected_at(issues: _IssueList, record: Mapping) -> None:
    issues.ensure(
        is_parseable_datetime(get_path(record, "collected_at")),
        IssueCode.REQ_FIELD_TYPE_MISMATCH,
        "collected_at must be a parseable date/time",
        "/collected_at",
    )


def _check_payload(issues: _IssueList, record: Mapping) -> None:
    # Source sites differ in what they expose, so nothing here is an ERROR
    payload = as_mapping(get_path(record, "payload"))

    issues.ensure(
        isinstance(get_path(payload, "title"), str),
        IssueCode.REQ_FIELD_MISSING,
        "payload.title is recommended",
        "/payload/title",
        IssueLevel.WARN,
    )
    for key in ("monthly_rent", "deposit"):
        issues.ensure(
            parses_as_number(get_path(payload, "price", key)),
            IssueCode.PRICE_PARSE_FAIL,
            f"price.{key} parse failed",
            f"/payload/price/{key}",
            IssueLevel.WARN,
        )
    issues.ensure(
        parses_as_number(get_path(payload, "area", "exclusive_m2"))
        or parses_as_number(get_path(payload, "area", "gross_m2")),
        IssueCode.AREA_PARSE_FAIL,
        "area parse failed",
        "/payload/area",
        IssueLevel.WARN,
    )


def _check_normalized(issues: _IssueList, record: Mapping) -> None:
    normalized = get_path(record, "normalized")
    if not is_truthy(normalized):
        issues.add(IssueCode.REQ_FIELD_MISSING, "normalized required", "/normalized")
        return
    if not isinstance(normalized, Mapping):
        issues.add(
            IssueCode.REQ_FIELD_TYPE_MISMATCH,
            "normalized must be object",
            "/normalized",
        )
        return

    for name in NORMALIZED_REQUIRED_STRING_FIELDS:
        issues.ensure(
            is_non_empty_string(get_path(normalized, name)),
            IssueCode.REQ_FIELD_MISSING,
            f"normalized.{name} required",
            f"/normalized/{name}",
        )

    lease_type = get_path(normalized, "lease_type")
    issues.ensure(
        isinstance(lease_type, str) and lease_type in LEASE_TYPE_VALUES,
        IssueCode.REQ_FIELD_TYPE_MISMATCH,
        f"lease_type invalid: {lease_type!r}",
        "/normalized/lease_type",
    )

    for name in NORMALIZED_NUMERIC_FIELDS:
        # Absent is not the same as null: the key must be present
        issues.ensure(
            is_number_or_null(get_path(normalized, name)),
            IssueCode.REQ_FIELD_TYPE_MISMATCH,
            f"{name} must be number/null",
            f"/normalized/{name}",
        )

    issues.ensure(
        is_non_empty_string(get_path(normalized, "source_ref")),
        IssueCode.REQ_FIELD_MISSING,
        "normalized.source_ref required",
        "/normalized/source_ref",
    )


def _check_images(issues: _IssueList, record: Mapping) -> None:
    images = as_list(get_path(record, "normalized_images"))
    for index, raw_image in enumerate(images):
        image = as_mapping(raw_image)
        base = f"/normalized_images/{index}"
        issues.ensure(
            is_absolute_url(get_path(image, "source_url")),
            IssueCode.IMAGE_URL_INVALID,
            "image.source_url must be absolute url",
            f"{base}/source_url",
        )
        status = get_path(image, "status")
        issues.ensure(
            isinstance(status, str) and status in IMAGE_STATUS_VALUES,
            IssueCode.REQ_FIELD_TYPE_MISMATCH,
            f"invalid image status: {status!r}",
            f"{base}/status",
        )


# =============================================================================
# Entry Points
# =============================================================================


def validate_record(record: Any) -> ValidationReport:
    """
    Validate one raw collection record against the listing contract.

    Args:
        record: Parsed JSON object for a RawCollectionRecord

    Returns:
        ValidationReport (same input always yields the same report)

    Raises:
        MalformedInputError: If record is not a mapping
    """
    if not isinstance(record, Mapping):
        raise MalformedInputError(
            f"record must be a JSON object, got {type(record).__name__}"
        )

    issues = _IssueList()
    _check_top_level(issues, record)
    _check_urls(issues, record)
    _check_collected_at(issues, record)
    _check_payload(issues, record)
    _check_normalized(issues, record)
    _check_images(issues, record)

    report = build_report(issues)
    logger.debug(
        "Validated %s/%s: valid=%s errors=%d warnings=%d",
        record.get("platform_code"),
        record.get("external_id"),
        report.valid,
        report.error_count,
        report.warn_count,
    )
    return report


def load_record(text: Union[str, bytes]) -> Any:
    """
    Parse JSON text into a record object.

    Raises:
        MalformedInputError: If the text is not JSON or not a JSON object
    """
    try:
        record = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, UnicodeDecodeError and oversized integer literals
        raise MalformedInputError(f"record is not valid JSON: {e}") from e
    if not isinstance(record, dict):
        raise MalformedInputError(
            f"record must be a JSON object, got {type(record).__name__}"
        )
    return record


def validate_json(text: Union[str, bytes]) -> ValidationReport:
    """Parse and validate a record in one step."""
    return validate_record(load_record(text))
