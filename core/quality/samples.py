"""
Gate Samples - Typed Access to Per-Record Sample Outcomes

A sample is one collected-and-evaluated record inside a platform run. The
collection stage emits samples as loosely typed JSON objects; SampleView
reads them through safe accessors so the gate never faults on a missing
or oddly typed flag.

sample_from_record derives a sample from a record and its contract
report, so validated batches can feed the gate directly.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Final, Optional

from core.contract.predicates import (
    as_list,
    as_mapping,
    get_path,
    is_absolute_url,
    is_truthy,
    is_yes_marker,
)
from core.contract.report import blocking_issues
from core.contract.schema import IssueCode, ValidationReport


PENDING_STATUS: Final = "PENDING"
SUCCESS_STATUS: Final = "SUCCESS"
FAILED_STATUS: Final = "FAILED"

REQUIRED_FIELD_MISSING_ERROR: Final = "required_field_missing"


def _as_count(value: Any) -> int:
    """Non-negative integer count; anything unparseable counts as zero."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


class SampleView:
    """Read-only view over one raw sample object."""

    __slots__ = ("_raw",)

    def __init__(self, raw: Any) -> None:
        self._raw = as_mapping(raw)

    @property
    def status(self) -> Optional[str]:
        status = self._raw.get("sample_status")
        return status if isinstance(status, str) else None

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING_STATUS

    @property
    def has_required_fields(self) -> bool:
        return is_yes_marker(self._raw.get("requiredFields"))

    @property
    def has_contract_violations(self) -> bool:
        return is_truthy(self._raw.get("contract_violations"))

    @property
    def has_parse_error(self) -> bool:
        return is_truthy(self._raw.get("parse_error"))

    @property
    def is_parse_failure(self) -> bool:
        """A pending sample is never a parse failure."""
        if self.is_pending:
            return False
        return self.has_parse_error or self.has_contract_violations

    @property
    def images_count(self) -> int:
        return _as_count(self._raw.get("images_cnt"))

    @property
    def images_valid_count(self) -> int:
        return _as_count(self._raw.get("images_valid_cnt"))

    @property
    def image_valid_ratio(self) -> Optional[float]:
        """Share of valid images, or None when the sample declares none."""
        if self.images_count == 0:
            return None
        return self.images_valid_count / self.images_count


def sample_from_record(
    record: Mapping,
    report: ValidationReport,
) -> dict[str, Any]:
    """
    Derive a gate sample from a validated record.

    Args:
        record: The raw collection record that was validated
        report: Its ValidationReport

    Returns:
        Sample dict in the shape the gate consumes
    """
    missing_required = any(
        issue.is_error for issue in report.issues_with_code(IssueCode.REQ_FIELD_MISSING)
    )
    parse_error = REQUIRED_FIELD_MISSING_ERROR if missing_required else None

    images = [as_mapping(image) for image in as_list(get_path(record, "normalized_images"))]
    valid_images = [image for image in images if is_absolute_url(image.get("source_url"))]

    return {
        "sample_status": FAILED_STATUS if parse_error else SUCCESS_STATUS,
        "source_id": record.get("external_id"),
        "source_url": record.get("source_url"),
        "requiredFields": "N" if missing_required else "Y",
        "contract_violations": len(blocking_issues(report.issues)),
        "parse_error": parse_error,
        "images_cnt": len(images),
        "images_valid_cnt": len(valid_images),
    }
