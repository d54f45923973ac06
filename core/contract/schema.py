"""
Listing Contract Schema - Issue Taxonomy and Report Types

Defines the vocabulary of the data contract: issue codes and levels, the
enumerations a normalized listing must respect, and the immutable issue
and report records produced by the validator.

Issues are data-quality findings, never exceptions. The only fault the
contract layer raises is MalformedInputError, for input that is not a
structured object at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class MalformedInputError(ValueError):
    """Input is not a structured object and cannot be validated."""


# =============================================================================
# Enums
# =============================================================================


class IssueLevel(Enum):
    """Severity of a validation issue."""

    ERROR = "ERROR"
    WARN = "WARN"


class IssueCode(Enum):
    """Classes of contract defect."""

    REQ_FIELD_MISSING = "REQ_FIELD_MISSING"
    REQ_FIELD_TYPE_MISMATCH = "REQ_FIELD_TYPE_MISMATCH"
    URL_INVALID = "URL_INVALID"
    IMAGE_URL_INVALID = "IMAGE_URL_INVALID"
    PRICE_PARSE_FAIL = "PRICE_PARSE_FAIL"
    AREA_PARSE_FAIL = "AREA_PARSE_FAIL"


class LeaseType(Enum):
    """
    Lease classification of a normalized listing.

    월세: monthly rent, 전세: lump-sum deposit lease, 단기: short term.
    """

    MONTHLY = "월세"
    JEONSE = "전세"
    SHORT_TERM = "단기"
    OTHER = "기타"

    @classmethod
    def from_string(cls, value: object) -> "LeaseType | None":
        for member in cls:
            if member.value == value:
                return member
        return None


class ImageStatus(Enum):
    """Download state of a normalized image."""

    QUEUED = "queued"
    DOWNLOADED = "downloaded"
    FAILED = "failed"
    SKIPPED = "skipped"

    @classmethod
    def from_string(cls, value: object) -> "ImageStatus | None":
        for member in cls:
            if member.value == value:
                return member
        return None


# =============================================================================
# Constants
# =============================================================================

# Top-level string fields that must be present and non-empty
REQUIRED_RECORD_STRING_FIELDS: Final[tuple[str, ...]] = (
    "schema_version",
    "collection_run_id",
    "platform_code",
    "external_id",
)

# Every top-level field of a raw collection record that must be present
REQUIRED_RECORD_FIELDS: Final[tuple[str, ...]] = REQUIRED_RECORD_STRING_FIELDS + (
    "source_url",
    "collected_at",
    "payload",
)

NORMALIZED_REQUIRED_STRING_FIELDS: Final[tuple[str, ...]] = (
    "canonical_key",
    "address_text",
    "address_code",
)

NORMALIZED_NUMERIC_FIELDS: Final[tuple[str, ...]] = (
    "rent_amount",
    "deposit_amount",
    "area_exclusive_m2",
)

LEASE_TYPE_VALUES: Final[tuple[str, ...]] = tuple(lt.value for lt in LeaseType)
IMAGE_STATUS_VALUES: Final[tuple[str, ...]] = tuple(st.value for st in ImageStatus)

ISSUE_CODE_DESCRIPTIONS: Final[dict[str, str]] = {
    "REQ_FIELD_MISSING": "Required or recommended field not provided",
    "REQ_FIELD_TYPE_MISMATCH": "Field present but of the wrong type or outside its enum",
    "URL_INVALID": "Listing URL is not an absolute http(s) URL",
    "IMAGE_URL_INVALID": "Image URL is not an absolute http(s) URL",
    "PRICE_PARSE_FAIL": "Price value in the raw payload could not be parsed",
    "AREA_PARSE_FAIL": "Neither exclusive nor gross area could be parsed",
}


# =============================================================================
# Issue and Report
# =============================================================================


@dataclass(frozen=True)
class ValidationIssue:
    """
    One finding against one field.

    path is a JSON-pointer-like locator, e.g. /normalized_images/2/status.
    """

    code: IssueCode
    level: IssueLevel
    path: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.level == IssueLevel.ERROR

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "level": self.level.value,
            "path": self.path,
            "message": self.message,
        }


@dataclass(frozen=True)
class ValidationReport:
    """
    Result of validating one raw collection record.

    error_count covers every ERROR issue; valid ignores REQ_FIELD_MISSING.
    Callers wanting a stricter gate inspect error_count directly.
    """

    valid: bool
    error_count: int
    warn_count: int
    issues: tuple[ValidationIssue, ...]

    @property
    def counts(self) -> dict[str, int]:
        return {
            IssueLevel.ERROR.value: self.error_count,
            IssueLevel.WARN.value: self.warn_count,
        }

    def issues_with_code(self, code: IssueCode) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.code == code]

    def to_dict(self) -> dict:
        """Convert report to the JSON boundary shape."""
        return {
            "valid": self.valid,
            "counts": self.counts,
            "errors": [issue.to_dict() for issue in self.issues],
        }
