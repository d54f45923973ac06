"""
Listing Data Contract

Structural and semantic rules every collected listing record must satisfy
before persistence. Records from every source platform are checked
against the same contract; defects are returned as issues, never raised.
"""

from core.contract.schema import (
    IssueCode,
    IssueLevel,
    LeaseType,
    ImageStatus,
    ValidationIssue,
    ValidationReport,
    MalformedInputError,
    REQUIRED_RECORD_FIELDS,
    ISSUE_CODE_DESCRIPTIONS,
)
from core.contract.report import (
    build_report,
    blocking_issues,
    exclude_missing_field_issues,
)
from core.contract.validator import (
    validate_record,
    validate_json,
    load_record,
)

__all__ = [
    # Schema
    "IssueCode",
    "IssueLevel",
    "LeaseType",
    "ImageStatus",
    "ValidationIssue",
    "ValidationReport",
    "MalformedInputError",
    "REQUIRED_RECORD_FIELDS",
    "ISSUE_CODE_DESCRIPTIONS",
    # Report
    "build_report",
    "blocking_issues",
    "exclude_missing_field_issues",
    # Validation
    "validate_record",
    "validate_json",
    "load_record",
]
