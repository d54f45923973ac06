"""
Validation Report Builder

Aggregates a validator's issue list into a ValidationReport.
"""

from __future__ import annotations

from typing import Iterable

from core.contract.schema import (
    IssueCode,
    IssueLevel,
    ValidationIssue,
    ValidationReport,
)


def exclude_missing_field_issues(
    issues: Iterable[ValidationIssue],
) -> list[ValidationIssue]:
    """
    Drop REQ_FIELD_MISSING issues before the validity check.

    Missing-field findings are reported to operators and counted, but on
    their own they do not make a record invalid.
    """
    return [issue for issue in issues if issue.code != IssueCode.REQ_FIELD_MISSING]


def blocking_issues(issues: Iterable[ValidationIssue]) -> list[ValidationIssue]:
    """ERROR issues that survive the missing-field filter."""
    return [issue for issue in exclude_missing_field_issues(issues) if issue.is_error]


def count_by_level(issues: Iterable[ValidationIssue]) -> dict[str, int]:
    counts = {level.value: 0 for level in IssueLevel}
    for issue in issues:
        counts[issue.level.value] += 1
    return counts


def build_report(issues: Iterable[ValidationIssue]) -> ValidationReport:
    """
    Build the immutable report for one record.

    Args:
        issues: Issues in the order the validator produced them

    Returns:
        ValidationReport with valid, per-level counts and the issue list
    """
    issues = tuple(issues)
    counts = count_by_level(issues)
    return ValidationReport(
        valid=len(blocking_issues(issues)) == 0,
        error_count=counts[IssueLevel.ERROR.value],
        warn_count=counts[IssueLevel.WARN.value],
        issues=issues,
    )
