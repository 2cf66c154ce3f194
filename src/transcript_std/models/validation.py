"""Validation result models.

Plain frozen dataclasses, mirroring the transcript parser's own result
types: they are produced in-process and never deserialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Severity = Literal["error", "warning", "info"]

# Score deductions per issue, by severity.
SEVERITY_WEIGHTS: dict[str, int] = {"error": 15, "warning": 8, "info": 3}


@dataclass(frozen=True)
class ValidationIssue:
    """A single deviation from the style guide.

    Attributes:
        line: 1-based line number within the scanned text.
        type: Issue category, e.g. ``"header"`` or ``"discourse_marker"``.
        message: Human-readable description.
        severity: ``"error"``, ``"warning"``, or ``"info"``.
        suggestion: Corrected version of the offending line, if known.
    """

    line: int
    type: str
    message: str
    severity: Severity
    suggestion: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Issues found in a document plus the resulting quality score.

    Attributes:
        issues: Issues in ascending line order.
        score: Integer quality score, 0-100.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    score: int = 100

    def count(self, severity: Severity) -> int:
        """Number of issues with the given *severity*."""
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def error_count(self) -> int:
        return self.count("error")

    @property
    def warning_count(self) -> int:
        return self.count("warning")

    @property
    def info_count(self) -> int:
        return self.count("info")

    @property
    def has_errors(self) -> bool:
        """Whether any error-severity issue was found."""
        return self.error_count > 0

    def issues_for_line(self, line: int) -> list[ValidationIssue]:
        """Return the issues reported against *line*."""
        return [issue for issue in self.issues if issue.line == line]


def compute_score(issues: list[ValidationIssue]) -> int:
    """Apply the issue-weighted scoring formula.

    ``max(0, 100 - 15 * errors - 8 * warnings - 3 * infos)``.
    """
    penalty = sum(SEVERITY_WEIGHTS[issue.severity] for issue in issues)
    return max(0, round(100 - penalty))
