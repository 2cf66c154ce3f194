"""Console report formatter for transcript-std.

Renders intake, processing and validation results as plain text.  The
``format_*`` functions return the string; the ``print_*`` wrappers write
it to stdout.
"""

from __future__ import annotations

import sys

from transcript_std.models.validation import ValidationIssue, ValidationResult
from transcript_std.pipeline import IntakeResult, ProcessingResult
from transcript_std.summary import validation_summary
from transcript_std.versions import compare_versions

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH

_SEVERITY_TAGS = {"error": "ERROR", "warning": "WARN", "info": "INFO"}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_validation_result(result: ValidationResult, title: str = "VALIDATION") -> str:
    """Render a :class:`ValidationResult` with one row per issue."""
    lines: list[str] = []
    _append_banner(lines, title)
    _append_issues(lines, result)
    lines.append(_SEPARATOR)
    return "\n".join(lines)


def format_processing_result(
    result: ProcessingResult,
    intake: IntakeResult | None = None,
) -> str:
    """Render a processing run, optionally with the upload baseline.

    Sections: baseline (when *intake* is given), changes applied, final
    validation, and a summary with scores and timing.
    """
    lines: list[str] = []
    _append_banner(lines, "TRANSCRIPT STANDARDIZATION")

    if intake is not None:
        lines.append("")
        lines.append("--- BASELINE ---")
        lines.append(f"  {validation_summary(intake.validation)}")
        if intake.quality_flags:
            lines.append(f"  Quality flags: {len(intake.quality_flags)}")
            for flag in intake.quality_flags:
                lines.append(f"    {_format_issue(flag)}")

    lines.append("")
    lines.append("--- CHANGES APPLIED ---")
    for summary_line in result.summary.splitlines():
        lines.append(f"  {summary_line}")

    lines.append("")
    lines.append("--- FINAL VALIDATION ---")
    _append_issue_rows(lines, result.validation)

    lines.append("")
    lines.append("--- SUMMARY ---")
    lines.append(f"  Corrections made: {result.corrections}")
    lines.append(f"  Header: {'present' if result.header else 'omitted'}")
    lines.append(f"  Footer: {'present' if result.footer else 'omitted'}")
    lines.append(f"  {validation_summary(result.validation)}")
    if intake is not None and intake.version is not None and result.version is not None:
        comparison = compare_versions(intake.version, result.version)
        lines.append(
            f"  Score: {intake.validation.score} -> {result.validation.score}"
            f" (improvement figure {result.improvement})"
        )
        lines.append(
            f"  Words: {comparison.original_words} -> {comparison.processed_words}"
            f", lines: {comparison.original_lines} -> {comparison.processed_lines}"
            f", similarity {comparison.similarity:.1f}%"
        )
    lines.append(f"  Duration: {result.duration_seconds:.2f}s")
    lines.append(_SEPARATOR)
    return "\n".join(lines)


def print_validation_result(result: ValidationResult) -> None:
    """Format and print a :class:`ValidationResult` to stdout."""
    sys.stdout.write(format_validation_result(result) + "\n")


def print_processing_result(
    result: ProcessingResult, intake: IntakeResult | None = None
) -> None:
    """Format and print a processing run to stdout."""
    sys.stdout.write(format_processing_result(result, intake) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_banner(lines: list[str], title: str) -> None:
    lines.append(_SEPARATOR)
    lines.append(f"  {title}")
    lines.append(_SEPARATOR)


def _append_issues(lines: list[str], result: ValidationResult) -> None:
    lines.append("")
    lines.append(f"  {validation_summary(result)}")
    _append_issue_rows(lines, result)


def _append_issue_rows(lines: list[str], result: ValidationResult) -> None:
    if not result.issues:
        lines.append("  No issues found.")
        return
    for issue in result.issues:
        lines.append(f"  {_format_issue(issue)}")
        if issue.suggestion is not None:
            lines.append(f"      suggestion: {issue.suggestion}")


def _format_issue(issue: ValidationIssue) -> str:
    """``[WARN] line 3 (capitalization): First word ...``"""
    tag = _SEVERITY_TAGS.get(issue.severity, issue.severity.upper())
    return f"[{tag}] line {issue.line} ({issue.type}): {issue.message}"
