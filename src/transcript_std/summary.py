"""Human-readable summaries of processing and validation runs.

- :func:`generate_processing_summary` -- category-grouped list of the
  rules that changed a document.
- :func:`validation_summary` -- one-line score and issue counts.
- :func:`improvement_score` -- the bonus-based "improvement" figure shown
  in the before/after comparison.  It is a display aid only; the
  validation score is always :attr:`ValidationResult.score`.
"""

from __future__ import annotations

from collections.abc import Sequence

from transcript_std.header import FOOTER_MARKER, HEADER_MARKER
from transcript_std.models.rules import RULE_CATEGORIES, RuleApplication
from transcript_std.models.validation import ValidationResult

_CATEGORY_TITLES: dict[str, str] = {
    "structure": "Structure",
    "discourse": "Discourse Markers",
    "numbers": "Numbers",
    "dates": "Dates",
    "time": "Time",
    "corrections": "Transcription Corrections",
    "formatting": "Formatting",
    "punctuation": "Punctuation",
}

# Per-match bonus by rule category.
CATEGORY_BONUSES: dict[str, int] = {
    "discourse": 5,
    "numbers": 10,
    "dates": 8,
    "time": 8,
    "corrections": 15,
    "formatting": 5,
    "punctuation": 3,
}
_DEFAULT_BONUS = 5
_MARKER_BONUS = 20
_MAX_BONUS = 50


def count_corrections(applied: Sequence[RuleApplication]) -> int:
    """Total number of matches rewritten across *applied*."""
    return sum(application.match_count for application in applied)


def generate_processing_summary(applied: Sequence[RuleApplication]) -> str:
    """Describe what a rewrite run changed, grouped by category.

    Example::

        Discourse Markers:
          - Standardize discourse markers (2 matches)
        Dates:
          - Remove ordinal suffixes from dates (1 match)

    Returns:
        The summary, or ``"No changes were necessary."`` when *applied*
        is empty.
    """
    if not applied:
        return "No changes were necessary."

    lines: list[str] = []
    for category in RULE_CATEGORIES:
        entries = [a for a in applied if a.rule.category == category]
        if not entries:
            continue
        lines.append(f"{_CATEGORY_TITLES[category]}:")
        for entry in entries:
            noun = "match" if entry.match_count == 1 else "matches"
            label = entry.rule.description or entry.rule.name
            lines.append(f"  - {label} ({entry.match_count} {noun})")
    return "\n".join(lines)


def validation_summary(result: ValidationResult) -> str:
    """One-line summary such as ``"Score: 54/100. 2 errors. 2 warnings."``."""
    if not result.issues:
        return "Perfect! No issues found."

    parts = [f"Score: {result.score}/100."]
    for count, singular in (
        (result.error_count, "error"),
        (result.warning_count, "warning"),
        (result.info_count, "suggestion"),
    ):
        if count:
            parts.append(f"{count} {singular}{'s' if count > 1 else ''}.")
    return " ".join(parts)


def improvement_score(
    applied: Sequence[RuleApplication],
    final_text: str,
    baseline_score: int,
    final_result: ValidationResult,
) -> int:
    """Bonus-weighted improvement figure for the comparison view.

    Each applied match earns its category bonus; a header and a footer
    earn 20 each.  Half of that (capped at 50) is added to a base of
    ``100 - 3 * issues``, and the result never drops below the baseline
    score of the original upload.

    Returns:
        An integer in ``[0, 100]``.
    """
    bonus = sum(
        CATEGORY_BONUSES.get(a.rule.category, _DEFAULT_BONUS) * a.match_count for a in applied
    )
    if HEADER_MARKER in final_text:
        bonus += _MARKER_BONUS
    if FOOTER_MARKER in final_text:
        bonus += _MARKER_BONUS

    base = 100 - 3 * len(final_result.issues)
    capped_bonus = min(_MAX_BONUS, bonus * 0.5)
    return int(min(100, max(baseline_score, round(base + capped_bonus))))
