"""Style-guide validator and quality scoring.

The validator inspects any document (a fresh upload or a fully processed
statement) and reports line-addressed issues plus a 0-100 score.  It does
not depend on the rewrite engine; it only shares the pattern constants
from :mod:`transcript_std.rules` so both agree on what a violation is.

Per-line checks, in the order they are reported for a line:

========================  ========  ===========================================
type                      severity  trigger
========================  ========  ===========================================
speaker_identification    warning   content line without a speaker label
discourse_marker          info      ``Mh`` not written as ``Mh-Mh``
number_format             info      a whole-word number 1-10 in digits
time_format               warning   ``3:00pm`` (no space before am/pm)
date_format               info      ordinal suffix such as ``2nd``
punctuation               warning   speaker line not ending in ``.``/``!``/``?``
capitalization            warning   lowercase letter right after a label
========================  ========  ===========================================

Document-level checks add a ``header`` error at line 1 and a ``footer``
error at the last line when the respective marker text is absent.

Score: ``max(0, 100 - 15 * errors - 8 * warnings - 3 * infos)``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from transcript_std.formatter import HANGING_INDENT
from transcript_std.header import FOOTER_MARKER, HEADER_MARKER
from transcript_std.models.speakers import SpeakerDefinition
from transcript_std.models.validation import ValidationIssue, ValidationResult, compute_score
from transcript_std.rules import (
    MH_PATTERN,
    NUMBER_PATTERN,
    ORDINAL_PATTERN,
    TIME_MISSING_SPACE_PATTERN,
)

logger = logging.getLogger(__name__)

# Any uppercase label at the start of a line, e.g. "Q:" or "MAN:".
_LABEL_RE = re.compile(r"^[A-Z][A-Z0-9]*:")
_LABEL_THEN_LOWER_RE = re.compile(r"^([A-Z][A-Z0-9]*:)\s*([a-z])")
_TERMINAL_PUNCTUATION_RE = re.compile(r"[.!?]$")

# Lines that belong to the header/footer rather than a speaker.
_SENTINEL_PREFIXES = ("The following", "THIS STATEMENT")

_MIN_PUNCTUATION_CHECK_LENGTH = 10


class Validator:
    """Checks documents against the style guide.

    Args:
        speakers: Speaker set for the transcript.  When empty, any
            ``UPPERCASE:`` label counts as speaker identification.
    """

    def __init__(self, speakers: Sequence[SpeakerDefinition] = ()) -> None:
        self.speakers = tuple(speakers)
        self._labels = tuple(s.label for s in self.speakers)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, text: str) -> ValidationResult:
        """Validate *text* and score it.

        Returns:
            A :class:`ValidationResult` with issues in ascending line order.
            Line numbers always fall within ``[1, line_count]``; empty text
            counts as one line.
        """
        lines = text.split("\n")
        issues: list[ValidationIssue] = []
        previous_has_speaker = False

        for line_number, line in enumerate(lines, start=1):
            issues.extend(self._check_line(line, line_number, previous_has_speaker))
            if line.strip():
                previous_has_speaker = self._has_label(line) or (
                    previous_has_speaker and line.startswith(HANGING_INDENT)
                )

        if HEADER_MARKER not in text:
            issues.append(
                ValidationIssue(
                    line=1, type="header", message="Missing LVMPD header", severity="error"
                )
            )
        if FOOTER_MARKER not in text:
            issues.append(
                ValidationIssue(
                    line=len(lines), type="footer", message="Missing LVMPD footer", severity="error"
                )
            )

        # Stable sort keeps per-line check order.
        issues.sort(key=lambda issue: issue.line)
        score = compute_score(issues)
        logger.debug(
            "Validated %d line(s): %d issue(s), score %d", len(lines), len(issues), score
        )
        return ValidationResult(issues=issues, score=score)

    # ------------------------------------------------------------------
    # Line checks
    # ------------------------------------------------------------------

    def _has_label(self, line: str) -> bool:
        if self._labels:
            return line.startswith(self._labels)
        return bool(_LABEL_RE.match(line))

    def _check_line(
        self, line: str, line_number: int, previous_has_speaker: bool
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        stripped = line.strip()
        if not stripped:
            return issues

        # Hanging-indent lines continue the preceding speaker's turn.
        is_continuation = previous_has_speaker and line.startswith(HANGING_INDENT)
        if (
            not stripped.startswith(_SENTINEL_PREFIXES)
            and not is_continuation
            and not self._has_label(line)
        ):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="speaker_identification",
                    message="Line missing speaker identification",
                    severity="warning",
                )
            )

        if MH_PATTERN.search(line):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="discourse_marker",
                    message="Discourse marker should be standardized",
                    severity="info",
                    suggestion=MH_PATTERN.sub("Mh-Mh", line),
                )
            )

        if NUMBER_PATTERN.search(line):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="number_format",
                    message="Numbers 1-10 should be spelled out",
                    severity="info",
                )
            )

        if TIME_MISSING_SPACE_PATTERN.search(line):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="time_format",
                    message="Time format should include space before am/pm",
                    severity="warning",
                )
            )

        if ORDINAL_PATTERN.search(line):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="date_format",
                    message="Remove ordinal suffixes from dates",
                    severity="info",
                    suggestion=ORDINAL_PATTERN.sub(r"\1", line),
                )
            )

        content = line.rstrip()
        if (
            _LABEL_RE.match(content)
            and len(content) > _MIN_PUNCTUATION_CHECK_LENGTH
            and not _TERMINAL_PUNCTUATION_RE.search(content)
        ):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="punctuation",
                    message="Statement should end with punctuation",
                    severity="warning",
                )
            )

        lower_match = _LABEL_THEN_LOWER_RE.match(line)
        if lower_match:
            label, letter = lower_match.groups()
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="capitalization",
                    message="First word after speaker label should be capitalized",
                    severity="warning",
                    suggestion=f"{label} {letter.upper()}{line[lower_match.end():]}",
                )
            )

        return issues


def validate(
    text: str,
    speakers: Sequence[SpeakerDefinition] = (),
) -> ValidationResult:
    """Validate *text* against the style guide.

    Args:
        text: Complete document (header, body and footer).
        speakers: The transcript's speaker set.

    Returns:
        The issues found and the resulting score.
    """
    return Validator(speakers).validate(text)
