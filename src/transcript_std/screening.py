"""Upload-time transcription quality screening.

Flags problems typical of raw speech-to-text output so a reviewer can see
them next to the baseline validation of a new upload.  These flags do not
feed into the validation score.
"""

from __future__ import annotations

import re

from transcript_std.engine import RewriteEngine
from transcript_std.models.validation import ValidationIssue
from transcript_std.rules import RuleTable, default_rule_table

_AUDIO_QUALITY_RE = re.compile(r"\[unclear\]|\[inaudible\]|\?\?\?", re.IGNORECASE)
_TRANSCRIPTION_ERROR_RE = re.compile(
    r"\b(?:ejaculation|(?:could|should|would) of\b(?!\s+course\b)|pacific specific)\b",
    re.IGNORECASE,
)


def screen_quality(text: str, rule_table: RuleTable | None = None) -> list[ValidationIssue]:
    """Flag transcription-quality problems in an uploaded original.

    Args:
        text: The uploaded transcript.
        rule_table: Table whose ``corrections`` rules build the suggested
            fix for a mis-transcribed line.  Defaults to the built-in table.

    Returns:
        ``audio_quality`` warnings for unclear-audio markers and
        ``transcription_error`` errors for known mis-hearings, in line
        order.
    """
    table = rule_table if rule_table is not None else default_rule_table()
    corrector = RewriteEngine(table.subset(categories=["corrections"]))
    issues: list[ValidationIssue] = []

    for line_number, line in enumerate(text.split("\n"), start=1):
        if _AUDIO_QUALITY_RE.search(line):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="audio_quality",
                    message="Contains unclear audio markers",
                    severity="warning",
                )
            )
        if _TRANSCRIPTION_ERROR_RE.search(line):
            issues.append(
                ValidationIssue(
                    line=line_number,
                    type="transcription_error",
                    message="Contains common transcription errors",
                    severity="error",
                    suggestion=corrector.apply(line).processed_text,
                )
            )

    return issues
