"""Pipeline orchestrator for transcript standardization.

Two entry points mirror the lifecycle of a transcript record:

- :func:`ingest_transcript` -- on upload: baseline validation, quality
  screening, and the ``original`` version snapshot.
- :func:`process_transcript` -- on demand: rewrite rules, structural
  formatting, header/footer assembly, final validation, and the
  ``processed`` version snapshot.

Errors propagate to the caller, which marks the record as failed; no
partial results are returned.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from transcript_std.engine import RewriteEngine
from transcript_std.formatter import format_structure
from transcript_std.header import generate_footer, generate_header
from transcript_std.log import log_stage
from transcript_std.models.metadata import DetectiveInfo, InterviewInfo
from transcript_std.models.rules import RuleApplication
from transcript_std.models.speakers import STANDARD_SPEAKERS, SpeakerDefinition
from transcript_std.models.validation import ValidationIssue, ValidationResult
from transcript_std.models.version import DocumentVersion
from transcript_std.rules import RuleTable
from transcript_std.screening import screen_quality
from transcript_std.summary import (
    count_corrections,
    generate_processing_summary,
    improvement_score,
)
from transcript_std.validator import validate
from transcript_std.versions import VersionLedger

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass
class IntakeResult:
    """Everything computed for a freshly uploaded transcript.

    Attributes:
        content: The uploaded text, unchanged.
        validation: Baseline validation of the upload.
        quality_flags: Transcription-quality flags (not scored).
        version: The ``original`` snapshot.
    """

    content: str
    validation: ValidationResult
    quality_flags: list[ValidationIssue] = field(default_factory=list)
    version: DocumentVersion | None = None


@dataclass
class ProcessingResult:
    """Output of one processing run.

    Attributes:
        final_text: ``header + body + footer``.
        header: Generated header, or ``""`` when metadata was incomplete.
        body: Rewritten and formatted transcript body.
        footer: Generated footer, or ``""`` when metadata was incomplete.
        applied_rules: Ledger of rules that changed the text.
        validation: Validation of *final_text*; its score is authoritative.
        summary: Category-grouped description of the changes.
        corrections: Total number of rewritten matches.
        improvement: Bonus-based improvement figure for display.
        version: The ``processed`` snapshot.
        duration_seconds: Wall-clock time for the run.
    """

    final_text: str
    header: str = ""
    body: str = ""
    footer: str = ""
    applied_rules: list[RuleApplication] = field(default_factory=list)
    validation: ValidationResult = field(default_factory=ValidationResult)
    summary: str = ""
    corrections: int = 0
    improvement: int = 0
    version: DocumentVersion | None = None
    duration_seconds: float = 0.0


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def ingest_transcript(
    text: str,
    speakers: Sequence[SpeakerDefinition] | None = None,
    ledger: VersionLedger | None = None,
    rule_table: RuleTable | None = None,
) -> IntakeResult:
    """Validate a new upload and record its ``original`` version.

    Args:
        text: Raw uploaded transcript.
        speakers: Speaker set; defaults to the standard ``Q:``/``A:`` pair.
        ledger: Ledger to append the snapshot to.  A fresh ledger is used
            when omitted.
        rule_table: Table whose corrections build the suggestions on
            quality flags.  Defaults to the built-in table.

    Returns:
        An :class:`IntakeResult`.
    """
    speaker_set = tuple(speakers) if speakers else STANDARD_SPEAKERS
    ledger = ledger if ledger is not None else VersionLedger()

    with log_stage(logger, "Baseline validation"):
        validation = validate(text, speaker_set)
        flags = screen_quality(text, rule_table)

    logger.info(
        "Baseline score %d (%d issue(s), %d quality flag(s))",
        validation.score,
        len(validation.issues),
        len(flags),
    )
    version = ledger.record_original(text, score=validation.score)
    return IntakeResult(content=text, validation=validation, quality_flags=flags, version=version)


def process_transcript(
    text: str,
    detective: DetectiveInfo | dict | None = None,
    interview: InterviewInfo | dict | None = None,
    speakers: Sequence[SpeakerDefinition] | None = None,
    rule_table: RuleTable | None = None,
    ledger: VersionLedger | None = None,
    baseline_score: int | None = None,
) -> ProcessingResult:
    """Standardize *text* into a complete statement document.

    Stages:

    1. **Rewrite** -- apply the rule table in priority order.
    2. **Format** -- speaker paragraphs with hanging indents.
    3. **Assemble** -- ``header + body + footer``; either may be empty
       when metadata is incomplete.
    4. **Validate** -- score the final document.

    Args:
        text: Original transcript text.
        detective: Detective name/badge/section.
        interview: Interview date/time/location.
        speakers: Speaker set; defaults to the standard pair.
        rule_table: Rules to apply; defaults to the built-in table.
        ledger: Ledger to append the ``processed`` snapshot to.
        baseline_score: Score of the original upload, used only for the
            improvement figure.  Computed when omitted.

    Returns:
        A :class:`ProcessingResult`.

    Raises:
        RuleApplicationError: If a rule fails.
        MetadataError: If the interview date cannot be parsed.
    """
    started = time.monotonic()
    speaker_set = tuple(speakers) if speakers else STANDARD_SPEAKERS
    ledger = ledger if ledger is not None else VersionLedger()

    with log_stage(logger, "Stage 1: Rewrite"):
        rewrite = RewriteEngine(rule_table).apply(text)

    with log_stage(logger, "Stage 2: Format"):
        body = format_structure(rewrite.processed_text, speaker_set)

    with log_stage(logger, "Stage 3: Assemble"):
        header = generate_header(detective, interview)
        footer = generate_footer(interview)
        if not header:
            logger.info("Header omitted: detective or interview metadata incomplete")
        if not footer:
            logger.info("Footer omitted: interview metadata incomplete")
        final_text = header + body + footer

    with log_stage(logger, "Stage 4: Validate"):
        validation = validate(final_text, speaker_set)

    if baseline_score is None:
        baseline_score = validate(text, speaker_set).score

    corrections = count_corrections(rewrite.applied_rules)
    version = ledger.record_processed(final_text, score=validation.score, corrections=corrections)

    result = ProcessingResult(
        final_text=final_text,
        header=header,
        body=body,
        footer=footer,
        applied_rules=rewrite.applied_rules,
        validation=validation,
        summary=generate_processing_summary(rewrite.applied_rules),
        corrections=corrections,
        improvement=improvement_score(
            rewrite.applied_rules, final_text, baseline_score, validation
        ),
        version=version,
        duration_seconds=time.monotonic() - started,
    )
    logger.info(
        "Processing complete: %d correction(s), score %d -> %d",
        corrections,
        baseline_score,
        validation.score,
    )
    return result


def read_transcript_file(file_path: str | Path) -> str:
    """Read a transcript file as UTF-8 text.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript file not found: {path}")
    return path.read_text(encoding="utf-8")


def process_transcript_file(file_path: str | Path, **kwargs) -> ProcessingResult:
    """Read *file_path* and run :func:`process_transcript` on it.

    Keyword arguments are passed through to :func:`process_transcript`.
    """
    return process_transcript(read_transcript_file(file_path), **kwargs)
