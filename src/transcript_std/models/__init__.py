"""Data models for transcript-std."""

from __future__ import annotations

from transcript_std.models.metadata import DetectiveInfo, InterviewInfo
from transcript_std.models.rules import (
    RULE_CATEGORIES,
    ComputedReplacement,
    LiteralReplacement,
    ProcessingRule,
    RuleApplication,
)
from transcript_std.models.speakers import (
    STANDARD_SPEAKERS,
    SpeakerDefinition,
    build_speaker_set,
    parse_speaker_spec,
)
from transcript_std.models.validation import ValidationIssue, ValidationResult, compute_score
from transcript_std.models.version import DocumentVersion

__all__ = [
    "RULE_CATEGORIES",
    "STANDARD_SPEAKERS",
    "ComputedReplacement",
    "DetectiveInfo",
    "DocumentVersion",
    "InterviewInfo",
    "LiteralReplacement",
    "ProcessingRule",
    "RuleApplication",
    "SpeakerDefinition",
    "ValidationIssue",
    "ValidationResult",
    "build_speaker_set",
    "compute_score",
    "parse_speaker_spec",
]
