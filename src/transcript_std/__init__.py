"""transcript-std: interview transcript standardization.

Rewrites raw interview transcripts into the LVMPD statement format
(header, speaker paragraphs with hanging indents, footer) and scores
documents against the style guide.
"""

from __future__ import annotations

from transcript_std.engine import RewriteEngine, RewriteResult, apply_rules
from transcript_std.exceptions import (
    MetadataError,
    RuleApplicationError,
    RuleTableError,
    TranscriptError,
)
from transcript_std.formatter import format_structure
from transcript_std.header import generate_footer, generate_header
from transcript_std.models.metadata import DetectiveInfo, InterviewInfo
from transcript_std.models.rules import ProcessingRule, RuleApplication
from transcript_std.models.speakers import STANDARD_SPEAKERS, SpeakerDefinition
from transcript_std.models.validation import ValidationIssue, ValidationResult
from transcript_std.models.version import DocumentVersion
from transcript_std.pipeline import ingest_transcript, process_transcript
from transcript_std.rules import RuleTable, build_rule_table, default_rule_table
from transcript_std.validator import Validator, validate

__version__ = "0.1.0"

__all__ = [
    "STANDARD_SPEAKERS",
    "DetectiveInfo",
    "DocumentVersion",
    "InterviewInfo",
    "MetadataError",
    "ProcessingRule",
    "RewriteEngine",
    "RewriteResult",
    "RuleApplication",
    "RuleApplicationError",
    "RuleTable",
    "RuleTableError",
    "SpeakerDefinition",
    "TranscriptError",
    "ValidationIssue",
    "ValidationResult",
    "Validator",
    "apply_rules",
    "build_rule_table",
    "default_rule_table",
    "format_structure",
    "generate_footer",
    "generate_header",
    "ingest_transcript",
    "process_transcript",
    "validate",
]
