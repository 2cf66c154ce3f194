"""Custom exceptions for the transcript standardization pipeline.

Exception hierarchy::

    TranscriptError           (base for all pipeline errors)
    +-- RuleApplicationError  (a rule's substitution failed)
    +-- RuleTableError        (invalid rule table definition)
    +-- MetadataError         (metadata present but unparseable)

Missing metadata is never an error: the header/footer generators return
an empty string and the caller omits that section.
"""

from __future__ import annotations


class TranscriptError(Exception):
    """Base exception for transcript processing failures."""


class RuleApplicationError(TranscriptError):
    """Raised when a processing rule fails to produce its replacement.

    Covers invalid group references in a literal template, a computed
    replacement raising, or a computed replacement returning something
    other than a string.  The underlying exception is chained.

    Attributes:
        rule_name: Name of the rule that failed.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        super().__init__(f"Rule {rule_name!r} failed: {message}")
        self.rule_name = rule_name


class RuleTableError(TranscriptError, ValueError):
    """Raised when a rule table is malformed (e.g. duplicate rule names)."""


class MetadataError(TranscriptError, ValueError):
    """Raised when interview metadata is present but cannot be parsed.

    Attributes:
        field: Name of the offending metadata field.
        value: The raw value that failed to parse.
    """

    def __init__(self, field: str, value: str, message: str) -> None:
        super().__init__(f"Invalid {field} {value!r}: {message}")
        self.field = field
        self.value = value
