"""Header and footer generation for statement transcripts.

Both functions are pure string builders.  When a required field is
missing they return ``""`` and the caller omits that section, so a full
document is always ``header + body + footer``.
"""

from __future__ import annotations

import datetime as dt

from transcript_std.exceptions import MetadataError
from transcript_std.models.metadata import DetectiveInfo, InterviewInfo

HEADER_MARKER = "The following is the transcription of a tape-recorded interview"
FOOTER_MARKER = "THIS STATEMENT WAS COMPLETED AT"

_ORDINAL_DAYS = (
    "FIRST", "SECOND", "THIRD", "FOURTH", "FIFTH", "SIXTH", "SEVENTH",
    "EIGHTH", "NINTH", "TENTH", "ELEVENTH", "TWELFTH", "THIRTEENTH",
    "FOURTEENTH", "FIFTEENTH", "SIXTEENTH", "SEVENTEENTH", "EIGHTEENTH",
    "NINETEENTH", "TWENTIETH", "TWENTY-FIRST", "TWENTY-SECOND",
    "TWENTY-THIRD", "TWENTY-FOURTH", "TWENTY-FIFTH", "TWENTY-SIXTH",
    "TWENTY-SEVENTH", "TWENTY-EIGHTH", "TWENTY-NINTH", "THIRTIETH",
    "THIRTY-FIRST",
)

_MONTHS = (
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE", "JULY",
    "AUGUST", "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
)


def _coerce_detective(detective: DetectiveInfo | dict | None) -> DetectiveInfo:
    if detective is None:
        return DetectiveInfo()
    if isinstance(detective, DetectiveInfo):
        return detective
    return DetectiveInfo.model_validate(detective)


def _coerce_interview(interview: InterviewInfo | dict | None) -> InterviewInfo:
    if interview is None:
        return InterviewInfo()
    if isinstance(interview, InterviewInfo):
        return interview
    return InterviewInfo.model_validate(interview)


def parse_interview_date(value: str) -> dt.date:
    """Parse an interview date given as ``YYYY-MM-DD``.

    A full ISO datetime (``2024-03-15T14:30``) is accepted and its date
    part used.  The date is taken as written, with no timezone shift.

    Raises:
        MetadataError: If *value* is not an ISO date.
    """
    try:
        return dt.date.fromisoformat(value[:10])
    except ValueError as exc:
        raise MetadataError("interview date", value, "expected YYYY-MM-DD") from exc


def format_hours(time_value: str) -> str:
    """Render a time for the header/footer: ``"14:30"`` -> ``"1430"``.

    Only the first colon is removed; no 12/24-hour conversion happens.
    """
    return time_value.replace(":", "", 1)


def ordinal_day(day: int) -> str:
    """Spelled-out uppercase ordinal for a day of the month (1-31)."""
    return _ORDINAL_DAYS[day - 1]


def generate_header(
    detective: DetectiveInfo | dict | None,
    interview: InterviewInfo | dict | None,
) -> str:
    """Build the statement preamble.

    Args:
        detective: Detective name, badge and section.
        interview: Interview date and time (location is not used).

    Returns:
        The header followed by a blank line, or ``""`` if any of name,
        badge, section, date or time is missing.

    Raises:
        MetadataError: If the date is present but not ``YYYY-MM-DD``.
    """
    det = _coerce_detective(detective)
    info = _coerce_interview(interview)
    if not (det.is_complete and info.date and info.time):
        return ""

    date = parse_interview_date(info.date)
    return (
        f"{HEADER_MARKER} conducted by DETECTIVE {det.name}, "
        f"P# {det.badge}, LVMPD {det.section} Detail, "
        f"on {date:%m/%d/%Y} at {format_hours(info.time)} hours.\n\n"
    )


def generate_footer(interview: InterviewInfo | dict | None) -> str:
    """Build the closing statement.

    Returns:
        A blank line followed by the footer, or ``""`` if date, time or
        location is missing.

    Raises:
        MetadataError: If the date is present but not ``YYYY-MM-DD``.
    """
    info = _coerce_interview(interview)
    if not (info.date and info.time and info.location):
        return ""

    date = parse_interview_date(info.date)
    return (
        f"\n\n{FOOTER_MARKER} {info.location.upper()} ON THE "
        f"{ordinal_day(date.day)} DAY OF {_MONTHS[date.month - 1]}, {date.year} "
        f"AT {format_hours(info.time)} HOURS."
    )
