"""Pydantic models for detective and interview metadata.

These arrive from the storage layer as loose key-value records, so every
field is an optional string and unknown keys are ignored.  Blank or
whitespace-only values are normalized to ``None`` so that "missing" has a
single representation for the header/footer generators.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class DetectiveInfo(BaseModel):
    """Interviewing detective.

    Attributes:
        name: Detective's name as it should appear in the header.
        badge: Personnel (P#) number.
        section: Detail/section name, e.g. ``"Homicide"``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    badge: str | None = None
    section: str | None = None

    @field_validator("name", "badge", "section", mode="before")
    @classmethod
    def _normalize_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def is_complete(self) -> bool:
        """Whether name, badge and section are all present."""
        return bool(self.name and self.badge and self.section)


class InterviewInfo(BaseModel):
    """When and where the interview took place.

    Attributes:
        date: Interview date as ``YYYY-MM-DD``.
        time: Interview time as ``HH:MM`` (rendered with the colon removed).
        location: Place the statement was completed.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    date: str | None = None
    time: str | None = None
    location: str | None = None

    @field_validator("date", "time", "location", mode="before")
    @classmethod
    def _normalize_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)
