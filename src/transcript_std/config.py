"""Configuration loading for transcript-std.

Reads settings from environment variables (with .env support via
python-dotenv).  Every setting is optional; invalid values raise
:class:`ConfigError`.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from transcript_std.models.metadata import DetectiveInfo
from transcript_std.models.speakers import (
    STANDARD_SPEAKERS,
    SpeakerDefinition,
    build_speaker_set,
    parse_speaker_spec,
)


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        speakers: Speaker set; the standard ``Q:``/``A:`` pair unless
            ``SPEAKER_LABELS`` is set.
        corrections: Installation-specific phrase corrections loaded from
            ``CORRECTIONS_FILE``.
        detective: Default detective metadata for the CLI.
    """

    log_level: str = "INFO"
    speakers: tuple[SpeakerDefinition, ...] = STANDARD_SPEAKERS
    corrections: dict[str, str] = field(default_factory=dict)
    detective: DetectiveInfo = field(default_factory=DetectiveInfo)

    @property
    def speaker_type(self) -> str:
        """``"standard"`` or ``"custom"``."""
        return "standard" if self.speakers == STANDARD_SPEAKERS else "custom"


def parse_speaker_labels(raw: str) -> tuple[SpeakerDefinition, ...]:
    """Parse ``"MAN:=Male witness;WOMAN:=Female witness"``.

    Raises:
        ValueError: On an empty label or a duplicate label.
    """
    specs = [part for part in (p.strip() for p in raw.split(";")) if part]
    return build_speaker_set(parse_speaker_spec(spec) for spec in specs)


def load_corrections(path: Path) -> dict[str, str]:
    """Load a JSON object of ``{"garbled phrase": "correction"}`` pairs.

    Raises:
        ConfigError: If the file is missing, not valid JSON, or not a flat
            string-to-string object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"CORRECTIONS_FILE not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"CORRECTIONS_FILE is not valid JSON: {path}: {exc}") from exc

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigError(f"CORRECTIONS_FILE must map phrases to strings: {path}")
    return data


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.

    Recognised variables: ``LOG_LEVEL``, ``SPEAKER_LABELS``,
    ``CORRECTIONS_FILE``, ``DETECTIVE_NAME``, ``DETECTIVE_BADGE``,
    ``DETECTIVE_SECTION``.

    Raises:
        ConfigError: If any variable holds an invalid value.  The message
            names **all** offending variables.
    """
    load_dotenv()

    values: dict = {}
    problems: list[str] = []

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    if log_level:
        if isinstance(logging.getLevelName(log_level.upper()), int):
            values["log_level"] = log_level.upper()
        else:
            problems.append(f"LOG_LEVEL (unknown level {log_level!r})")

    speaker_labels = os.environ.get("SPEAKER_LABELS", "").strip()
    if speaker_labels:
        try:
            speakers = parse_speaker_labels(speaker_labels)
        except (ValueError, ValidationError) as exc:
            problems.append(f"SPEAKER_LABELS ({exc})")
        else:
            if speakers:
                values["speakers"] = speakers

    corrections_file = os.environ.get("CORRECTIONS_FILE", "").strip()
    if corrections_file:
        try:
            values["corrections"] = load_corrections(Path(corrections_file))
        except ConfigError as exc:
            problems.append(str(exc))

    values["detective"] = DetectiveInfo(
        name=os.environ.get("DETECTIVE_NAME"),
        badge=os.environ.get("DETECTIVE_BADGE"),
        section=os.environ.get("DETECTIVE_SECTION"),
    )

    if problems:
        raise ConfigError("Invalid configuration: " + "; ".join(problems))

    return Settings(**values)
