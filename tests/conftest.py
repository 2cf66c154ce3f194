"""Shared fixtures for transcript-std tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from transcript_std.header import generate_footer, generate_header
from transcript_std.models.metadata import DetectiveInfo, InterviewInfo

_CONFIG_VARS = (
    "LOG_LEVEL",
    "SPEAKER_LABELS",
    "CORRECTIONS_FILE",
    "DETECTIVE_NAME",
    "DETECTIVE_BADGE",
    "DETECTIVE_SECTION",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all transcript-std environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("transcript_std.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _CONFIG_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def detective() -> DetectiveInfo:
    return DetectiveInfo(name="J. SMITH", badge="1234", section="Homicide")


@pytest.fixture()
def interview() -> InterviewInfo:
    return InterviewInfo(date="2024-03-15", time="14:30", location="metro hq")


@pytest.fixture()
def header_text(detective: DetectiveInfo, interview: InterviewInfo) -> str:
    return generate_header(detective, interview)


@pytest.fixture()
def footer_text(interview: InterviewInfo) -> str:
    return generate_footer(interview)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
