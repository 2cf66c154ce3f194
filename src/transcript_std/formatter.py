"""Structural formatter: speaker paragraphs with hanging indents.

Lays out rewritten text the way the style guide requires::

    Q: First sentence of the question.
         Second sentence of the question.

    A: First sentence of the answer.

- Empty lines are dropped.
- A blank line separates turns by different speakers.
- The first sentence stays on the label line; each further sentence, and
  each continuation line, gets a five-space hanging indent.

Speaker lines are recognized by the configured speaker labels.  Without a
speaker set, any uppercase label such as ``Q:`` or ``MAN:`` is accepted.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from transcript_std.models.speakers import SpeakerDefinition

HANGING_INDENT = " " * 5

# Split after terminal punctuation, keeping the punctuation.
_SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")

_GENERIC_LABEL_RE = re.compile(r"^([A-Z][A-Z0-9]*:)(.*)$")


def split_sentences(text: str) -> list[str]:
    """Split *text* after ``.``, ``!`` or ``?`` followed by whitespace."""
    return [part for part in _SENTENCE_BOUNDARY_RE.split(text.strip()) if part]


def _label_matcher(speakers: Sequence[SpeakerDefinition] | None) -> re.Pattern[str]:
    if not speakers:
        return _GENERIC_LABEL_RE
    alternation = "|".join(re.escape(s.label) for s in speakers)
    return re.compile(rf"^({alternation})(.*)$")


@dataclass
class _Layout:
    """Accumulator threaded through the left-to-right traversal."""

    speaker: str | None = None
    lines: list[str] = field(default_factory=list)


def _add_speaker_line(layout: _Layout, label: str, rest: str) -> _Layout:
    if layout.speaker is not None and layout.speaker != label:
        layout.lines.append("")
    sentences = split_sentences(rest)
    if sentences:
        layout.lines.append(f"{label} {sentences[0]}")
        layout.lines.extend(HANGING_INDENT + sentence for sentence in sentences[1:])
    else:
        layout.lines.append(label)
    layout.speaker = label
    return layout


def _add_other_line(layout: _Layout, line: str) -> _Layout:
    if layout.speaker is None:
        layout.lines.append(line)
    else:
        layout.lines.append(HANGING_INDENT + line)
    return layout


def format_structure(
    text: str,
    speakers: Sequence[SpeakerDefinition] | None = None,
) -> str:
    """Re-segment *text* into speaker paragraphs.

    Args:
        text: Rewritten transcript body.
        speakers: Speaker set whose labels mark a new turn.  ``None`` or an
            empty sequence falls back to any ``UPPERCASE:`` label.

    Returns:
        The formatted body, lines joined with ``\\n``.  Lines before the
        first speaker are passed through unindented.
    """
    matcher = _label_matcher(speakers)
    layout = _Layout()

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        match = matcher.match(line)
        if match:
            layout = _add_speaker_line(layout, match.group(1), match.group(2))
        else:
            layout = _add_other_line(layout, line)

    return "\n".join(layout.lines)
