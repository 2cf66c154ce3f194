"""Speaker label definitions.

A transcript uses either the standard ``Q:``/``A:`` pair or a custom list
such as ``MAN:``/``WOMAN:``.  Labels must end with a colon and be unique
within a set.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, field_validator


class SpeakerDefinition(BaseModel):
    """A speaker label and the role it denotes.

    Attributes:
        label: Literal line prefix marking the speaker's turn, e.g. ``"Q:"``.
        description: Free-text role, e.g. ``"Interviewer"``.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    description: str = ""

    @field_validator("label")
    @classmethod
    def _label_ends_with_colon(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2 or not value.endswith(":"):
            raise ValueError(f"speaker label must end with a colon: {value!r}")
        return value


STANDARD_SPEAKERS: tuple[SpeakerDefinition, ...] = (
    SpeakerDefinition(label="Q:", description="Interviewer"),
    SpeakerDefinition(label="A:", description="Interviewee"),
)


def build_speaker_set(
    definitions: Iterable[SpeakerDefinition | dict],
) -> tuple[SpeakerDefinition, ...]:
    """Validate a custom speaker list.

    Args:
        definitions: :class:`SpeakerDefinition` instances or plain
            ``{"label": ..., "description": ...}`` dicts.

    Returns:
        The speakers as a tuple, in the given order.

    Raises:
        ValueError: If two speakers share a label.
        pydantic.ValidationError: If a dict is not a valid definition.
    """
    speakers = tuple(
        d if isinstance(d, SpeakerDefinition) else SpeakerDefinition.model_validate(d)
        for d in definitions
    )
    seen: set[str] = set()
    for speaker in speakers:
        if speaker.label in seen:
            raise ValueError(f"Duplicate speaker label: {speaker.label!r}")
        seen.add(speaker.label)
    return speakers


def parse_speaker_spec(spec: str) -> SpeakerDefinition:
    """Parse ``"LABEL=Description"`` into a :class:`SpeakerDefinition`.

    A missing trailing colon on the label is added, so ``"MAN=Witness"``
    and ``"MAN:=Witness"`` are equivalent.  The description is optional.

    Raises:
        ValueError: If the label part is empty.
    """
    label, _, description = spec.partition("=")
    label = label.strip()
    if not label:
        raise ValueError(f"Speaker spec has no label: {spec!r}")
    if not label.endswith(":"):
        label = f"{label}:"
    return SpeakerDefinition(label=label, description=description.strip() or "Custom Speaker")
