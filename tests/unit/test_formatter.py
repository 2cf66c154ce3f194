"""Unit tests for the speaker-paragraph formatter."""

from __future__ import annotations

from transcript_std.formatter import HANGING_INDENT, format_structure, split_sentences
from transcript_std.models.speakers import STANDARD_SPEAKERS, build_speaker_set, parse_speaker_spec


class TestSplitSentences:
    def test_splits_on_terminal_punctuation(self) -> None:
        """Sentences split after '.', '?' and '!'."""
        assert split_sentences("One. Two? Three!") == ["One.", "Two?", "Three!"]

    def test_no_split_without_whitespace(self) -> None:
        """Punctuation not followed by whitespace does not split."""
        assert split_sentences("At 3:00 p.m.sharp") == ["At 3:00 p.m.sharp"]

    def test_empty(self) -> None:
        """Whitespace-only text has no sentences."""
        assert split_sentences("   ") == []


class TestFormatStructure:
    def test_hanging_indent_and_turn_break(self) -> None:
        """Later sentences are indented and turns are separated by a blank line."""
        text = "Q: Hello there. How are you?\nA: Fine."

        assert format_structure(text, STANDARD_SPEAKERS) == (
            "Q: Hello there.\n     How are you?\n\nA: Fine."
        )

    def test_indent_is_five_spaces(self) -> None:
        """The hanging indent is five spaces."""
        assert HANGING_INDENT == "     "

    def test_same_speaker_twice_has_no_blank_line(self) -> None:
        """Consecutive lines from one speaker are not separated."""
        text = "Q: First.\nQ: Second."

        assert format_structure(text, STANDARD_SPEAKERS) == "Q: First.\nQ: Second."

    def test_empty_lines_are_dropped(self) -> None:
        """Blank input lines do not survive formatting."""
        text = "\n\nQ: Hi.\n\n\n\nA: Yo.\n\n"

        assert format_structure(text, STANDARD_SPEAKERS) == "Q: Hi.\n\nA: Yo."

    def test_continuation_line_is_indented(self) -> None:
        """An unlabelled line after a speaker line gets the hanging indent."""
        text = "A: I went home\nand then I slept."

        assert format_structure(text, STANDARD_SPEAKERS) == (
            "A: I went home\n     and then I slept."
        )

    def test_lines_before_first_speaker_are_not_indented(self) -> None:
        """Text before any speaker is kept flush left."""
        text = "Preamble line.\nQ: Hi."

        assert format_structure(text, STANDARD_SPEAKERS) == "Preamble line.\nQ: Hi."

    def test_label_without_text(self) -> None:
        """A bare label is kept as its own line."""
        assert format_structure("Q:\nA: Yes.", STANDARD_SPEAKERS) == "Q:\n\nA: Yes."

    def test_surrounding_whitespace_stripped(self) -> None:
        """Leading and trailing whitespace is removed from speaker lines."""
        assert format_structure("   Q:   Hi.   ", STANDARD_SPEAKERS) == "Q: Hi."

    def test_custom_speaker_labels(self) -> None:
        """Custom labels are laid out like Q:/A:."""
        speakers = build_speaker_set(
            [parse_speaker_spec("MAN=Male witness"), parse_speaker_spec("WOMAN=Female witness")]
        )
        text = "MAN: I saw it. It was late.\nWOMAN: Me too."

        assert format_structure(text, speakers) == (
            "MAN: I saw it.\n     It was late.\n\nWOMAN: Me too."
        )

    def test_unconfigured_label_is_a_continuation(self) -> None:
        """With Q:/A: configured, 'MAN:' is just text."""
        text = "Q: Who?\nMAN: Me."

        assert format_structure(text, STANDARD_SPEAKERS) == "Q: Who?\n     MAN: Me."

    def test_no_speakers_falls_back_to_generic_labels(self) -> None:
        """Without a speaker set any UPPERCASE: label starts a turn."""
        text = "DET: Name? Spell it.\nW1: Bob."

        assert format_structure(text) == "DET: Name?\n     Spell it.\n\nW1: Bob."

    def test_empty_speaker_set_falls_back_to_generic_labels(self) -> None:
        """An empty speaker set behaves like no speaker set."""
        assert format_structure("Q: a. b.", ()) == "Q: a.\n     b."

    def test_empty_text(self) -> None:
        """Empty text formats to an empty string."""
        assert format_structure("", STANDARD_SPEAKERS) == ""
