"""Unit tests for the rewrite engine.

Tests cover: the canonical round-trip line, ledger accuracy, priority and
declaration ordering, single-pass semantics, computed replacements,
failure reporting, and each built-in rule category.
"""

from __future__ import annotations

import pytest

from transcript_std.engine import RewriteEngine, apply_rules
from transcript_std.exceptions import RuleApplicationError
from transcript_std.rules import RuleTable, build_rule_table, default_rule_table, make_rule


def _applied_names(text: str) -> list[str]:
    return [a.rule.name for a in apply_rules(text).applied_rules]


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


class TestRoundTrip:
    """The reference example line."""

    def test_mh_time_and_ordinal_line(self) -> None:
        """Mh, 3:00pm and 2nd are all standardized; 3 inside the time is kept."""
        result = apply_rules("Q: Mh, I was there at 3:00pm on the 2nd.")

        assert result.processed_text == "Q: Mh-Mh, I was there at 3:00 pm on the 2."

    def test_round_trip_ledger(self) -> None:
        """Exactly the three rules that changed the line are recorded, in order."""
        result = apply_rules("Q: Mh, I was there at 3:00pm on the 2nd.")

        assert [a.rule.name for a in result.applied_rules] == [
            "discourse_markers",
            "remove_date_ordinals",
            "time_format",
        ]
        assert all(a.match_count == 1 for a in result.applied_rules)
        assert result.total_matches == 3

    def test_deterministic(self) -> None:
        """Same input, same output and ledger."""
        text = "Q: uh, I saw 3 guys at 10:15am on the 1st -- yeah.\n\n\n\nA: mhm"

        first = apply_rules(text)
        second = apply_rules(text)

        assert first.processed_text == second.processed_text
        assert [(a.rule.name, a.match_count) for a in first.applied_rules] == [
            (a.rule.name, a.match_count) for a in second.applied_rules
        ]


# ---------------------------------------------------------------------------
# Ledger accuracy
# ---------------------------------------------------------------------------


class TestLedger:
    """A rule is recorded only when it changes the text."""

    def test_identity_replacement_not_recorded(self) -> None:
        """A rule that matches but rewrites to the same text is not applied."""
        table = RuleTable([make_rule("noop", r"Q:", "Q:", "formatting", 10)])

        result = RewriteEngine(table).apply("Q: Hello.\nQ: Again.")

        assert result.processed_text == "Q: Hello.\nQ: Again."
        assert result.applied_rules == []

    def test_already_spaced_time_not_recorded(self) -> None:
        """'3:00 pm' matches the time rule but is already standard."""
        assert "time_format" not in _applied_names("Q: It was 3:00 pm.")

    def test_already_standard_mmhm_not_recorded(self) -> None:
        """'Mmhm' is already standard and leaves no ledger entry."""
        assert "mmhm_standardization" not in _applied_names("A: Mmhm.")

    def test_match_count_counts_every_occurrence(self) -> None:
        """Match count is the number of matches before substitution."""
        result = apply_rules("A: uh, um, uhh, I think so.")

        uh = [a for a in result.applied_rules if a.rule.name == "uh_standardization"]
        assert len(uh) == 1
        assert uh[0].match_count == 3
        assert result.processed_text == "A: Uh, Uh, Uh, I think so."

    def test_no_rules_fire_on_clean_text(self) -> None:
        """Clean text passes through with an empty ledger."""
        result = apply_rules("Q: Where were you?\nA: At home.")

        assert result.applied_rules == []
        assert result.total_matches == 0


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    """Priority order, declaration-order ties, single pass."""

    def test_lower_priority_number_runs_first(self) -> None:
        """a->b at 10 runs before b->c at 20, so 'a' ends as 'c'."""
        table = RuleTable(
            [
                make_rule("b_to_c", "b", "c", "formatting", 20),
                make_rule("a_to_b", "a", "b", "formatting", 10),
            ]
        )

        result = RewriteEngine(table).apply("a")

        assert result.processed_text == "c"
        assert [a.rule.name for a in result.applied_rules] == ["a_to_b", "b_to_c"]

    def test_reversed_priorities_change_outcome(self) -> None:
        """b->c at 10 sees no 'b' yet; a->b at 20 then leaves 'b'."""
        table = RuleTable(
            [
                make_rule("b_to_c", "b", "c", "formatting", 10),
                make_rule("a_to_b", "a", "b", "formatting", 20),
            ]
        )

        assert RewriteEngine(table).apply("a").processed_text == "b"

    def test_ties_keep_declaration_order(self) -> None:
        """Equal priorities run in declaration order."""
        first = make_rule("x_to_y", "x", "y", "formatting", 5)
        second = make_rule("y_to_z", "y", "z", "formatting", 5)

        assert RewriteEngine(RuleTable([first, second])).apply("x").processed_text == "z"
        assert RewriteEngine(RuleTable([second, first])).apply("x").processed_text == "y"

    def test_later_rule_does_not_retrigger_earlier_rule(self) -> None:
        """Single sequential pass, not a fixed point."""
        table = RuleTable(
            [
                make_rule("b_to_c", "b", "c", "formatting", 10),
                make_rule("a_to_b", "a", "b", "formatting", 20),
            ]
        )

        result = RewriteEngine(table).apply("ab")

        assert result.processed_text == "bc"

    def test_rules_see_cumulative_text(self) -> None:
        """Punctuation spacing runs after corrections and sees their output."""
        result = apply_rules("A: I would of ,maybe.")

        assert result.processed_text == "A: I would have, maybe."


# ---------------------------------------------------------------------------
# Computed replacements and failures
# ---------------------------------------------------------------------------


class TestComputedReplacement:
    """Callback replacements receive the match and its groups."""

    def test_receives_match_and_groups(self) -> None:
        """The callback gets the matched text and its groups."""
        calls: list[tuple[str, tuple]] = []

        def replace(matched: str, groups: tuple) -> str:
            calls.append((matched, groups))
            return groups[1] + groups[0]

        table = RuleTable([make_rule("swap", r"(\d)-(\w)", replace, "formatting", 1)])

        result = RewriteEngine(table).apply("1-a and 2-b")

        assert result.processed_text == "a1 and b2"
        assert calls == [("1-a", ("1", "a")), ("2-b", ("2", "b"))]

    def test_raising_callback_names_rule(self) -> None:
        """A raising callback is wrapped in RuleApplicationError naming the rule."""
        def explode(matched: str, groups: tuple) -> str:
            raise KeyError(matched)

        table = RuleTable([make_rule("exploder", r"x", explode, "formatting", 1)])

        with pytest.raises(RuleApplicationError, match="exploder") as exc_info:
            RewriteEngine(table).apply("x")

        assert exc_info.value.rule_name == "exploder"
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_non_string_result_is_an_error(self) -> None:
        """A callback returning a non-string must raise RuleApplicationError."""
        table = RuleTable([make_rule("bad_type", r"x", lambda m, g: 42, "formatting", 1)])

        with pytest.raises(RuleApplicationError, match="bad_type"):
            RewriteEngine(table).apply("x")

    def test_bad_template_group_is_an_error(self) -> None:
        """A template naming a missing group must raise RuleApplicationError."""
        table = RuleTable([make_rule("bad_group", r"(x)", r"\5", "formatting", 1)])

        with pytest.raises(RuleApplicationError) as exc_info:
            RewriteEngine(table).apply("x")

        assert exc_info.value.rule_name == "bad_group"

    def test_failure_only_when_rule_matches(self) -> None:
        """A broken callback that never matches does not fail the run."""
        table = RuleTable([make_rule("idle", r"zzz", lambda m, g: 1 / 0, "formatting", 1)])

        assert RewriteEngine(table).apply("abc").processed_text == "abc"


# ---------------------------------------------------------------------------
# Structural cleanup
# ---------------------------------------------------------------------------


class TestStructure:
    """Whitespace rules and their idempotence."""

    def test_collapses_blank_line_runs(self) -> None:
        """Runs of blank lines collapse to one."""
        assert apply_rules("Q: Hi.\n\n\n\nA: Yo.").processed_text == "Q: Hi.\n\nA: Yo."

    def test_strips_trailing_whitespace(self) -> None:
        """Trailing spaces and tabs are removed."""
        assert apply_rules("Q: Hi.   \nA: Yo.\t").processed_text == "Q: Hi.\nA: Yo."

    def test_whitespace_only_lines_collapse_in_final_pass(self) -> None:
        """Whitespace-only lines collapse once stripped."""
        text = "Q: Hi.\n  \n\t\n \nA: Yo."

        assert apply_rules(text).processed_text == "Q: Hi.\n\nA: Yo."

    def test_normalizes_crlf(self) -> None:
        """CRLF line endings become LF."""
        assert apply_rules("Q: Hi.\r\nA: Yo.").processed_text == "Q: Hi.\nA: Yo."

    def test_structural_cleanup_is_idempotent(self) -> None:
        """A second cleanup pass changes nothing."""
        table = default_rule_table().subset(
            names=["collapse_blank_lines", "strip_trailing_whitespace", "collapse_blank_lines_final"]
        )
        engine = RewriteEngine(table)
        text = "Q: a  \n\n\n\n  \nA: b\t\n\n\n"

        once = engine.apply(text).processed_text
        twice = engine.apply(once)

        assert twice.processed_text == once
        assert twice.applied_rules == []


# ---------------------------------------------------------------------------
# Built-in rule categories
# ---------------------------------------------------------------------------


class TestDiscourse:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A: mm-hm.", "A: Mmhm."),
            ("A: mhm.", "A: Mmhm."),
            ("A: hmm.", "A: Mmhm."),
            ("A: mmm.", "A: Mmhm."),
            ("A: um, no.", "A: Uh, no."),
            ("A: umm, no.", "A: Uh, no."),
            ("A: yah.", "A: Yeah."),
            ("A: ya.", "A: Yeah."),
            ("A: mh.", "A: Mh-Mh."),
        ],
    )
    def test_variants(self, raw: str, expected: str) -> None:
        """Filler variants are rewritten to their standard spelling."""
        assert apply_rules(raw).processed_text == expected

    def test_mh_mh_is_left_alone(self) -> None:
        """'Mh-Mh' is not rewritten again."""
        result = apply_rules("A: Mh-Mh.")

        assert result.processed_text == "A: Mh-Mh."
        assert result.applied_rules == []


class TestNumbers:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A: I saw 3 men.", "A: I saw three men."),
            ("A: About 10 of them.", "A: About ten of them."),
            ("A: 1 or 2.", "A: one or two."),
            ("A: I saw 11 men.", "A: I saw 11 men."),
            ("A: It was 1.5 miles.", "A: It was 1.5 miles."),
            ("A: It cost 1,000 dollars.", "A: It cost 1,000 dollars."),
            ("A: On 3/4 I left.", "A: On 3/4 I left."),
            ("A: At 9:30 am.", "A: At 9:30 am."),
        ],
    )
    def test_spelling(self, raw: str, expected: str) -> None:
        """Whole-word 1-10 is spelled out and larger figures are kept."""
        assert apply_rules(raw).processed_text == expected


class TestDatesAndTimes:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A: On the 1st.", "A: On the 1."),
            ("A: The 23rd.", "A: The 23."),
            ("A: The 11th.", "A: The 11."),
            ("A: At 10:15am.", "A: At 10:15 am."),
            ("A: At 10:15   PM.", "A: At 10:15 PM."),
            ("A: At 7:05p.m. exactly.", "A: At 7:05 p.m. exactly."),
        ],
    )
    def test_normalization(self, raw: str, expected: str) -> None:
        """Ordinals are stripped and am/pm gets one space."""
        assert apply_rules(raw).processed_text == expected


class TestCorrections:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A: I could of gone.", "A: I could have gone."),
            ("A: Should of known.", "A: Should have known."),
            ("A: It would of course be fine.", "A: It would of course be fine."),
            ("A: The calvary came.", "A: The cavalry came."),
            ("A: Be more pacific.", "A: Be more specific."),
            ("A: Be pacific specific.", "A: Be specific."),
            ("A: By the Pacific Ocean.", "A: By the Pacific Ocean."),
            ("A: There was ejaculation.", "A: There was ejaculate."),
            ("A: A bump hole there has doors.", "A: A bunch of doors."),
        ],
    )
    def test_builtin(self, raw: str, expected: str) -> None:
        """Known mis-hearings are corrected and idioms kept."""
        assert apply_rules(raw).processed_text == expected

    def test_capitalization_is_kept(self) -> None:
        """A capitalized word is corrected to a capitalized word."""
        assert apply_rules("A: Calvary.").processed_text == "A: Cavalry."

    def test_installation_corrections(self) -> None:
        """Configured corrections are applied and recorded."""
        table = build_rule_table({"red rum": "murder"})

        result = RewriteEngine(table).apply("A: He said Red Rum.")

        assert result.processed_text == "A: He said murder."
        assert "custom_correction_1" in [a.rule.name for a in result.applied_rules]


class TestFormatting:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A: And -- then he ran.", "A: And—then he ran."),
            ("A: Well--I don't know.", "A: Well—I don't know."),
            ("A: Wait---what?", "A: Wait—what?"),
            ("A: He said [unclear].", "A: He said [inaudible]."),
            ("A: He said (Illegible).", "A: He said [inaudible]."),
            ("A: He said INAUDIBLE.", "A: He said [inaudible]."),
            ("A: It was unclear.", "A: It was unclear."),
        ],
    )
    def test_markers(self, raw: str, expected: str) -> None:
        """Dashes and unclear-audio markers are standardized."""
        assert apply_rules(raw).processed_text == expected

    def test_inaudible_marker_is_stable(self) -> None:
        """'[inaudible]' is not rewritten again."""
        assert "unclear_audio_markers" not in _applied_names("A: He said [inaudible].")


class TestPunctuation:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A: Yes ,sir.", "A: Yes, sir."),
            ("A: Really?Yes .", "A: Really? Yes."),
            ("A: I left.Then I came back.", "A: I left. Then I came back."),
            ("A: No,  sir.", "A: No, sir."),
            ("A: At 3:00 p.m. sharp.", "A: At 3:00 p.m. sharp."),
            ("A: I have a .38 revolver.", "A: I have a .38 revolver."),
            ("A: He said . . . nothing.", "A: He said . . . nothing."),
        ],
    )
    def test_spacing(self, raw: str, expected: str) -> None:
        """Spacing around punctuation is fixed without splitting decimals or ellipses."""
        assert apply_rules(raw).processed_text == expected
