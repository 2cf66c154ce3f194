"""The style-guide rule table.

Each rule is a regular expression plus a replacement, tagged with a
category and a priority.  The table runs in this order:

1. ``structure`` pre-pass (line endings, runs of blank lines),
2. ``discourse``, ``numbers``, ``dates``, ``time``,
3. ``corrections``,
4. ``formatting``, then ``punctuation``,
5. ``structure`` final pass (trailing whitespace, blank lines again).

Punctuation spacing runs after corrections and formatting so that it
cleans up whatever spacing those rewrites leave behind.

Patterns that the validator also needs (``MH_PATTERN``,
``NUMBER_PATTERN``, ...) are module constants so both sides agree on
what counts as a violation.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable, Iterable, Iterator, Mapping

from transcript_std.exceptions import RuleTableError
from transcript_std.models.rules import (
    ComputedReplacement,
    LiteralReplacement,
    ProcessingRule,
    Replacement,
)

# ---------------------------------------------------------------------------
# Shared patterns
# ---------------------------------------------------------------------------

# "Mh" on its own, not already part of "Mh-Mh".
MH_PATTERN = re.compile(r"(?<!mh-)\bmh\b(?!-mh)", re.IGNORECASE)

# Whole-word 1-10 that is not part of a time, decimal, date, range or
# thousands group ("3:00", "1.5", "3/4", "5-10", "1,000").
NUMBER_PATTERN = re.compile(r"(?<![\d.,:/$#-])\b(10|[1-9])\b(?![.,:/-]?\d)(?!%)")

ORDINAL_PATTERN = re.compile(r"\b(\d+)(st|nd|rd|th)\b")

TIME_PATTERN = re.compile(r"\b(\d{1,2}):(\d{2})[ \t]*([ap]\.?m\.?)(?!\w)", re.IGNORECASE)

# A time glued to its am/pm marker, e.g. "3:00pm".
TIME_MISSING_SPACE_PATTERN = re.compile(r"\b\d{1,2}:\d{2}[ap]\.?m\.?(?!\w)", re.IGNORECASE)

_NUMBER_WORDS = ("one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten")

# Bracketed markers in any case, or a bare all-caps marker word.
UNCLEAR_AUDIO_PATTERN = re.compile(
    r"[\[(][ \t]*(?i:illegible|inaudible|unclear|unintelligible)[ \t]*[\])]"
    r"|\b(?:ILLEGIBLE|INAUDIBLE|UNCLEAR)\b"
)

# ---------------------------------------------------------------------------
# Priority bands
# ---------------------------------------------------------------------------

PRIORITY_STRUCTURE_PRE = 0
PRIORITY_DISCOURSE = 10
PRIORITY_NUMBERS = 20
PRIORITY_DATES = 30
PRIORITY_TIME = 40
PRIORITY_CORRECTIONS = 50
PRIORITY_CUSTOM_CORRECTIONS = 55
PRIORITY_FORMATTING = 60
PRIORITY_PUNCTUATION = 70
PRIORITY_STRUCTURE_FINAL = 90


# ---------------------------------------------------------------------------
# Rule construction helpers
# ---------------------------------------------------------------------------


def make_rule(
    name: str,
    pattern: str | re.Pattern[str],
    replacement: str | Callable[[str, tuple], str] | Replacement,
    category: str,
    priority: int,
    description: str = "",
    flags: int = 0,
) -> ProcessingRule:
    """Build a :class:`ProcessingRule`, compiling and wrapping as needed.

    A string *replacement* becomes a :class:`LiteralReplacement`; a
    callable becomes a :class:`ComputedReplacement`.
    """
    compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)
    if isinstance(replacement, (LiteralReplacement, ComputedReplacement)):
        wrapped: Replacement = replacement
    elif isinstance(replacement, str):
        wrapped = LiteralReplacement(replacement)
    else:
        wrapped = ComputedReplacement(replacement)
    return ProcessingRule(
        name=name,
        pattern=compiled,
        replacement=wrapped,
        category=category,  # type: ignore[arg-type]
        priority=priority,
        description=description,
    )


def _spell_number(matched: str, groups: tuple) -> str:
    return _NUMBER_WORDS[int(matched) - 1]


def _keep_case(word: str) -> Callable[[str, tuple], str]:
    """Return a replacement that copies the matched word's capitalization."""

    def replace(matched: str, groups: tuple) -> str:
        if matched.isupper() and len(matched) > 1:
            return word.upper()
        if matched[:1].isupper():
            return word[:1].upper() + word[1:]
        return word

    return replace


def _fixed(text: str) -> Callable[[str, tuple], str]:
    """Return a replacement that ignores the match and yields *text*."""

    def replace(matched: str, groups: tuple) -> str:
        return text

    return replace


# ---------------------------------------------------------------------------
# Default rules
# ---------------------------------------------------------------------------


def _default_rules() -> list[ProcessingRule]:
    i = re.IGNORECASE
    return [
        # --- structure: pre-pass ---------------------------------------
        make_rule("normalize_line_endings", r"\r\n?", "\n", "structure",
                  PRIORITY_STRUCTURE_PRE, "Normalize line endings"),
        make_rule("collapse_blank_lines", r"\n{3,}", "\n\n", "structure",
                  PRIORITY_STRUCTURE_PRE, "Collapse runs of blank lines"),
        # --- discourse markers -----------------------------------------
        make_rule("discourse_markers", MH_PATTERN, "Mh-Mh", "discourse",
                  PRIORITY_DISCOURSE, "Standardize discourse markers"),
        make_rule("mmhm_standardization", r"\b(?:mm+-?hm+|mhm+|mmm+|hmm+)\b", "Mmhm",
                  "discourse", PRIORITY_DISCOURSE, "Standardize mmhm responses", i),
        make_rule("uh_standardization", r"\b(?:uh+|um+)\b", "Uh", "discourse",
                  PRIORITY_DISCOURSE, "Standardize uh fillers", i),
        make_rule("yeah_standardization", r"\b(?:yeah|yah|ya)\b", "Yeah", "discourse",
                  PRIORITY_DISCOURSE, "Standardize yeah responses", i),
        # --- numbers, dates, time --------------------------------------
        make_rule("spell_numbers_1_10", NUMBER_PATTERN, _spell_number, "numbers",
                  PRIORITY_NUMBERS, "Spell out numbers 1-10"),
        make_rule("remove_date_ordinals", ORDINAL_PATTERN, r"\1", "dates",
                  PRIORITY_DATES, "Remove ordinal suffixes from dates"),
        make_rule("time_format", TIME_PATTERN, r"\1:\2 \3", "time",
                  PRIORITY_TIME, "Standardize time format"),
        # --- known mis-transcriptions ----------------------------------
        make_rule("ejaculation_correction", r"\bejaculation\b", _keep_case("ejaculate"),
                  "corrections", PRIORITY_CORRECTIONS, "Correct common mishearing", i),
        make_rule("pacific_specific_correction", r"\bpacific\s+specific\b",
                  _keep_case("specific"), "corrections", PRIORITY_CORRECTIONS,
                  "Remove doubled pacific/specific", i),
        make_rule("pacific_correction",
                  r"\bpacific\b(?!\s+(?:ocean|coast|time|standard|northwest|islands?|rim)\b)",
                  _keep_case("specific"), "corrections", PRIORITY_CORRECTIONS,
                  "Correct pacific to specific", i),
        make_rule("calvary_correction", r"\bcalvary\b", _keep_case("cavalry"),
                  "corrections", PRIORITY_CORRECTIONS, "Correct calvary to cavalry", i),
        # "would of course" is an idiom, not a mis-hearing.
        make_rule("modal_of_correction", r"\b(could|should|would)\s+of\b(?!\s+course\b)",
                  r"\1 have", "corrections", PRIORITY_CORRECTIONS,
                  "Correct could/should/would of", i),
        make_rule("clean_nonsense", r"\bbump hole there has doors\b", "bunch of doors",
                  "corrections", PRIORITY_CORRECTIONS, "Fix garbled phrases", i),
        # --- formatting ------------------------------------------------
        make_rule("unclear_audio_markers", UNCLEAR_AUDIO_PATTERN, "[inaudible]",
                  "formatting", PRIORITY_FORMATTING, "Standardize unclear audio markers"),
        make_rule("interruption_markers", r"\b(but|and|so|well)[ \t]*-{2,}[ \t]*", "\\1\u2014",
                  "formatting", PRIORITY_FORMATTING, "Standardize interruption markers", i),
        make_rule("em_dashes", r"-{2,}", "\u2014", "formatting",
                  PRIORITY_FORMATTING, "Collapse repeated dashes to an em dash"),
        # --- punctuation spacing ---------------------------------------
        # Not before a decimal (".38") or a spaced ellipsis (". . .").
        make_rule("space_before_punctuation", r"(?<=[\w\])\"'])[ \t]+([,.?])(?!\d)(?!\s*\.)",
                  r"\1", "punctuation", PRIORITY_PUNCTUATION, "Remove space before punctuation"),
        make_rule("space_after_comma_question", r"([,?])(?=[A-Za-z])", r"\1 ",
                  "punctuation", PRIORITY_PUNCTUATION, "Add space after commas and question marks"),
        make_rule("space_after_period", r"(?<=[a-z]{2})\.(?=[A-Z][a-z])", ". ",
                  "punctuation", PRIORITY_PUNCTUATION, "Add space after periods"),
        make_rule("single_space_after_punctuation", r"([,.?])[ \t]{2,}(?=\S)", r"\1 ",
                  "punctuation", PRIORITY_PUNCTUATION, "Collapse spacing after punctuation"),
        # --- structure: final pass -------------------------------------
        make_rule("strip_trailing_whitespace", r"[ \t]+$", "", "structure",
                  PRIORITY_STRUCTURE_FINAL, "Strip trailing whitespace", re.MULTILINE),
        make_rule("collapse_blank_lines_final", r"\n{3,}", "\n\n", "structure",
                  PRIORITY_STRUCTURE_FINAL, "Collapse runs of blank lines"),
    ]


def correction_rules(corrections: Mapping[str, str]) -> list[ProcessingRule]:
    """Turn a phrase -> correction mapping into ``corrections`` rules.

    Phrases match case-insensitively on word boundaries; the correction is
    inserted verbatim.
    """
    rules = []
    for index, (phrase, corrected) in enumerate(corrections.items(), start=1):
        rules.append(
            make_rule(
                f"custom_correction_{index}",
                rf"(?<!\w){re.escape(phrase)}(?!\w)",
                _fixed(corrected),
                "corrections",
                PRIORITY_CUSTOM_CORRECTIONS,
                f'Correct "{phrase}" to "{corrected}"',
                re.IGNORECASE,
            )
        )
    return rules


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------


class RuleTable:
    """An immutable, priority-ordered collection of rules.

    Rules are kept sorted by priority; rules with equal priority stay in
    declaration order.

    Raises:
        RuleTableError: If two rules share a name.
    """

    def __init__(self, rules: Iterable[ProcessingRule]) -> None:
        declared = tuple(rules)
        seen: set[str] = set()
        for rule in declared:
            if rule.name in seen:
                raise RuleTableError(f"Duplicate rule name: {rule.name!r}")
            seen.add(rule.name)
        # sorted() is stable, so ties keep declaration order.
        self._rules = tuple(sorted(declared, key=lambda r: r.priority))

    def __iter__(self) -> Iterator[ProcessingRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return any(rule.name == name for rule in self._rules)

    def __repr__(self) -> str:
        return f"RuleTable({len(self._rules)} rules)"

    @property
    def rules(self) -> tuple[ProcessingRule, ...]:
        """Rules in execution order."""
        return self._rules

    @property
    def names(self) -> list[str]:
        return [rule.name for rule in self._rules]

    def get(self, name: str) -> ProcessingRule:
        """Return the rule called *name*.

        Raises:
            KeyError: If no such rule exists.
        """
        for rule in self._rules:
            if rule.name == name:
                return rule
        raise KeyError(name)

    def subset(
        self,
        names: Iterable[str] | None = None,
        categories: Iterable[str] | None = None,
    ) -> RuleTable:
        """Return a new table restricted to the given names and/or categories."""
        wanted_names = set(names) if names is not None else None
        wanted_categories = set(categories) if categories is not None else None
        return RuleTable(
            rule
            for rule in self._rules
            if (wanted_names is None or rule.name in wanted_names)
            and (wanted_categories is None or rule.category in wanted_categories)
        )

    def extended(self, rules: Iterable[ProcessingRule]) -> RuleTable:
        """Return a new table with *rules* appended."""
        return RuleTable((*self._rules, *rules))


def build_rule_table(extra_corrections: Mapping[str, str] | None = None) -> RuleTable:
    """Build the style-guide rule table.

    Args:
        extra_corrections: Installation-specific phrase corrections,
            applied after the built-in corrections.
    """
    table = RuleTable(_default_rules())
    if extra_corrections:
        table = table.extended(correction_rules(extra_corrections))
    return table


@functools.lru_cache(maxsize=1)
def default_rule_table() -> RuleTable:
    """Return the shared built-in rule table (constructed once)."""
    return build_rule_table()
