"""Data models for text-normalization rules.

These are frozen stdlib dataclasses: the rule table is built once at
startup and shared read-only by every request.

- :class:`LiteralReplacement` / :class:`ComputedReplacement` -- the two
  replacement variants, tagged by ``kind`` so the engine can dispatch
  without inspecting callables.
- :class:`ProcessingRule` -- a named pattern-to-replacement rewrite.
- :class:`RuleApplication` -- ledger entry for a rule that changed text.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, Union

RuleCategory = Literal[
    "discourse",
    "numbers",
    "dates",
    "time",
    "corrections",
    "formatting",
    "punctuation",
    "structure",
]

# Canonical order, used when grouping rules for display.
RULE_CATEGORIES: tuple[str, ...] = (
    "structure",
    "discourse",
    "numbers",
    "dates",
    "time",
    "corrections",
    "formatting",
    "punctuation",
)

ReplacementFn = Callable[[str, tuple], str]


@dataclass(frozen=True)
class LiteralReplacement:
    """A substitution template, which may reference groups as ``\\1``.

    Attributes:
        text: The template passed to :meth:`re.Pattern.subn`.
    """

    text: str
    kind: Literal["literal"] = field(default="literal", init=False)


@dataclass(frozen=True)
class ComputedReplacement:
    """A replacement computed from the match.

    Attributes:
        fn: Called as ``fn(matched_text, groups)`` where *groups* is the
            tuple of captured groups (``None`` for groups that did not
            participate).  Must return a string.
    """

    fn: ReplacementFn
    kind: Literal["computed"] = field(default="computed", init=False)


Replacement = Union[LiteralReplacement, ComputedReplacement]


@dataclass(frozen=True)
class ProcessingRule:
    """A single pattern-to-replacement rewrite.

    Attributes:
        name: Identifier, unique within a rule table.
        pattern: Compiled pattern; every non-overlapping match is replaced.
        replacement: Literal template or computed replacement.
        category: One of :data:`RULE_CATEGORIES`.
        priority: Rules run in ascending priority; ties keep declaration
            order.
        description: Human-readable summary used in processing reports.
    """

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement
    category: RuleCategory
    priority: int
    description: str = ""

    def __post_init__(self) -> None:
        if self.category not in RULE_CATEGORIES:
            raise ValueError(
                f"Rule {self.name!r} has unknown category {self.category!r}"
            )


@dataclass(frozen=True)
class RuleApplication:
    """Record of a rule that altered the text during one engine run.

    Attributes:
        rule: The rule that fired.
        match_count: Non-overlapping matches found before substitution.
    """

    rule: ProcessingRule
    match_count: int
