"""Rewrite engine: applies a rule table to transcript text.

The engine makes a single sequential pass over the table in priority
order.  Each rule is evaluated against the text as left by the rules
before it; no rule is re-run after a later one fires.  A rule is recorded
in the ledger only when its substitution actually changed the text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from transcript_std.exceptions import RuleApplicationError
from transcript_std.models.rules import ProcessingRule, RuleApplication
from transcript_std.rules import RuleTable, default_rule_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteResult:
    """Output of one engine run.

    Attributes:
        processed_text: Text after every rule has run.
        applied_rules: Rules that changed the text, in execution order.
    """

    processed_text: str
    applied_rules: list[RuleApplication] = field(default_factory=list)

    @property
    def total_matches(self) -> int:
        """Sum of match counts across all applied rules."""
        return sum(application.match_count for application in self.applied_rules)


def _substitute(rule: ProcessingRule, text: str) -> tuple[str, int]:
    """Run *rule* over *text*, returning ``(new_text, match_count)``.

    Raises:
        RuleApplicationError: If the replacement cannot be produced.
    """
    replacement = rule.replacement

    if replacement.kind == "literal":
        try:
            return rule.pattern.subn(replacement.text, text)
        except (re.error, IndexError) as exc:
            raise RuleApplicationError(rule.name, f"bad replacement template: {exc}") from exc

    def _call(match: re.Match[str]) -> str:
        try:
            value = replacement.fn(match.group(0), match.groups())
        except Exception as exc:
            raise RuleApplicationError(
                rule.name, f"replacement raised {type(exc).__name__}: {exc}"
            ) from exc
        if not isinstance(value, str):
            raise RuleApplicationError(
                rule.name, f"replacement returned {type(value).__name__}, expected str"
            )
        return value

    return rule.pattern.subn(_call, text)


class RewriteEngine:
    """Applies a :class:`~transcript_std.rules.RuleTable` to text.

    The table is fixed at construction, so one engine can serve any number
    of concurrent callers.

    Args:
        rule_table: Rules to apply.  Defaults to the shared built-in table.
    """

    def __init__(self, rule_table: RuleTable | None = None) -> None:
        self.rule_table = rule_table if rule_table is not None else default_rule_table()

    def apply(self, text: str) -> RewriteResult:
        """Rewrite *text* with every rule in priority order.

        Args:
            text: Line-delimited transcript text.

        Returns:
            A :class:`RewriteResult` with the rewritten text and the ledger
            of rules that changed it.

        Raises:
            RuleApplicationError: If any rule's replacement fails.  No
                partial result is returned.
        """
        current = text
        applied: list[RuleApplication] = []

        for rule in self.rule_table:
            updated, match_count = _substitute(rule, current)
            if match_count == 0 or updated == current:
                continue
            logger.debug("Rule %s fired (%d match(es))", rule.name, match_count)
            applied.append(RuleApplication(rule=rule, match_count=match_count))
            current = updated

        logger.info(
            "Applied %d of %d rule(s), %d match(es) total",
            len(applied),
            len(self.rule_table),
            sum(a.match_count for a in applied),
        )
        return RewriteResult(processed_text=current, applied_rules=applied)


def apply_rules(text: str, rule_table: RuleTable | None = None) -> RewriteResult:
    """Rewrite *text* with *rule_table* (default: the built-in table).

    Convenience wrapper around :meth:`RewriteEngine.apply`.
    """
    return RewriteEngine(rule_table).apply(text)
