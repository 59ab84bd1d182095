"""Declarative match rules and the generic first-match runner.

A rule pairs a compiled pattern (the predicate) with the capture groups that
hold the value and, optionally, its unit (the extractor). Rules for one
target are stored in priority order, most specific first; the runner returns
the first rule that matches.
"""

import re
from typing import Optional, Pattern, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchRule:
    """A single prioritized pattern with its value extractor."""
    name: str
    pattern: Pattern[str]
    value_group: int = 1
    unit: Optional[str] = None
    unit_group: Optional[int] = None

    def apply(self, text: str) -> Optional["RuleMatch"]:
        match = self.pattern.search(text)
        if match is None:
            return None
        unit = self.unit
        if self.unit_group is not None and match.group(self.unit_group):
            unit = match.group(self.unit_group).lower()
        return RuleMatch(
            rule_name=self.name,
            value_text=match.group(self.value_group),
            unit=unit,
            start=match.start(),
            end=match.end(),
        )


@dataclass(frozen=True)
class RuleMatch:
    """Where and what a rule matched."""
    rule_name: str
    value_text: str
    unit: Optional[str]
    start: int
    end: int


def rule(
    name: str,
    pattern: str,
    value_group: int = 1,
    unit: Optional[str] = None,
    unit_group: Optional[int] = None,
) -> MatchRule:
    """Build a case-insensitive MatchRule."""
    return MatchRule(
        name=name,
        pattern=re.compile(pattern, re.IGNORECASE),
        value_group=value_group,
        unit=unit,
        unit_group=unit_group,
    )


def first_match(rules: Sequence[MatchRule], text: str) -> Optional[RuleMatch]:
    """Return the match of the highest-priority rule that fires on text."""
    for candidate in rules:
        match = candidate.apply(text)
        if match is not None:
            return match
    return None


def word_pattern(term: str) -> Pattern[str]:
    """Whole-word, case-insensitive pattern for a dictionary term."""
    return re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE)
