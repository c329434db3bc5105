"""
Matcher — every occurrence of every rule, deduplicated by exact span.

Order of evaluation:
  1. Phrase rules: critical, then warning, then mild (declaration order within each)
  2. Pattern rules in table order

A span (start, end) can be claimed once per call. A later rule hitting the
identical span is dropped. Nested or overlapping spans are NOT suppressed:
"now" inside "buy now" still counts, because its span differs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union

from spamscore.rules import DEFAULT_RULES, PatternRule, PhraseRule, RuleTable
from spamscore.severity import Severity, match_severity


@dataclass(frozen=True)
class Span:
    start: int
    end: int          # Exclusive

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True)
class Match:
    """A single scored occurrence of a rule in the analyzed text."""
    text: str         # Exact matched substring
    weight: float     # Rule weight x context multiplier
    tier: Severity    # From the rule weight, never the multiplied weight
    span: Span
    rule: str         # Phrase category or pattern description

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "weight": self.weight,
            "tier": self.tier.value,
            "span": {"start": self.span.start, "end": self.span.end},
            "rule": self.rule,
        }


Rule = Union[PhraseRule, PatternRule]


def _compiled(rule: Rule) -> re.Pattern:
    return rule.regex if isinstance(rule, PhraseRule) else rule.pattern


def _scan(
    text: str,
    rules: Iterable[Rule],
    claimed: set[tuple[int, int]],
    out: list[Match],
) -> None:
    for rule in rules:
        for m in _compiled(rule).finditer(text):
            key = (m.start(), m.end())
            if key in claimed:
                continue
            claimed.add(key)
            out.append(Match(
                text=m.group(0),
                weight=rule.weight,
                tier=match_severity(rule.weight),
                span=Span(*key),
                rule=rule.label,
            ))


def find_matches(text: str, rules: RuleTable = DEFAULT_RULES) -> list[Match]:
    """
    Find every rule occurrence in text.

    Weights are raw rule weights; the scorer applies the context multiplier.
    Returned matches are sorted by span start (stable, so same-start matches
    keep emission order).
    """
    claimed: set[tuple[int, int]] = set()
    matches: list[Match] = []

    _scan(text, rules.phrase_rules, claimed, matches)
    _scan(text, rules.patterns, claimed, matches)

    matches.sort(key=lambda m: m.span.start)
    return matches
